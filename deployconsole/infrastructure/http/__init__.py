"""
HTTP Adapters

Architectural Intent:
- httpx-based adapters for the orchestration REST API
"""

from deployconsole.infrastructure.http.deployment_api_client import HttpDeploymentClient

__all__ = ["HttpDeploymentClient"]
