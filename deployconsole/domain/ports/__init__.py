"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the console needs, adapters implement how
"""

from deployconsole.domain.ports.deployment_client_port import DeploymentClientPort
from deployconsole.domain.ports.notification_surface_port import NotificationSurfacePort

__all__ = [
    "DeploymentClientPort",
    "NotificationSurfacePort",
]
