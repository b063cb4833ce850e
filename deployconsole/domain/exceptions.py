"""
Domain Exceptions

Architectural Intent:
- Two failure kinds exist when talking to the orchestration API
- TransportError: the request never produced a usable response (network, parsing)
- ServerError: the API answered with a non-success status
- Both are converted to Failure outcomes at the client boundary and never escape it
"""

from typing import Optional


class DeploymentClientError(Exception):
    """Base error for orchestration API calls."""


class TransportError(DeploymentClientError):
    """Network unreachable, connection dropped, or response body unparseable."""


class ServerError(DeploymentClientError):
    """Non-2xx response from the orchestration API."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"HTTP {status_code}{detail}")
