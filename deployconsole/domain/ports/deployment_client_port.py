"""
Deployment Client Port

Architectural Intent:
- Protocol for the namespace-scoped orchestration API
- Every operation returns an Outcome; implementations never raise for
  transport or server failures
- Implementations hold no deployment state
"""

from typing import Protocol, runtime_checkable

from deployconsole.domain.entities.deployment import DeploymentSpec
from deployconsole.domain.value_objects.outcome import Outcome


@runtime_checkable
class DeploymentClientPort(Protocol):
    """Port for reading and mutating deployments in one namespace."""

    async def list_deployments(self, namespace: str) -> Outcome:
        """Fetch all deployments; Success payload is a tuple of Deployment in server order."""
        ...

    async def create_deployment(self, namespace: str, spec: DeploymentSpec) -> Outcome:
        """Submit a new deployment built from spec."""
        ...

    async def scale_deployment(
        self, namespace: str, name: str, target_replicas: int
    ) -> Outcome:
        """Set the replica count. Negative targets are sent unchanged."""
        ...

    async def delete_deployment(self, namespace: str, name: str) -> Outcome:
        """Delete a deployment by name."""
        ...
