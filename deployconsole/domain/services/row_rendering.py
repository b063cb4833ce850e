"""
Row Rendering Service

Architectural Intent:
- Pure mapping from a fetched deployment list to display rows
- Each row captures the scale targets at render time, so an action issued
  from a row always uses the replica count the operator saw
- No toolkit or I/O dependency; fully testable without a terminal
"""

from dataclasses import dataclass
from typing import Iterable

from deployconsole.domain.entities.deployment import Deployment


@dataclass(frozen=True)
class DeploymentRow:
    name: str
    replicas: int

    @property
    def scale_up_target(self) -> int:
        return self.replicas + 1

    @property
    def scale_down_target(self) -> int:
        # No floor at zero; the API rejects invalid counts.
        return self.replicas - 1

    @property
    def summary(self) -> str:
        return f"Replicas: {self.replicas}"


def build_rows(deployments: Iterable[Deployment]) -> list[DeploymentRow]:
    """Map deployments to rows, preserving server order."""
    return [DeploymentRow(name=d.name, replicas=d.replicas) for d in deployments]
