"""
Deployment Module

Architectural Intent:
- Deployment is a read-only snapshot of a server-owned resource
- DeploymentSpec is the write-only value an operator builds to request a new deployment
- Neither type is cached across render passes; every render reflects a fresh fetch

Design Decisions:
- The list endpoint transports replica counts as text, so parsing happens in from_dict()
- Requests and limits are always identical because only one pair of quantities is collected
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

API_VERSION = "apps/v1"
KIND = "Deployment"
CONTAINER_PORT = 80


@dataclass(frozen=True)
class Deployment:
    """Snapshot of one deployment as returned by the list endpoint."""

    name: str
    replicas: int

    @staticmethod
    def from_dict(data: Any) -> "Deployment":
        """Parse a list entry such as {"name": "web", "replicas": "3"}.

        Raises ValueError when the entry is not a mapping, has no name, or
        carries a replica count that is not a non-negative integer.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Deployment entry must be an object, got {type(data).__name__}")
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Deployment entry has no name")
        raw_replicas = data.get("replicas")
        if isinstance(raw_replicas, bool):
            raise ValueError(f"Invalid replica count for {name}: {raw_replicas!r}")
        try:
            replicas = int(str(raw_replicas).strip())
        except ValueError:
            raise ValueError(
                f"Invalid replica count for {name}: {raw_replicas!r}"
            ) from None
        if replicas < 0:
            raise ValueError(f"Invalid replica count for {name}: {replicas} is negative")
        return Deployment(name=name, replicas=replicas)


@dataclass(frozen=True)
class DeploymentSpec:
    """Operator-entered fields for a new deployment."""

    name: str
    image: str
    replicas: int
    cpu_request: str
    memory_request: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.image:
            raise ValueError("image cannot be empty")
        if isinstance(self.replicas, bool) or not isinstance(self.replicas, int):
            raise ValueError("replicas must be an integer")
        if self.replicas < 0:
            raise ValueError(f"replicas must be >= 0, got {self.replicas}")

    @property
    def labels(self) -> dict[str, str]:
        return {"app": self.name}

    def to_manifest(self) -> dict[str, Any]:
        """Render the resource document accepted by the create endpoint."""
        quantities = {"cpu": self.cpu_request, "memory": self.memory_request}
        return {
            "apiVersion": API_VERSION,
            "kind": KIND,
            "metadata": {
                "name": self.name,
                "labels": dict(self.labels),
            },
            "spec": {
                "replicas": self.replicas,
                "selector": {"matchLabels": dict(self.labels)},
                "template": {
                    "metadata": {"labels": dict(self.labels)},
                    "spec": {
                        "containers": [
                            {
                                "name": self.name,
                                "image": self.image,
                                "ports": [{"containerPort": CONTAINER_PORT}],
                                "resources": {
                                    "requests": dict(quantities),
                                    "limits": dict(quantities),
                                },
                            }
                        ]
                    },
                },
            },
        }
