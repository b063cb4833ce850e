"""
Deployment DTOs

Architectural Intent:
- Data Transfer Objects for the create-form boundary
- Raw text from the form is validated here before any request is built
- Decouples widget contents from the domain DeploymentSpec
"""

from dataclasses import dataclass, fields
from typing import Mapping

from deployconsole.domain.entities.deployment import DeploymentSpec


@dataclass(frozen=True)
class DeploymentForm:
    name: str = ""
    image: str = ""
    replicas: str = ""
    cpu_request: str = ""
    memory_request: str = ""

    @classmethod
    def from_fields(cls, values: Mapping[str, str]) -> "DeploymentForm":
        """Build a form from raw widget text; unknown keys are ignored."""
        return cls(**{f.name: values.get(f.name, "") for f in fields(cls)})

    def to_spec(self) -> DeploymentSpec:
        """Validate the raw fields and build a DeploymentSpec.

        Raises ValueError naming the offending field.
        """
        raw_replicas = self.replicas.strip()
        try:
            replicas = int(raw_replicas)
        except ValueError:
            raise ValueError(
                f"replicas must be a whole number, got {self.replicas!r}"
            ) from None
        return DeploymentSpec(
            name=self.name.strip(),
            image=self.image.strip(),
            replicas=replicas,
            cpu_request=self.cpu_request.strip(),
            memory_request=self.memory_request.strip(),
        )
