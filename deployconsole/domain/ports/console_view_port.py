"""
Console View Port

Architectural Intent:
- The presentation surface the deployment console drives
- Rendering receives finished row view-models; the view does no computation
- Confirmation is async so a modal dialog can suspend the calling action
"""

from typing import Mapping, Protocol, Sequence, runtime_checkable

from deployconsole.domain.services.row_rendering import DeploymentRow


@runtime_checkable
class ConsoleViewPort(Protocol):
    """Port for the operator-facing deployment view."""

    def render_rows(self, rows: Sequence[DeploymentRow]) -> None:
        """Replace every displayed row with rows."""
        ...

    def read_form(self) -> Mapping[str, str]:
        """Return the raw create-form text keyed by field name.

        Keys are name, image, replicas, cpu_request and memory_request.
        """
        ...

    def clear_form(self) -> None:
        """Reset every create-form field."""
        ...

    async def confirm(self, prompt: str) -> bool:
        """Ask the operator a yes/no question."""
        ...
