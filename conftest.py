"""Global test configuration.

Shared fakes for the console's ports: a view that records what it was asked
to render and a notification surface that records lifecycle transitions.
"""

import dataclasses
from typing import Sequence

import pytest

from deployconsole.application.dtos.deployment_dtos import DeploymentForm
from deployconsole.application.notifications.notification_center import NotificationCenter
from deployconsole.domain.entities.notification import Notification, Severity
from deployconsole.domain.services.row_rendering import DeploymentRow


class FakeView:
    """ConsoleViewPort double."""

    def __init__(self, form: DeploymentForm = DeploymentForm(), confirm_answer: bool = True):
        self.form = form
        self.confirm_answer = confirm_answer
        self.renders: list[list[DeploymentRow]] = []
        self.prompts: list[str] = []
        self.cleared = 0

    @property
    def displayed(self) -> list[DeploymentRow]:
        return self.renders[-1] if self.renders else []

    def render_rows(self, rows: Sequence[DeploymentRow]) -> None:
        self.renders.append(list(rows))

    def read_form(self) -> dict[str, str]:
        return dataclasses.asdict(self.form)

    def clear_form(self) -> None:
        self.cleared += 1
        self.form = DeploymentForm()

    async def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.confirm_answer


class RecordingSurface:
    """NotificationSurfacePort double that logs every call."""

    def __init__(self) -> None:
        self.events: list[tuple[str, int, str]] = []
        self.notifications: list[Notification] = []

    def attach(self, notification: Notification) -> None:
        self.notifications.append(notification)
        self.events.append(("attach", notification.id, notification.state.name))

    def update(self, notification: Notification) -> None:
        self.events.append(("update", notification.id, notification.state.name))

    def detach(self, notification: Notification) -> None:
        self.events.append(("detach", notification.id, notification.state.name))

    def messages(self, severity: Severity) -> list[str]:
        return [n.message for n in self.notifications if n.severity is severity]


@pytest.fixture()
def fake_view() -> FakeView:
    return FakeView()


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def notifications(surface) -> NotificationCenter:
    """Notification center with near-zero lifecycle delays."""
    return NotificationCenter(surface, visible_seconds=0.01, exit_seconds=0.001)
