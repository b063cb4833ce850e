"""
Deployment Console TUI

Architectural Intent:
- Textual front end for the DeploymentConsole use case
- Implements ConsoleViewPort (table, create form, delete confirmation)
- ToastSurface implements NotificationSurfacePort as a stack of fading toasts
- Every operator action runs as a Textual worker so the UI stays responsive
  while a request is in flight
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from deployconsole.application.notifications.notification_center import NotificationCenter
from deployconsole.application.use_cases.deployment_console import DeploymentConsole
from deployconsole.domain.entities.notification import Notification, NotificationState
from deployconsole.domain.ports.deployment_client_port import DeploymentClientPort
from deployconsole.domain.services.row_rendering import DeploymentRow

logger = logging.getLogger(__name__)

FORM_FIELDS = (
    ("name", "Deployment name", "web"),
    ("image", "Container image", "nginx:latest"),
    ("replicas", "Replicas", "1"),
    ("cpu_request", "CPU request", "250m"),
    ("memory_request", "Memory request", "128Mi"),
)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog used before destructive actions."""

    BINDINGS = [("y", "answer(True)", "Yes"), ("n,escape", "answer(False)", "No")]

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Label(self.prompt, id="question")
            with Horizontal(id="dialog-buttons"):
                yield Button("Delete", variant="error", id="confirm-yes")
                yield Button("Cancel", variant="primary", id="confirm-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-yes")

    def action_answer(self, answer: bool) -> None:
        self.dismiss(answer)


class ToastSurface:
    """Renders notifications as stacked Static widgets inside #toasts."""

    def __init__(self, app: App, exit_seconds: float) -> None:
        self._app = app
        self._exit_seconds = exit_seconds

    @staticmethod
    def _widget_id(notification: Notification) -> str:
        return f"toast-{notification.id}"

    def _find(self, notification: Notification) -> Optional[Static]:
        try:
            return self._app.query_one(f"#{self._widget_id(notification)}", Static)
        except NoMatches:
            return None

    def attach(self, notification: Notification) -> None:
        toast = Static(
            notification.message,
            id=self._widget_id(notification),
            classes=f"toast {notification.severity.value}",
        )
        self._app.query_one("#toasts").mount(toast)

    def update(self, notification: Notification) -> None:
        toast = self._find(notification)
        if toast is None:
            return
        if notification.state is NotificationState.VISIBLE:
            toast.add_class("show")
            toast.styles.animate("opacity", value=1.0, duration=self._exit_seconds)
        elif notification.state is NotificationState.DISMISSING:
            toast.remove_class("show")
            toast.styles.animate("opacity", value=0.0, duration=self._exit_seconds)

    def detach(self, notification: Notification) -> None:
        toast = self._find(notification)
        if toast is not None:
            toast.remove()


class DeploymentConsoleApp(App):
    """Deployment list, create form and toast stack for one namespace."""

    TITLE = "Deployment Console"

    CSS = """
    Screen {
        layout: vertical;
    }
    #main {
        height: 1fr;
    }
    DataTable {
        width: 2fr;
        border: solid green;
    }
    #create-form {
        width: 1fr;
        border: solid yellow;
        padding: 0 1;
    }
    #toasts {
        dock: right;
        width: 40;
        height: auto;
    }
    .toast {
        opacity: 0;
        padding: 0 1;
        margin: 1 1 0 0;
    }
    .toast.success {
        background: $success;
    }
    .toast.error {
        background: $error;
    }
    ConfirmScreen {
        align: center middle;
    }
    #dialog {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }
    #dialog-buttons {
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        Binding("plus", "scale_up", "Scale Up", key_display="+"),
        Binding("minus", "scale_down", "Scale Down", key_display="-"),
        ("d", "delete", "Delete"),
    ]

    def __init__(
        self,
        client: DeploymentClientPort,
        notifications: NotificationCenter,
        namespace: str,
        exit_seconds: float = 0.3,
    ) -> None:
        super().__init__()
        self.sub_title = f"namespace: {namespace}"
        notifications.set_surface(ToastSurface(self, exit_seconds))
        self.controller = DeploymentConsole(client, self, notifications, namespace)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            yield DataTable(id="deployments", cursor_type="row")
            with Vertical(id="create-form"):
                yield Label("Create deployment")
                for field_name, label, placeholder in FORM_FIELDS:
                    yield Label(label)
                    yield Input(placeholder=placeholder, id=f"form-{field_name}")
                yield Button("Create", variant="success", id="create")
        yield Vertical(id="toasts")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns("Name", "Replicas")
        self.run_worker(self.controller.initialize(), group="console")

    # ---- ConsoleViewPort ---------------------------------------------------

    def render_rows(self, rows: Sequence[DeploymentRow]) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for row in rows:
            table.add_row(row.name, str(row.replicas), key=row.name)

    def read_form(self) -> dict[str, str]:
        return {
            field_name: self.query_one(f"#form-{field_name}", Input).value
            for field_name, _, _ in FORM_FIELDS
        }

    def clear_form(self) -> None:
        for field_name, _, _ in FORM_FIELDS:
            self.query_one(f"#form-{field_name}", Input).value = ""

    async def confirm(self, prompt: str) -> bool:
        answered: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        def _on_dismiss(result: Optional[bool]) -> None:
            if not answered.done():
                answered.set_result(bool(result))

        self.push_screen(ConfirmScreen(prompt), callback=_on_dismiss)
        return await answered

    # ---- actions -----------------------------------------------------------

    def _selected_row(self) -> Optional[DeploymentRow]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        return self.controller.find_row(str(row_key.value))

    def action_refresh(self) -> None:
        self.run_worker(self.controller.refresh_deployments(), group="console")

    def action_scale_up(self) -> None:
        row = self._selected_row()
        if row is not None:
            self.run_worker(self.controller.scale_up(row), group="console")

    def action_scale_down(self) -> None:
        row = self._selected_row()
        if row is not None:
            self.run_worker(self.controller.scale_down(row), group="console")

    def action_delete(self) -> None:
        row = self._selected_row()
        if row is not None:
            self.run_worker(self.controller.delete(row), group="console")

    def _submit_form(self) -> None:
        self.run_worker(self.controller.create_deployment(), group="console")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create":
            self._submit_form()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit_form()
