"""
Deployment Console Use Case

Architectural Intent:
- Mediates between operator intent, the deployment client, and the rendered list
- Keeps the displayed rows equal to the last successful list fetch; never
  predicts the effect of a mutation
- Every operation produces exactly one notification

Reconciliation:
- A mutation's refresh is issued only after the mutation response arrives,
  so the refreshed rows reflect server state at or after the mutation
- A failed mutation leaves the rows untouched because no server change is known
- A failed refresh keeps the stale rows visible instead of blanking them
"""

from __future__ import annotations
import logging
from typing import Optional

from deployconsole.application.dtos.deployment_dtos import DeploymentForm
from deployconsole.application.notifications.notification_center import NotificationCenter
from deployconsole.domain.ports.console_view_port import ConsoleViewPort
from deployconsole.domain.ports.deployment_client_port import DeploymentClientPort
from deployconsole.domain.services.row_rendering import DeploymentRow, build_rows
from deployconsole.domain.value_objects.outcome import Failure

logger = logging.getLogger(__name__)


class DeploymentConsole:
    def __init__(
        self,
        client: DeploymentClientPort,
        view: ConsoleViewPort,
        notifications: NotificationCenter,
        namespace: str,
    ) -> None:
        self.client = client
        self.view = view
        self.notifications = notifications
        self.namespace = namespace
        self._rows: list[DeploymentRow] = []

    @property
    def rows(self) -> tuple[DeploymentRow, ...]:
        return tuple(self._rows)

    def find_row(self, name: str) -> Optional[DeploymentRow]:
        for row in self._rows:
            if row.name == name:
                return row
        return None

    async def initialize(self) -> None:
        await self.refresh_deployments()

    async def refresh_deployments(self) -> bool:
        outcome = await self.client.list_deployments(self.namespace)
        if isinstance(outcome, Failure):
            self.notifications.error(outcome.reason)
            return False

        self._rows = build_rows(outcome.payload)
        self.view.render_rows(self.rows)
        logger.debug("Rendered %d deployment rows", len(self._rows))
        return True

    async def scale_up(self, row: DeploymentRow) -> bool:
        return await self._scale(row.name, row.scale_up_target)

    async def scale_down(self, row: DeploymentRow) -> bool:
        return await self._scale(row.name, row.scale_down_target)

    async def _scale(self, name: str, target_replicas: int) -> bool:
        outcome = await self.client.scale_deployment(self.namespace, name, target_replicas)
        if isinstance(outcome, Failure):
            self.notifications.error(outcome.reason)
            return False

        self.notifications.success(
            f"Scaled deployment {name} to {target_replicas} replicas"
        )
        await self.refresh_deployments()
        return True

    async def delete(self, row: DeploymentRow) -> bool:
        if not await self.view.confirm(
            f"Are you sure you want to delete deployment {row.name}?"
        ):
            logger.info("Delete of %s cancelled by operator", row.name)
            return False

        outcome = await self.client.delete_deployment(self.namespace, row.name)
        if isinstance(outcome, Failure):
            self.notifications.error(outcome.reason)
            return False

        self.notifications.success(f"Deleted deployment {row.name}")
        await self.refresh_deployments()
        return True

    async def create_deployment(self, form: Optional[DeploymentForm] = None) -> bool:
        """Submit the create form.

        The form is read from the view unless one is passed in. On failure the
        form keeps its contents so the operator can correct and resubmit.
        """
        if form is None:
            form = DeploymentForm.from_fields(self.view.read_form())
        try:
            spec = form.to_spec()
        except ValueError as e:
            self.notifications.error(str(e))
            return False

        outcome = await self.client.create_deployment(self.namespace, spec)
        if isinstance(outcome, Failure):
            self.notifications.error(outcome.reason)
            return False

        self.notifications.success("Deployment created successfully")
        self.view.clear_form()
        await self.refresh_deployments()
        return True
