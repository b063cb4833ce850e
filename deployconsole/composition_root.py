"""
Composition Root

Architectural Intent:
- Single place where configuration, adapters and services are wired together
- The API base URL and namespace reach the client only through ApiConfig

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- The notification center starts on an in-memory surface; the TUI swaps in
  its toast surface when it mounts
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from deployconsole.application.notifications.notification_center import (
    InMemoryNotificationSurface,
    NotificationCenter,
)
from deployconsole.infrastructure.config import ConsoleConfig, load_config
from deployconsole.infrastructure.http.deployment_api_client import HttpDeploymentClient
from deployconsole.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    create_exporter,
)


@dataclass
class ConsoleContainer:
    """DI container holding all wired dependencies."""

    config: ConsoleConfig
    telemetry: OTELExporter
    client: HttpDeploymentClient
    notifications: NotificationCenter

    @property
    def namespace(self) -> str:
        return self.config.api.namespace

    async def aclose(self) -> None:
        await self.notifications.wait_idle()
        await self.client.aclose()
        self.telemetry.shutdown()


def create_container(
    config: Optional[ConsoleConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ConsoleContainer:
    """Create and wire all dependencies."""
    config = config or load_config()
    telemetry = create_exporter(
        endpoint=config.telemetry.endpoint,
        insecure=config.telemetry.insecure,
    )
    client = HttpDeploymentClient(config.api, telemetry=telemetry, transport=transport)
    notifications = NotificationCenter(
        InMemoryNotificationSurface(),
        visible_seconds=config.notifications.visible_seconds,
        exit_seconds=config.notifications.exit_seconds,
    )
    return ConsoleContainer(
        config=config,
        telemetry=telemetry,
        client=client,
        notifications=notifications,
    )
