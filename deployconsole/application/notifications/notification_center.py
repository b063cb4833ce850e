"""
Notification Center

Architectural Intent:
- Creates one Notification per call and drives it through its lifecycle
- Each lifecycle is an independent asyncio task; notifications stack, they are
  never queued or coalesced
- The surface only sees attach/update/detach calls

Timing:
    CREATED  --(next loop iteration)-->  VISIBLE
    VISIBLE  --(visible_seconds)------>  DISMISSING
    DISMISSING --(exit_seconds)------->  REMOVED
"""

from __future__ import annotations
import asyncio
import logging

from deployconsole.domain.entities.notification import Notification, Severity
from deployconsole.domain.ports.notification_surface_port import NotificationSurfacePort

logger = logging.getLogger(__name__)

VISIBLE_SECONDS = 3.0
EXIT_SECONDS = 0.3


class NotificationCenter:
    def __init__(
        self,
        surface: NotificationSurfacePort,
        visible_seconds: float = VISIBLE_SECONDS,
        exit_seconds: float = EXIT_SECONDS,
    ) -> None:
        self._surface = surface
        self._visible_seconds = visible_seconds
        self._exit_seconds = exit_seconds
        self._tasks: set[asyncio.Task] = set()

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    def set_surface(self, surface: NotificationSurfacePort) -> None:
        self._surface = surface

    def notify(self, message: str, severity: Severity = Severity.SUCCESS) -> Notification:
        """Attach a new notification and schedule its lifecycle.

        Must be called from a running event loop.
        """
        notification = Notification(message=message, severity=severity)
        log = logger.warning if severity is Severity.ERROR else logger.info
        log("Notification #%d: %s", notification.id, message)
        self._surface.attach(notification)

        task = asyncio.get_running_loop().create_task(
            self._run_lifecycle(notification),
            name=f"notification-{notification.id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, Severity.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.notify(message, Severity.ERROR)

    async def _run_lifecycle(self, notification: Notification) -> None:
        # Yield once so the surface paints the CREATED state before VISIBLE.
        await asyncio.sleep(0)
        notification.show()
        self._surface.update(notification)

        await asyncio.sleep(self._visible_seconds)
        notification.dismiss()
        self._surface.update(notification)

        await asyncio.sleep(self._exit_seconds)
        notification.remove()
        self._surface.detach(notification)

    async def wait_idle(self) -> None:
        """Wait until every scheduled notification has been removed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


class InMemoryNotificationSurface:
    """Surface that records notifications; used headless and by the CLI."""

    def __init__(self) -> None:
        self.attached: list[Notification] = []
        self.visible: list[Notification] = []

    def attach(self, notification: Notification) -> None:
        self.attached.append(notification)
        self.visible.append(notification)

    def update(self, notification: Notification) -> None:
        pass

    def detach(self, notification: Notification) -> None:
        if notification in self.visible:
            self.visible.remove(notification)
