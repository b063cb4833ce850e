"""
Notification Surface Port

Architectural Intent:
- Where notifications are attached, restyled on state changes, and detached
- Decouples the notification lifecycle from any widget toolkit
"""

from typing import Protocol, runtime_checkable

from deployconsole.domain.entities.notification import Notification


@runtime_checkable
class NotificationSurfacePort(Protocol):
    """Port for displaying transient notifications."""

    def attach(self, notification: Notification) -> None:
        """Add a newly created notification to the surface."""
        ...

    def update(self, notification: Notification) -> None:
        """Reflect a state change (visible, dismissing)."""
        ...

    def detach(self, notification: Notification) -> None:
        """Remove the notification from the surface."""
        ...
