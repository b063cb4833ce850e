"""
Notification Package

Architectural Intent:
- Transient operator notifications with a fixed, timed lifecycle
"""

from deployconsole.application.notifications.notification_center import (
    NotificationCenter,
    InMemoryNotificationSurface,
)

__all__ = [
    "NotificationCenter",
    "InMemoryNotificationSurface",
]
