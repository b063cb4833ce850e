"""
Notification Module

Architectural Intent:
- A notification is a transient, operator-visible message about one operation outcome
- Its lifecycle is strictly ordered: CREATED -> VISIBLE -> DISMISSING -> REMOVED
- Transitions are driven by the notification center; nothing else may skip a state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
import itertools

_ids = itertools.count(1)


class Severity(Enum):
    SUCCESS = "success"
    ERROR = "error"


class NotificationState(Enum):
    CREATED = "created"
    VISIBLE = "visible"
    DISMISSING = "dismissing"
    REMOVED = "removed"


_NEXT_STATE = {
    NotificationState.CREATED: NotificationState.VISIBLE,
    NotificationState.VISIBLE: NotificationState.DISMISSING,
    NotificationState.DISMISSING: NotificationState.REMOVED,
}


@dataclass(eq=False)
class Notification:
    message: str
    severity: Severity = Severity.SUCCESS
    id: int = field(default_factory=lambda: next(_ids))
    state: NotificationState = NotificationState.CREATED
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    history: list[NotificationState] = field(
        default_factory=lambda: [NotificationState.CREATED]
    )

    def _advance(self, expected: NotificationState) -> None:
        target = _NEXT_STATE.get(self.state)
        if target is not expected:
            raise ValueError(
                f"Notification {self.id} cannot move from {self.state.name} to {expected.name}"
            )
        self.state = target
        self.history.append(target)

    def show(self) -> None:
        self._advance(NotificationState.VISIBLE)

    def dismiss(self) -> None:
        self._advance(NotificationState.DISMISSING)

    def remove(self) -> None:
        self._advance(NotificationState.REMOVED)

    @property
    def is_removed(self) -> bool:
        return self.state is NotificationState.REMOVED
