"""
Outcome Value Objects

Architectural Intent:
- Every client operation resolves to exactly one of Success or Failure
- Callers branch on the outcome instead of catching transport exceptions
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    payload: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    reason: str

    def __post_init__(self) -> None:
        if not self.reason:
            raise ValueError("Failure reason cannot be empty")

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success, Failure]
