from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import ErrorCode, EventKind
from ...core.exceptions import PolicyRejection


class TransitionStrategy(ABC):
    """Strategy Pattern: decide whether an event may follow the day's last event."""

    @abstractmethod
    def check(self, last: Optional[EventKind]) -> None:
        """Raise ``PolicyRejection`` when the transition is illegal."""
        raise NotImplementedError

    @staticmethod
    def reject(message: str, code: ErrorCode) -> None:
        raise PolicyRejection(message, code=code)
