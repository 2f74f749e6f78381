from __future__ import annotations

from typing import Optional

from ...core.enums import ErrorCode, EventKind
from .base import TransitionStrategy


class ClockInStrategy(TransitionStrategy):
    def check(self, last: Optional[EventKind]) -> None:
        if last is None or last == EventKind.CLOCK_OUT:
            return
        self.reject("You have already clocked in today", ErrorCode.ALREADY_CLOCKED_IN)
