from __future__ import annotations

from typing import Optional

from ...core.enums import ErrorCode, EventKind
from .base import TransitionStrategy


class ClockOutStrategy(TransitionStrategy):
    def check(self, last: Optional[EventKind]) -> None:
        if last in (EventKind.CLOCK_IN, EventKind.BREAK_IN):
            return
        if last == EventKind.BREAK_OUT:
            self.reject("You are on a break. End the break before clocking out", ErrorCode.ON_BREAK)
        self.reject("You have not clocked in today", ErrorCode.NOT_CLOCKED_IN)
