from __future__ import annotations

from typing import Optional

from ...core.enums import ErrorCode, EventKind
from .base import TransitionStrategy


class BreakOutStrategy(TransitionStrategy):
    def check(self, last: Optional[EventKind]) -> None:
        if last in (EventKind.CLOCK_IN, EventKind.BREAK_IN):
            return
        if last == EventKind.BREAK_OUT:
            self.reject("You are already on a break", ErrorCode.ALREADY_ON_BREAK)
        self.reject("You have not clocked in today", ErrorCode.NOT_CLOCKED_IN)


class BreakInStrategy(TransitionStrategy):
    def check(self, last: Optional[EventKind]) -> None:
        if last == EventKind.BREAK_OUT:
            return
        self.reject("You are not on a break", ErrorCode.NOT_ON_BREAK)
