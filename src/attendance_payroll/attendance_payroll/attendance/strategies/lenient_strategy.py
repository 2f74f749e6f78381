"""Transition rules used when break ordering is not enforced.

Break events always pass. A clock_out still needs the day's last record to be
clock_in or break_in.
"""

from __future__ import annotations

from typing import Optional

from ...core.enums import ErrorCode, EventKind
from .base import TransitionStrategy


class LenientClockOutStrategy(TransitionStrategy):
    def check(self, last: Optional[EventKind]) -> None:
        if last not in (EventKind.CLOCK_IN, EventKind.BREAK_IN):
            self.reject("You have not clocked in today", ErrorCode.NOT_CLOCKED_IN)


class UnguardedBreakStrategy(TransitionStrategy):
    def check(self, last: Optional[EventKind]) -> None:
        return None
