from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import EventKind
from .strategies.base import TransitionStrategy
from .strategies.break_strategy import BreakInStrategy, BreakOutStrategy
from .strategies.clock_in_strategy import ClockInStrategy
from .strategies.clock_out_strategy import ClockOutStrategy
from .strategies.lenient_strategy import LenientClockOutStrategy, UnguardedBreakStrategy


@dataclass
class TransitionStrategyFactory:
    """Factory Pattern: choose the transition rule for an event kind."""

    strict_breaks: bool = True

    def for_event(self, kind: EventKind) -> TransitionStrategy:
        if self.strict_breaks:
            strategies = {
                EventKind.CLOCK_IN: ClockInStrategy,
                EventKind.CLOCK_OUT: ClockOutStrategy,
                EventKind.BREAK_OUT: BreakOutStrategy,
                EventKind.BREAK_IN: BreakInStrategy,
            }
        else:
            strategies = {
                EventKind.CLOCK_IN: ClockInStrategy,
                EventKind.CLOCK_OUT: LenientClockOutStrategy,
                EventKind.BREAK_OUT: UnguardedBreakStrategy,
                EventKind.BREAK_IN: UnguardedBreakStrategy,
            }
        return strategies[EventKind(kind)]()
