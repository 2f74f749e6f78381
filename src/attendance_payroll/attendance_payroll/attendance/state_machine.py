from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import DayState, EventKind
from .factory import TransitionStrategyFactory
from .model import AttendanceRecord

_STATE_AFTER = {
    EventKind.CLOCK_IN: DayState.PRESENT,
    EventKind.BREAK_IN: DayState.PRESENT,
    EventKind.BREAK_OUT: DayState.ON_BREAK,
    EventKind.CLOCK_OUT: DayState.DEPARTED,
}


def last_event(records: Sequence[AttendanceRecord]) -> Optional[EventKind]:
    if not records:
        return None
    latest = max(records, key=lambda r: (r.recorded_at, r.record_id))
    return latest.event_kind


class AttendanceStateMachine:
    """Legal event ordering for one employee within one calendar day.

    ``records`` are the day's already persisted events in any order; the most
    recent one decides the current state.
    """

    def __init__(self, factory: TransitionStrategyFactory | None = None):
        self._factory = factory or TransitionStrategyFactory()

    @property
    def strict_breaks(self) -> bool:
        return self._factory.strict_breaks

    def day_state(self, records: Sequence[AttendanceRecord]) -> DayState:
        last = last_event(records)
        if last is None:
            return DayState.ABSENT
        return _STATE_AFTER[last]

    def check(self, records: Sequence[AttendanceRecord], kind: EventKind) -> None:
        self._factory.for_event(kind).check(last_event(records))
