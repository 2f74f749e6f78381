from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time


@dataclass(frozen=True)
class Shift:
    """Domain entity: a reference work schedule.

    ``working_days`` uses 0=Sunday ... 6=Saturday.
    """

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    break_minutes: int = 0
    working_days: frozenset[int] = field(default_factory=lambda: frozenset({1, 2, 3, 4, 5}))
    is_active: bool = True

    @property
    def is_overnight(self) -> bool:
        return self.end_time <= self.start_time

    def works_on(self, python_weekday: int) -> bool:
        """Whether the shift is active on a ``date.weekday()`` value."""
        return (python_weekday + 1) % 7 in self.working_days
