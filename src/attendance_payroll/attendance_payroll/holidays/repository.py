from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_overlapping(self, *, start: date, end: date, active_only: bool = True) -> Sequence[Holiday]:
        """Holidays whose range intersects [start, end]."""

        raise NotImplementedError

    def create(self, *, name: str, start_date: date, end_date: Optional[date]) -> int:
        raise NotImplementedError
