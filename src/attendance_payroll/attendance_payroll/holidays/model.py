from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Optional


@dataclass(frozen=True)
class Holiday:
    """Company-wide non-working date, or inclusive date range."""

    holiday_id: int
    name: str
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date

    def dates(self) -> Iterator[date]:
        day = self.start_date
        while day <= self.last_date:
            yield day
            day += timedelta(days=1)
