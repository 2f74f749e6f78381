from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> tuple[date, date]:
    """Parse YYYY-MM into the first and last day of that month."""
    first = datetime.strptime(value, "%Y-%m").date()
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Local midnight of ``day`` and of the following day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def floor_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``; negative spans count as zero."""
    seconds = int(delta.total_seconds())
    if seconds <= 0:
        return 0
    return seconds // 60
