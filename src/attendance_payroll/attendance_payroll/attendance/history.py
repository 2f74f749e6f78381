from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..common.datetime_utils import day_bounds
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceHistoryReader:
    """Read-only access to persisted events for a day or a period."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def for_day(self, user_id: int, day: date) -> List[AttendanceRecord]:
        """The day's events, oldest first."""
        start, end = day_bounds(day)
        records = self._attendance.list_for_user_between(user_id=int(user_id), start=start, end=end)
        return sorted(records, key=lambda r: (r.recorded_at, r.record_id))

    def for_period(self, user_id: int, start: date, end: date) -> List[AttendanceRecord]:
        """Events of the inclusive date range, newest first."""
        if end < start:
            return []
        records = self._attendance.list_for_user_between(
            user_id=int(user_id),
            start=day_bounds(start)[0],
            end=day_bounds(end)[1],
        )
        return sorted(records, key=lambda r: (r.recorded_at, r.record_id), reverse=True)

    def by_user(
        self,
        start: date,
        end: date,
        *,
        user_ids: Optional[Sequence[int]] = None,
        trailing_days: int = 0,
    ) -> Dict[int, List[AttendanceRecord]]:
        """Events of the range grouped per employee, oldest first.

        ``trailing_days`` widens the read past ``end`` so shifts ending after
        midnight can be closed.
        """
        records = self._attendance.list_for_users_between(
            start=day_bounds(start)[0],
            end=day_bounds(end + timedelta(days=trailing_days))[1],
            user_ids=list(user_ids) if user_ids else None,
        )
        grouped: Dict[int, List[AttendanceRecord]] = defaultdict(list)
        for record in sorted(records, key=lambda r: (r.recorded_at, r.record_id)):
            grouped[record.user_id].append(record)
        return dict(grouped)
