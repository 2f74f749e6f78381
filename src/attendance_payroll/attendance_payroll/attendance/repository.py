from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import EventKind
from .model import AttendanceRecord


class DayLedger(Protocol):
    """One employee's events for one day, valid while the day lock is held."""

    def records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def append(
        self,
        *,
        event_kind: EventKind,
        recorded_at: datetime,
        latitude: float,
        longitude: float,
        accuracy_meters: float,
        photo_ref: str,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def locked_day(self, *, user_id: int, work_date: date) -> ContextManager[DayLedger]:
        """Serialize writers for ``(user_id, work_date)``.

        Reads and the append made through the yielded ledger share one
        transaction; leaving the block normally commits it.
        """

        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records with ``start <= recorded_at < end``, newest first."""

        raise NotImplementedError

    def list_for_users_between(
        self,
        *,
        start: datetime,
        end: datetime,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with ``start <= recorded_at < end``, oldest first."""

        raise NotImplementedError
