from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import day_bounds
from ..core.enums import EventKind
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository, DayLedger

logger = logging.getLogger(__name__)

_COLUMNS = "record_id, user_id, event_kind, recorded_at, latitude, longitude, accuracy_meters, photo_ref, notes"


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=int(r["user_id"]),
        event_kind=EventKind(r["event_kind"]),
        recorded_at=r["recorded_at"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        accuracy_meters=float(r["accuracy_meters"]),
        photo_ref=r["photo_ref"],
        notes=r.get("notes"),
    )


class _MySQLDayLedger(DayLedger):
    def __init__(self, cur, *, user_id: int, work_date: date):
        self._cur = cur
        self._user_id = user_id
        self._work_date = work_date

    def records(self) -> Sequence[AttendanceRecord]:
        start, end = day_bounds(self._work_date)
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE user_id=%s AND recorded_at>=%s AND recorded_at<%s
            ORDER BY recorded_at, record_id
            """,
            (self._user_id, start, end),
        )
        return [_to_record(r) for r in fetchall(self._cur)]

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
        self._cur.execute(
            """
            INSERT INTO attendance_records(
                user_id, event_kind, recorded_at, latitude, longitude, accuracy_meters, photo_ref, notes
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                self._user_id,
                EventKind(event_kind).value,
                recorded_at,
                latitude,
                longitude,
                accuracy_meters,
                photo_ref,
                notes,
            ),
        )
        return AttendanceRecord(
            record_id=int(self._cur.lastrowid),
            user_id=self._user_id,
            event_kind=EventKind(event_kind),
            recorded_at=recorded_at,
            latitude=latitude,
            longitude=longitude,
            accuracy_meters=accuracy_meters,
            photo_ref=photo_ref,
            notes=notes,
        )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def locked_day(self, *, user_id: int, work_date: date) -> Iterator[DayLedger]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Lock row keyed by (user_id, work_date); FOR UPDATE blocks concurrent submitters.
                cur.execute(
                    "INSERT IGNORE INTO attendance_day_locks(user_id, work_date) VALUES(%s,%s)",
                    (user_id, work_date),
                )
                cur.execute(
                    "SELECT user_id FROM attendance_day_locks WHERE user_id=%s AND work_date=%s FOR UPDATE",
                    (user_id, work_date),
                )
                fetchall(cur)
                yield _MySQLDayLedger(cur, user_id=user_id, work_date=work_date)
        except mysql.connector.Error as exc:
            logger.exception("Attendance write failed for user %s on %s", user_id, work_date)
            raise PersistenceError("Failed to save attendance record") from exc

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND recorded_at>=%s AND recorded_at<%s
                ORDER BY recorded_at DESC, record_id DESC
                """,
                (user_id, start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_users_between(
        self,
        *,
        start: datetime,
        end: datetime,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceRecord]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE recorded_at>=%s AND recorded_at<%s
        """
        params: list[Any] = [start, end]
        if user_ids:
            sql += " AND user_id IN (" + ",".join(["%s"] * len(user_ids)) + ")"
            params.extend(int(u) for u in user_ids)
        sql += " ORDER BY user_id, recorded_at, record_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
