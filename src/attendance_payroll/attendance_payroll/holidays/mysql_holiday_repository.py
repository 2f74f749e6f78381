from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_overlapping(self, *, start: date, end: date, active_only: bool = True) -> Sequence[Holiday]:
        clauses = ["start_date <= %s", "COALESCE(end_date, start_date) >= %s"]
        params: list[object] = [end, start]
        if active_only:
            clauses.append("is_active=1")

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, name, start_date, end_date, is_active
                FROM holidays
                WHERE {where}
                ORDER BY start_date
                """,
                tuple(params),
            )
            return [
                Holiday(
                    holiday_id=int(r["holiday_id"]),
                    name=r["name"],
                    start_date=r["start_date"],
                    end_date=r.get("end_date"),
                    is_active=bool(r.get("is_active", 1)),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, name: str, start_date: date, end_date: Optional[date]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO holidays(name, start_date, end_date, is_active) VALUES(%s,%s,%s,1)",
                (name, start_date, end_date),
            )
            return int(cur.lastrowid)
