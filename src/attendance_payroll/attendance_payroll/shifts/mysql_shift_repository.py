from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, parse_int_list
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, shift_name, start_time, end_time, break_minutes, working_days, is_active"


def _to_shift(r: dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        break_minutes=int(r.get("break_minutes") or 0),
        working_days=frozenset(parse_int_list(r.get("working_days"))) or frozenset({1, 2, 3, 4, 5}),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts ORDER BY shift_id")
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None
