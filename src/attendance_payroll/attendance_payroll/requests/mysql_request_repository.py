from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import RequestRepository

_COLUMNS = """
    request_id, user_id, leave_type, start_date, end_date, reason,
    status, created_at, decided_by, decided_at, admin_note
"""


def _to_leave(r: dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        admin_note=r.get("admin_note"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), leave_type.value, start_date, end_date, reason, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_approved_overlapping(
        self,
        *,
        start: date,
        end: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["status=%s", "start_date <= %s", "end_date >= %s"]
        params: list[object] = [RequestStatus.APPROVED.value, end, start]
        if user_ids:
            clauses.append("user_id IN (" + ",".join(["%s"] * len(user_ids)) + ")")
            params.extend(int(x) for x in user_ids)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE {where}", tuple(params))
            return [_to_leave(r) for r in fetchall(cur)]

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=NOW(), admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(decided_by),
                    admin_note,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
