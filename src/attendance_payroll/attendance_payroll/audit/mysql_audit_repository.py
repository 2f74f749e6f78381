from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditEntry
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        actor_id: int,
        action: str,
        resource_type: str,
        resource_id: Optional[str],
        details: dict[str, Any],
        ip_address: Optional[str],
        user_agent: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(actor_id, action, resource_type, resource_id, details, ip_address, user_agent)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(actor_id),
                    action,
                    resource_type,
                    resource_id,
                    json.dumps(details, default=str),
                    ip_address,
                    (user_agent or "")[:255] or None,
                ),
            )
            return int(cur.lastrowid)

    def list_recent(self, *, action: Optional[str] = None, limit: int = 100) -> Sequence[AuditEntry]:
        clauses = ["1=1"]
        params: list[object] = []
        if action:
            clauses.append("action=%s")
            params.append(action)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT audit_id, actor_id, action, resource_type, resource_id,
                       details, ip_address, user_agent, created_at
                FROM audit_logs
                WHERE {where}
                ORDER BY created_at DESC, audit_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                AuditEntry(
                    audit_id=int(r["audit_id"]),
                    actor_id=int(r["actor_id"]),
                    action=r["action"],
                    resource_type=r["resource_type"],
                    resource_id=r.get("resource_id"),
                    details=json.loads(r["details"]) if r.get("details") else {},
                    ip_address=r.get("ip_address"),
                    user_agent=r.get("user_agent"),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]
