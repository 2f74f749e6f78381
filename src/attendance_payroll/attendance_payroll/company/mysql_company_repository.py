from __future__ import annotations

from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import CompanyPolicy
from .repository import CompanyRepository


def _to_policy(r: dict[str, Any]) -> CompanyPolicy:
    defaults = CompanyPolicy()
    # A stored 0 is a real value; only NULL falls back.
    radius = r.get("radius_meters")
    return CompanyPolicy(
        company_id=int(r["company_id"]),
        name=r["name"],
        office_latitude=float(r["office_latitude"]) if r.get("office_latitude") is not None else None,
        office_longitude=float(r["office_longitude"]) if r.get("office_longitude") is not None else None,
        radius_meters=int(radius) if radius is not None else defaults.radius_meters,
        grace_period_minutes=int(r.get("grace_period_minutes") or 0),
        work_start_time=normalize_mysql_time(r.get("work_start_time")) or defaults.work_start_time,
        late_penalty_per_minute=int(r.get("late_penalty_per_minute") or 0),
        early_leave_penalty_per_minute=int(r.get("early_leave_penalty_per_minute") or 0),
        overtime_rate_per_hour=int(r.get("overtime_rate_per_hour") or 0),
        overtime_start_after_minutes=int(r.get("overtime_start_after_minutes") or 0),
        standard_work_hours=float(r.get("standard_work_hours") or defaults.standard_work_hours),
        contribution_scheme=r.get("contribution_scheme") or defaults.contribution_scheme,
        tax_table=r.get("tax_table") or defaults.tax_table,
    )


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, company_id: int) -> Optional[CompanyPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, office_latitude, office_longitude, radius_meters,
                       grace_period_minutes, work_start_time, late_penalty_per_minute,
                       early_leave_penalty_per_minute, overtime_rate_per_hour,
                       overtime_start_after_minutes, standard_work_hours,
                       contribution_scheme, tax_table
                FROM companies
                WHERE company_id=%s
                """,
                (int(company_id),),
            )
            r = fetchone(cur)
            return _to_policy(r) if r else None
