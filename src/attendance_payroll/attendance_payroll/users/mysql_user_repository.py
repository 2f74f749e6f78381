from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import EmployeeKind, Role, SalaryBasis
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeProfile, User
from .repository import UserRepository

_USER_COLUMNS = "user_id, full_name, username, password_hash, role, email, is_active"
_PROFILE_COLUMNS = """
    p.user_id, u.full_name, p.employee_kind, p.requires_geofence, p.shift_id, p.company_id,
    p.base_salary, p.salary_basis, p.tax_status, p.department, u.is_active
"""

_UPSERT_PROFILE = """
    INSERT INTO employee_profiles(
        user_id, employee_kind, requires_geofence, shift_id, company_id,
        base_salary, salary_basis, tax_status, department
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        employee_kind=VALUES(employee_kind),
        requires_geofence=VALUES(requires_geofence),
        shift_id=VALUES(shift_id),
        company_id=VALUES(company_id),
        base_salary=VALUES(base_salary),
        salary_basis=VALUES(salary_basis),
        tax_status=VALUES(tax_status),
        department=VALUES(department)
"""


def _to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        email=row.get("email"),
        is_active=bool(row.get("is_active", True)),
    )


def _to_profile(row: dict[str, Any]) -> EmployeeProfile:
    return EmployeeProfile(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        employee_kind=EmployeeKind(row["employee_kind"]),
        requires_geofence=bool(row.get("requires_geofence")),
        shift_id=row.get("shift_id"),
        company_id=row.get("company_id"),
        base_salary=int(row.get("base_salary") or 0),
        salary_basis=SalaryBasis(row.get("salary_basis") or SalaryBasis.MONTHLY.value),
        tax_status=row.get("tax_status") or "TK/0",
        department=row.get("department"),
        is_active=bool(row.get("is_active", True)),
    )


def _profile_params(profile: EmployeeProfile, user_id: int) -> tuple:
    return (
        int(user_id),
        profile.employee_kind.value,
        int(profile.requires_geofence),
        profile.shift_id,
        profile.company_id,
        int(profile.base_salary),
        profile.salary_basis.value,
        profile.tax_status,
        profile.department,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_profile(self, user_id: int) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PROFILE_COLUMNS}
                FROM employee_profiles p
                JOIN users u ON u.user_id = p.user_id
                WHERE p.user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_active_profiles(self, user_ids: Optional[Sequence[int]] = None) -> Sequence[EmployeeProfile]:
        clauses = ["u.is_active=1"]
        params: list[object] = []
        if user_ids:
            clauses.append("p.user_id IN (" + ",".join(["%s"] * len(user_ids)) + ")")
            params.extend(int(x) for x in user_ids)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PROFILE_COLUMNS}
                FROM employee_profiles p
                JOIN users u ON u.user_id = p.user_id
                WHERE {where}
                ORDER BY u.full_name
                """,
                tuple(params),
            )
            return [_to_profile(r) for r in fetchall(cur)]

    def create_user_with_profile(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        email: Optional[str],
        profile: EmployeeProfile,
    ) -> int:
        # Both rows commit or roll back together (single db_cursor transaction).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, username, password_hash, role, email, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (profile.full_name, username, password_hash, role.value, email),
            )
            user_id = int(cur.lastrowid)
            cur.execute(_UPSERT_PROFILE, _profile_params(profile, user_id))
            return user_id

    def upsert_profile(self, profile: EmployeeProfile) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT_PROFILE, _profile_params(profile, profile.user_id))
