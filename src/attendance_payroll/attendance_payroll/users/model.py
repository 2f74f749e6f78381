from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeKind, Role, SalaryBasis


@dataclass(frozen=True)
class User:
    """Domain entity: an authenticated identity.

    Note: Plain data object (no DB access code here).
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    email: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class EmployeeProfile:
    """Per-employee attendance and pay policy."""

    user_id: int
    full_name: str
    employee_kind: EmployeeKind = EmployeeKind.OFFICE
    requires_geofence: bool = True
    shift_id: Optional[int] = None
    company_id: Optional[int] = None
    base_salary: int = 0
    salary_basis: SalaryBasis = SalaryBasis.MONTHLY
    tax_status: str = "TK/0"
    department: Optional[str] = None
    is_active: bool = True

    @property
    def is_office(self) -> bool:
        return self.employee_kind == EmployeeKind.OFFICE
