from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True)
class CompensationBreakdown:
    """Monetary line items for one employee and period, in whole currency units."""

    monthly_salary: int
    late_deduction: int = 0
    early_leave_deduction: int = 0
    overtime_amount: int = 0
    health_employee: int = 0
    health_employer: int = 0
    old_age_employee: int = 0
    old_age_employer: int = 0
    pension_employee: int = 0
    pension_employer: int = 0
    income_tax: int = 0
    total_deductions: int = 0
    total_additions: int = 0
    net_salary: int = 0

    @property
    def employee_contributions(self) -> int:
        return self.health_employee + self.old_age_employee + self.pension_employee

    @property
    def employer_contributions(self) -> int:
        return self.health_employer + self.old_age_employer + self.pension_employer

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["employee_contributions"] = self.employee_contributions
        data["employer_contributions"] = self.employer_contributions
        return data


@dataclass(frozen=True)
class PayrollResult:
    """Derived per-employee figures for a period (never persisted)."""

    user_id: int
    full_name: str
    period_start: date
    period_end: date
    working_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    early_leave_days: int = 0
    late_minutes: int = 0
    early_leave_minutes: int = 0
    worked_minutes: int = 0
    overtime_minutes: int = 0
    holiday_days: int = 0
    weekend_days: int = 0
    annual_leave_days: int = 0
    sick_days: int = 0
    permit_days: int = 0
    compensation: Optional[CompensationBreakdown] = None

    @property
    def leave_days(self) -> int:
        return self.annual_leave_days + self.sick_days + self.permit_days

    @property
    def worked_hours(self) -> float:
        return round(self.worked_minutes / 60, 2)

    @property
    def overtime_hours(self) -> float:
        return round(self.overtime_minutes / 60, 2)

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["period_start"] = self.period_start.isoformat()
        data["period_end"] = self.period_end.isoformat()
        data["leave_days"] = self.leave_days
        data["worked_hours"] = self.worked_hours
        data["overtime_hours"] = self.overtime_hours
        data["compensation"] = self.compensation.as_dict() if self.compensation else None
        return data
