from __future__ import annotations

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from ...company.model import CompanyPolicy
from ...core.enums import SalaryBasis
from ...users.model import EmployeeProfile
from ..model import CompensationBreakdown, PayrollResult
from ..statutory import contribution_rates, monthly_income_tax, to_whole
from .base import CompensationCalculator


class StandardCompensationCalculator(CompensationCalculator):
    """Standard rule: salary + overtime - (penalties + contributions + tax).

    Every line item is rounded to a whole unit on its own; totals are exact
    sums of the rounded items.
    """

    def apply(
        self,
        result: PayrollResult,
        profile: EmployeeProfile,
        company: CompanyPolicy,
        *,
        include_contributions: bool = False,
        include_tax: bool = False,
    ) -> PayrollResult:
        if profile.salary_basis == SalaryBasis.DAILY:
            monthly_salary = int(profile.base_salary) * result.working_days
        else:
            monthly_salary = int(profile.base_salary)

        late = to_whole(Decimal(result.late_minutes) * Decimal(company.late_penalty_per_minute))
        early = to_whole(Decimal(result.early_leave_minutes) * Decimal(company.early_leave_penalty_per_minute))

        overtime_hours = (Decimal(result.overtime_minutes) / 60).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        overtime = to_whole(overtime_hours * Decimal(company.overtime_rate_per_hour))

        contributions: dict[str, int] = {}
        if include_contributions:
            for rate in contribution_rates(company.contribution_scheme):
                base = Decimal(monthly_salary) / 100
                contributions[f"{rate.name}_employee"] = to_whole(base * rate.employee_percent)
                contributions[f"{rate.name}_employer"] = to_whole(base * rate.employer_percent)

        tax = 0
        if include_tax:
            tax = monthly_income_tax(monthly_salary, profile.tax_status, company.tax_table)

        employee_part = sum(v for k, v in contributions.items() if k.endswith("_employee"))
        total_deductions = late + early + employee_part + tax
        total_additions = overtime

        breakdown = CompensationBreakdown(
            monthly_salary=monthly_salary,
            late_deduction=late,
            early_leave_deduction=early,
            overtime_amount=overtime,
            income_tax=tax,
            total_deductions=total_deductions,
            total_additions=total_additions,
            net_salary=monthly_salary + total_additions - total_deductions,
            **contributions,
        )
        return replace(result, compensation=breakdown)
