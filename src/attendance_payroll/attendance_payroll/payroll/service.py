from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence

from ..attendance.history import AttendanceHistoryReader
from ..attendance.service import resolve_company
from ..audit.recorder import AuditRecorder
from ..common.datetime_utils import now_local
from ..company.repository import CompanyRepository
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..holidays.repository import HolidayRepository
from ..requests.repository import RequestRepository
from ..shifts.repository import ShiftRepository
from ..users.repository import UserRepository
from .aggregator import PayrollAggregator
from .calculator.base import CompensationCalculator
from .calculator.standard_calculator import StandardCompensationCalculator
from .model import PayrollResult

logger = logging.getLogger(__name__)


class PayrollService:
    """Use case: recompute payroll figures for a period (read-only, no cache)."""

    def __init__(
        self,
        users: UserRepository,
        shifts: ShiftRepository,
        companies: CompanyRepository,
        holidays: HolidayRepository,
        requests: RequestRepository,
        history: AttendanceHistoryReader,
        audit: AuditRecorder,
        *,
        aggregator: Optional[PayrollAggregator] = None,
        calculator: Optional[CompensationCalculator] = None,
        clock: Callable[[], datetime] = now_local,
        default_company_id: Optional[int] = None,
    ):
        self._users = users
        self._shifts = shifts
        self._companies = companies
        self._holidays = holidays
        self._requests = requests
        self._history = history
        self._audit = audit
        self._aggregator = aggregator or PayrollAggregator()
        self._calculator = calculator or StandardCompensationCalculator()
        self._clock = clock
        self._default_company_id = default_company_id

    def run(
        self,
        *,
        current_role: Role,
        actor_id: int,
        start: date,
        end: date,
        user_ids: Optional[Sequence[int]] = None,
        include_contributions: bool = False,
        include_tax: bool = False,
        request_meta: Optional[dict[str, Any]] = None,
    ) -> list[PayrollResult]:
        if not current_role.is_privileged:
            raise AuthorizationError("You do not have permission for this action")
        if end < start:
            raise ValidationError("End date must not be before start date")

        profiles = self._users.list_active_profiles(user_ids=list(user_ids) if user_ids else None)
        ids = [p.user_id for p in profiles]
        as_of = self._clock().date()

        holidays = self._holidays.list_overlapping(start=start, end=end, active_only=True)
        leaves = [
            r.as_grant() for r in self._requests.list_approved_overlapping(start=start, end=end, user_ids=ids or None)
        ]
        # One extra day so overnight shifts can close on the day after the period.
        events = self._history.by_user(start, end, user_ids=ids or None, trailing_days=1) if ids else {}

        shift_cache: dict[int, Any] = {}
        results: list[PayrollResult] = []
        for profile in profiles:
            shift = None
            if profile.shift_id:
                sid = int(profile.shift_id)
                if sid not in shift_cache:
                    shift_cache[sid] = self._shifts.get_by_id(sid)
                shift = shift_cache[sid]
            company = resolve_company(self._companies, profile, self._default_company_id)

            result = self._aggregator.aggregate(
                profile=profile,
                shift=shift,
                company=company,
                events=events.get(profile.user_id, []),
                leaves=[l for l in leaves if l.user_id == profile.user_id],
                holidays=holidays,
                period_start=start,
                period_end=end,
                as_of=as_of,
            )
            results.append(
                self._calculator.apply(
                    result,
                    profile,
                    company,
                    include_contributions=include_contributions,
                    include_tax=include_tax,
                )
            )

        logger.info("Payroll computed for %s employees, %s..%s", len(results), start, end)
        self._audit.record(
            actor_id=actor_id,
            action="run_payroll",
            resource_type="payroll",
            details={
                "period_start": start.isoformat(),
                "period_end": end.isoformat(),
                "employee_count": len(results),
                "include_contributions": include_contributions,
                "include_tax": include_tax,
            },
            request_meta=request_meta,
        )
        return results
