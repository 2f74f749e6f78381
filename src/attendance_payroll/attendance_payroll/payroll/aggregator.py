"""Per-day classification of a payroll period.

Each calendar day is exactly one of: holiday, weekend, leave (by type),
present, absent, or not yet due (a future working day without attendance).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import floor_minutes, iter_days
from ..company.model import CompanyPolicy
from ..core.constants import DEFAULT_WORK_END, WORKING_WEEKDAYS
from ..core.enums import EventKind, LeaveType
from ..holidays.model import Holiday
from ..requests.model import LeaveGrant
from ..shifts.model import Shift
from ..users.model import EmployeeProfile
from .model import PayrollResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Schedule:
    start: time
    end: time

    @property
    def overnight(self) -> bool:
        return self.end <= self.start

    def window(self, day: date) -> tuple[datetime, datetime]:
        """Events belonging to ``day``.

        Overnight schedules are cut in the middle of the off-duty gap, so the
        clock-out after midnight stays with the day the shift started.
        """
        if self.overnight:
            end_min = self.end.hour * 60 + self.end.minute
            start_min = self.start.hour * 60 + self.start.minute
            pivot = end_min + (start_min - end_min) // 2
            start = datetime.combine(day, time.min) + timedelta(minutes=pivot)
        else:
            start = datetime.combine(day, time.min)
        return start, start + timedelta(days=1)

    def start_at(self, day: date) -> datetime:
        return datetime.combine(day, self.start)

    def end_at(self, day: date) -> datetime:
        end_day = day + timedelta(days=1) if self.overnight else day
        return datetime.combine(end_day, self.end)


def _schedule_for(shift: Optional[Shift], company: CompanyPolicy) -> _Schedule:
    if shift:
        return _Schedule(start=shift.start_time, end=shift.end_time)
    return _Schedule(start=company.work_start_time, end=DEFAULT_WORK_END)


def _holiday_dates(holidays: Iterable[Holiday]) -> set[date]:
    dates: set[date] = set()
    for h in holidays:
        if h.is_active:
            dates.update(h.dates())
    return dates


class PayrollAggregator:
    """Stateless: one call per employee, safe to run in parallel."""

    def aggregate(
        self,
        *,
        profile: EmployeeProfile,
        shift: Optional[Shift],
        company: CompanyPolicy,
        events: Sequence[AttendanceRecord],
        leaves: Sequence[LeaveGrant],
        holidays: Sequence[Holiday],
        period_start: date,
        period_end: date,
        as_of: date,
    ) -> PayrollResult:
        schedule = _schedule_for(shift, company)
        holiday_dates = _holiday_dates(holidays)
        my_leaves = [l for l in leaves if l.user_id == profile.user_id]
        my_events = sorted(
            (e for e in events if e.user_id == profile.user_id),
            key=lambda e: (e.recorded_at, e.record_id),
        )
        grace = timedelta(minutes=max(0, int(company.grace_period_minutes)))
        standard_minutes = int(round(float(company.standard_work_hours) * 60))
        overtime_threshold = max(0, int(company.overtime_start_after_minutes))

        counts = dict.fromkeys(
            (
                "working_days",
                "present_days",
                "absent_days",
                "late_days",
                "early_leave_days",
                "late_minutes",
                "early_leave_minutes",
                "worked_minutes",
                "overtime_minutes",
                "holiday_days",
                "weekend_days",
                "annual_leave_days",
                "sick_days",
                "permit_days",
            ),
            0,
        )

        for day in iter_days(period_start, period_end):
            if day in holiday_dates:
                counts["holiday_days"] += 1
                continue
            if day.weekday() not in WORKING_WEEKDAYS:
                counts["weekend_days"] += 1
                continue

            counts["working_days"] += 1

            leave = next((l for l in my_leaves if l.covers(day)), None)
            if leave:
                if leave.leave_type == LeaveType.SICK:
                    counts["sick_days"] += 1
                elif leave.leave_type == LeaveType.PERMIT:
                    counts["permit_days"] += 1
                else:
                    counts["annual_leave_days"] += 1
                continue

            window_start, window_end = schedule.window(day)
            day_events = [e for e in my_events if window_start <= e.recorded_at < window_end]
            clock_ins = [e for e in day_events if e.event_kind == EventKind.CLOCK_IN]
            clock_outs = [e for e in day_events if e.event_kind == EventKind.CLOCK_OUT]

            if not clock_ins:
                if day <= as_of:
                    counts["absent_days"] += 1
                continue

            counts["present_days"] += 1
            first_in = clock_ins[0].recorded_at
            last_out = clock_outs[-1].recorded_at if clock_outs else None

            if profile.is_office:
                late = floor_minutes(first_in - (schedule.start_at(day) + grace))
                if late > 0:
                    counts["late_days"] += 1
                    counts["late_minutes"] += late
                if last_out is not None:
                    early = floor_minutes(schedule.end_at(day) - last_out)
                    if early > 0:
                        counts["early_leave_days"] += 1
                        counts["early_leave_minutes"] += early

            if last_out is not None:
                worked = floor_minutes(last_out - first_in)
                counts["worked_minutes"] += worked
                excess = max(0, worked - standard_minutes)
                if excess > 0 and excess >= overtime_threshold:
                    counts["overtime_minutes"] += excess

        logger.debug(
            "Aggregated payroll for user %s %s..%s: %s",
            profile.user_id,
            period_start,
            period_end,
            counts,
        )
        return PayrollResult(
            user_id=profile.user_id,
            full_name=profile.full_name,
            period_start=period_start,
            period_end=period_end,
            **counts,
        )
