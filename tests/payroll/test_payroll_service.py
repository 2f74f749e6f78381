from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_payroll.attendance_payroll.core.enums import LeaveType, RequestStatus, Role
from src.attendance_payroll.attendance_payroll.core.exceptions import AuthorizationError, ValidationError

MARCH = (date(2026, 3, 1), date(2026, 3, 31))


def _run(container, **kwargs):
    params = dict(current_role=Role.ADMIN, actor_id=1, start=MARCH[0], end=MARCH[1])
    params.update(kwargs)
    return container.payroll_service.run(**params)


def test_results_for_every_active_profile(container):
    results = _run(container)
    assert [r.full_name for r in results] == ["Budi", "Sari"]
    assert all(r.compensation is not None for r in results)


def test_filter_by_employee(container):
    results = _run(container, user_ids=[3])
    assert [r.user_id for r in results] == [3]


def test_march_figures_for_office_employee(container, repos, clock):
    clock.now = datetime(2026, 3, 31, 20, 0)
    repos.attendance.add(2, "clock_in", datetime(2026, 3, 2, 8, 25))
    repos.attendance.add(2, "clock_out", datetime(2026, 3, 2, 19, 0))
    repos.holidays.create(name="Nyepi", start_date=date(2026, 3, 19), end_date=None)
    rid = repos.requests.create_leave(
        user_id=2, leave_type=LeaveType.SICK, start_date=date(2026, 3, 3), end_date=date(2026, 3, 4), reason=None
    )
    repos.requests.decide_leave(request_id=rid, status=RequestStatus.APPROVED, decided_by=1)

    (budi,) = _run(container, user_ids=[2])

    assert budi.working_days == 21
    assert budi.holiday_days == 1
    assert budi.weekend_days == 9
    assert budi.present_days == 1
    assert budi.sick_days == 2
    assert budi.absent_days == 18
    assert budi.late_minutes == 10
    assert budi.overtime_minutes == 155
    pay = budi.compensation
    assert pay.late_deduction == 10_000
    assert pay.overtime_amount == 65_000
    assert pay.net_salary == 5_000_000 + 65_000 - 10_000


def test_pending_leave_is_not_a_grant(container, repos, clock):
    clock.now = datetime(2026, 3, 31, 20, 0)
    repos.requests.create_leave(
        user_id=2, leave_type=LeaveType.ANNUAL, start_date=date(2026, 3, 2), end_date=date(2026, 3, 2), reason=None
    )
    (budi,) = _run(container, user_ids=[2])
    assert budi.annual_leave_days == 0


def test_run_is_audited(container, repos):
    _run(container, request_meta={"ip_address": "127.0.0.1"})
    entry = repos.audit.entries[-1]
    assert entry.action == "run_payroll"
    assert entry.resource_type == "payroll"
    assert entry.details["employee_count"] == 2
    assert entry.details["period_start"] == "2026-03-01"


def test_run_is_repeatable(container):
    assert _run(container) == _run(container)


def test_employee_cannot_run_payroll(container):
    with pytest.raises(AuthorizationError):
        _run(container, current_role=Role.EMPLOYEE)


def test_inverted_period_rejected(container):
    with pytest.raises(ValidationError):
        _run(container, start=date(2026, 3, 31), end=date(2026, 3, 1))
