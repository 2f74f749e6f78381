from __future__ import annotations

from datetime import date

import pytest

from src.attendance_payroll.attendance_payroll.core.enums import LeaveType, RequestStatus, Role
from src.attendance_payroll.attendance_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _create(container, **kwargs):
    params = dict(
        current_role=Role.EMPLOYEE,
        user_id=2,
        leave_type="sick",
        start_date=date(2026, 3, 10),
        end_date=date(2026, 3, 11),
        reason="  flu ",
    )
    params.update(kwargs)
    return container.request_service.create_leave(**params)


def test_employee_creates_pending_leave(container, repos):
    rid = _create(container)
    req = repos.requests.get_leave(request_id=rid)
    assert req.status == RequestStatus.PENDING
    assert req.leave_type == LeaveType.SICK
    assert req.reason == "flu"


def test_admin_cannot_request_leave(container):
    with pytest.raises(AuthorizationError):
        _create(container, current_role=Role.ADMIN)


def test_end_before_start_rejected(container):
    with pytest.raises(ValidationError):
        _create(container, end_date=date(2026, 3, 9))


def test_unknown_leave_type_rejected(container):
    with pytest.raises(ValidationError):
        _create(container, leave_type="vacation")


def test_approve_is_audited(container, repos):
    rid = _create(container)

    container.request_service.approve_leave(
        current_role=Role.ADMIN, admin_user_id=1, request_id=rid, admin_note="get well"
    )

    assert repos.requests.get_leave(request_id=rid).status == RequestStatus.APPROVED
    entry = repos.audit.entries[-1]
    assert entry.action == "approve_leave"
    assert entry.resource_id == str(rid)
    assert entry.details["employee_id"] == 2
    assert entry.details["review_notes"] == "get well"


def test_reject_is_audited(container, repos):
    rid = _create(container)
    container.request_service.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=rid)
    assert repos.requests.get_leave(request_id=rid).status == RequestStatus.REJECTED
    assert repos.audit.actions() == ["reject_leave"]


def test_only_pending_can_be_decided(container):
    rid = _create(container)
    container.request_service.approve_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=rid)
    with pytest.raises(ValidationError):
        container.request_service.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=rid)


def test_employee_cannot_decide(container):
    rid = _create(container)
    with pytest.raises(AuthorizationError):
        container.request_service.approve_leave(current_role=Role.EMPLOYEE, admin_user_id=2, request_id=rid)


def test_missing_request(container):
    with pytest.raises(NotFoundError):
        container.request_service.approve_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=42)


def test_leave_endpoints(client, login_as, repos):
    login_as(2)
    resp = client.post(
        "/api/leaves",
        json={"leave_type": "permit", "start_date": "2026-03-12", "end_date": "2026-03-12", "reason": "family"},
    )
    assert resp.status_code == 201
    rid = resp.get_json()["id"]
    assert [r["id"] for r in client.get("/api/leaves").get_json()["requests"]] == [rid]
    assert client.post(f"/api/leaves/{rid}/approve").status_code == 403

    login_as(1)
    assert [r["status"] for r in client.get("/api/leaves").get_json()["requests"]] == ["pending"]
    resp = client.post(f"/api/leaves/{rid}/approve", json={"admin_note": "ok"})
    assert resp.get_json()["status"] == "approved"
    assert client.post(f"/api/leaves/{rid}/reject").status_code == 400
    assert client.post("/api/leaves/999/reject").status_code == 404
