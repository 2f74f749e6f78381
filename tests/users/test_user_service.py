from __future__ import annotations

from dataclasses import replace

import pytest
from werkzeug.security import check_password_hash

from src.attendance_payroll.attendance_payroll.core.enums import EmployeeKind, ErrorCode, Role
from src.attendance_payroll.attendance_payroll.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.attendance_payroll.attendance_payroll.users.model import EmployeeProfile


def _profile(**kwargs):
    base = dict(user_id=0, full_name="Wati", company_id=1, base_salary=4_000_000)
    base.update(kwargs)
    return EmployeeProfile(**base)


def test_authenticate(container):
    s_user = container.auth_service.authenticate(" budi ", "secret1")
    assert (s_user.user_id, s_user.role) == (2, Role.EMPLOYEE)


@pytest.mark.parametrize("username,password", [("budi", "wrong"), ("ghost", "secret1"), ("", "")])
def test_authenticate_failure(container, username, password):
    with pytest.raises(AuthenticationError) as excinfo:
        container.auth_service.authenticate(username, password)
    assert excinfo.value.code == ErrorCode.INVALID_USER


def test_inactive_user_is_invalid(container, repos):
    repos.users.users[2] = replace(repos.users.users[2], is_active=False)
    with pytest.raises(AuthenticationError) as excinfo:
        container.auth_service.resolve(2)
    assert excinfo.value.code == ErrorCode.INVALID_USER


def test_require_privileged(container):
    assert container.auth_service.require_privileged(1).role == Role.ADMIN
    with pytest.raises(AuthorizationError):
        container.auth_service.require_privileged(2)


def test_provision_creates_identity_and_profile(container, repos):
    uid = container.user_service.provision_employee(
        current_role=Role.ADMIN, username="wati", password="secret9", profile=_profile(full_name=" Wati ")
    )

    user = repos.users.get_by_id(uid)
    assert user.username == "wati"
    assert check_password_hash(user.password_hash, "secret9")
    assert repos.users.get_profile(uid).full_name == "Wati"
    assert repos.users.get_profile(uid).company_id == 1


def test_provision_rejects_duplicate_username(container):
    with pytest.raises(ValidationError):
        container.user_service.provision_employee(
            current_role=Role.ADMIN, username="budi", password="secret9", profile=_profile()
        )


def test_provision_requires_admin(container):
    with pytest.raises(AuthorizationError):
        container.user_service.provision_employee(
            current_role=Role.EMPLOYEE, username="wati", password="secret9", profile=_profile()
        )


def test_update_profile_is_idempotent(container, repos):
    profile = _profile(user_id=2, full_name="Budi", employee_kind=EmployeeKind.FIELD, requires_geofence=False)

    container.user_service.update_profile(current_role=Role.ADMIN, profile=profile)
    first = repos.users.get_profile(2)
    container.user_service.update_profile(current_role=Role.ADMIN, profile=profile)

    assert repos.users.get_profile(2) == first
    assert first.employee_kind == EmployeeKind.FIELD


def test_update_profile_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.user_service.update_profile(current_role=Role.ADMIN, profile=_profile(user_id=77))


def test_employee_endpoints(client, login_as, repos):
    login_as(1)
    resp = client.post(
        "/api/employees",
        json={"username": "wati", "password": "secret9", "full_name": "Wati", "employee_kind": "field"},
    )
    assert resp.status_code == 201
    uid = resp.get_json()["id"]
    assert repos.users.get_profile(uid).employee_kind == EmployeeKind.FIELD

    resp = client.put(f"/api/employees/{uid}/profile", json={"base_salary": 4_500_000, "tax_status": "K/1"})
    assert resp.status_code == 200
    assert repos.users.get_profile(uid).base_salary == 4_500_000

    assert client.post("/api/employees", json={"username": "x", "role": "boss"}).status_code == 400
