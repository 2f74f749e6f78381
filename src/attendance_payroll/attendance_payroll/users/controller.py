from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..common.http import json_body, json_errors
from ..container import Container
from ..core.enums import EmployeeKind, Role, SalaryBasis
from ..core.exceptions import ValidationError
from .model import EmployeeProfile


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def _profile_from(body: dict[str, Any], user_id: int) -> EmployeeProfile:
    try:
        kind = EmployeeKind(body.get("employee_kind") or EmployeeKind.OFFICE.value)
        basis = SalaryBasis(body.get("salary_basis") or SalaryBasis.MONTHLY.value)
    except ValueError:
        raise ValidationError("Invalid employee_kind or salary_basis")

    return EmployeeProfile(
        user_id=user_id,
        full_name=str(body.get("full_name") or ""),
        employee_kind=kind,
        requires_geofence=bool(body.get("requires_geofence", True)),
        shift_id=_optional_int(body.get("shift_id"), "shift_id"),
        company_id=_optional_int(body.get("company_id"), "company_id"),
        base_salary=_optional_int(body.get("base_salary"), "base_salary") or 0,
        salary_basis=basis,
        tax_status=str(body.get("tax_status") or "TK/0"),
        department=body.get("department"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        body = json_body() or request.form
        s_user = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify({"success": True, "user": {"id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/employees", methods=["POST"], endpoint="provision_employee")
    @json_errors
    def provision_employee():
        admin = container.auth_service.require_privileged(session.get("user_id"))
        body = json_body()
        try:
            role = Role(body.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Invalid role")

        user_id = container.user_service.provision_employee(
            current_role=admin.role,
            username=str(body.get("username") or ""),
            password=str(body.get("password") or ""),
            profile=_profile_from(body, user_id=0),
            role=role,
            email=body.get("email"),
        )
        return jsonify({"success": True, "id": user_id}), 201

    @app.route("/api/employees/<int:user_id>/profile", methods=["PUT"], endpoint="update_profile")
    @json_errors
    def update_profile(user_id: int):
        admin = container.auth_service.require_privileged(session.get("user_id"))
        container.user_service.update_profile(current_role=admin.role, profile=_profile_from(json_body(), user_id))
        return jsonify({"success": True, "id": user_id})
