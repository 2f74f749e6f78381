from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request, session

from ..common.http import date_arg, json_body, json_errors, request_metadata
from ..container import Container
from ..core.exceptions import ValidationError
from .model import LeaveRequest


def _leave_json(req: LeaveRequest) -> dict[str, Any]:
    return {
        "id": req.request_id,
        "user_id": req.user_id,
        "leave_type": req.leave_type.value,
        "start_date": req.start_date.isoformat(),
        "end_date": req.end_date.isoformat(),
        "reason": req.reason,
        "status": req.status.value,
        "created_at": req.created_at.isoformat() if req.created_at else None,
        "decided_by": req.decided_by,
        "decided_at": req.decided_at.isoformat() if req.decided_at else None,
        "admin_note": req.admin_note,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @json_errors
    def create_leave():
        user = container.auth_service.resolve(session.get("user_id"))
        body = json_body()
        start = date_arg("start_date", body.get("start_date"))
        end = date_arg("end_date", body.get("end_date"))
        if not start or not end:
            raise ValidationError("start_date and end_date are required")

        request_id = container.request_service.create_leave(
            current_role=user.role,
            user_id=user.user_id,
            leave_type=str(body.get("leave_type") or ""),
            start_date=start,
            end_date=end,
            reason=str(body.get("reason") or ""),
        )
        return jsonify({"success": True, "id": request_id}), 201

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @json_errors
    def list_leaves():
        user = container.auth_service.resolve(session.get("user_id"))
        if user.role.is_privileged:
            rows = container.request_service.list_admin_pending()
        else:
            rows = container.request_service.list_my_requests(user_id=user.user_id)
        return jsonify({"requests": [_leave_json(r) for r in rows]})

    def _decide(request_id: int, approve: bool):
        admin = container.auth_service.require_privileged(session.get("user_id"))
        decide = container.request_service.approve_leave if approve else container.request_service.reject_leave
        decide(
            current_role=admin.role,
            admin_user_id=admin.user_id,
            request_id=request_id,
            admin_note=str(json_body().get("admin_note") or ""),
            request_meta=request_metadata(request),
        )
        return jsonify({"success": True, "id": request_id, "status": "approved" if approve else "rejected"})

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @json_errors
    def approve_leave(request_id: int):
        return _decide(request_id, approve=True)

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @json_errors
    def reject_leave(request_id: int):
        return _decide(request_id, approve=False)
