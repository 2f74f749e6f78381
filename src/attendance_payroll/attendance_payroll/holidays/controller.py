from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request, session

from ..common.http import date_arg, json_body, json_errors, request_metadata
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays", methods=["POST"], endpoint="create_holiday")
    @json_errors
    def create_holiday():
        admin = container.auth_service.require_privileged(session.get("user_id"))
        body = json_body()
        start = date_arg("date", body.get("date"))
        if not start:
            raise ValidationError("date is required")

        holiday_id = container.holiday_service.create(
            current_role=admin.role,
            actor_id=admin.user_id,
            name=str(body.get("name") or ""),
            start_date=start,
            end_date=date_arg("end_date", body.get("end_date")),
            request_meta=request_metadata(request),
        )
        return jsonify({"success": True, "id": holiday_id}), 201

    @app.route("/api/holidays", methods=["GET"], endpoint="list_holidays")
    @json_errors
    def list_holidays():
        container.auth_service.resolve(session.get("user_id"))
        today = date.today()
        start = date_arg("start", request.args.get("start")) or date(today.year, 1, 1)
        end = date_arg("end", request.args.get("end")) or date(today.year, 12, 31)
        holidays = container.holiday_service.list_range(start=start, end=end)
        return jsonify(
            {
                "holidays": [
                    {
                        "id": h.holiday_id,
                        "name": h.name,
                        "date": h.start_date.isoformat(),
                        "end_date": h.end_date.isoformat() if h.end_date else None,
                        "is_active": h.is_active,
                    }
                    for h in holidays
                ]
            }
        )
