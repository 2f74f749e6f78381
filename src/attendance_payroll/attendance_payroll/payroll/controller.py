from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_month
from ..common.http import date_arg, json_errors, request_metadata
from ..container import Container
from ..core.exceptions import ValidationError


def _flag(name: str) -> bool:
    return request.args.get(name, "").lower() in ("1", "true", "yes")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="run_payroll")
    @json_errors
    def run_payroll():
        admin = container.auth_service.require_privileged(session.get("user_id"))

        month = request.args.get("month")
        if month:
            try:
                start, end = parse_month(month)
            except ValueError:
                raise ValidationError("Invalid month, expected YYYY-MM")
        else:
            start = date_arg("start", request.args.get("start"))
            end = date_arg("end", request.args.get("end"))
            if not start or not end:
                raise ValidationError("Provide month=YYYY-MM or both start and end")

        try:
            user_ids = [int(v) for v in request.args.getlist("employee_id")]
        except ValueError:
            raise ValidationError("employee_id must be an integer")

        results = container.payroll_service.run(
            current_role=admin.role,
            actor_id=admin.user_id,
            start=start,
            end=end,
            user_ids=user_ids or None,
            include_contributions=_flag("contributions"),
            include_tax=_flag("tax"),
            request_meta=request_metadata(request),
        )
        return jsonify(
            {
                "period_start": start.isoformat(),
                "period_end": end.isoformat(),
                "results": [r.as_dict() for r in results],
            }
        )
