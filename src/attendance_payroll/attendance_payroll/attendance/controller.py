from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import date_arg, json_body, json_errors, request_metadata
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="submit_attendance")
    @json_errors
    def submit_attendance():
        record = container.attendance_service.submit(
            session.get("user_id"),
            json_body(),
            request_meta=request_metadata(request),
        )
        return jsonify(
            {
                "success": True,
                "record": record.as_dict(),
                "message": container.attendance_service.success_message(record),
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @json_errors
    def attendance_today():
        return jsonify(container.attendance_service.today(session.get("user_id")))

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @json_errors
    def attendance_history():
        records = container.attendance_service.history_for(
            session.get("user_id"),
            start=date_arg("start", request.args.get("start")),
            end=date_arg("end", request.args.get("end")),
        )
        return jsonify({"records": [r.as_dict() for r in records]})
