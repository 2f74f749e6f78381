from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import json_errors
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit-logs", methods=["GET"], endpoint="audit_logs")
    @json_errors
    def audit_logs():
        container.auth_service.require_privileged(session.get("user_id"))
        try:
            limit = int(request.args.get("limit", DEFAULT_AUDIT_LIMIT))
        except ValueError:
            raise ValidationError("limit must be an integer")

        entries = container.audit_recorder.list_recent(action=request.args.get("action"), limit=limit)
        return jsonify(
            {
                "logs": [
                    {
                        "id": e.audit_id,
                        "actor_id": e.actor_id,
                        "action": e.action,
                        "resource_type": e.resource_type,
                        "resource_id": e.resource_id,
                        "details": e.details,
                        "ip_address": e.ip_address,
                        "user_agent": e.user_agent,
                        "created_at": e.created_at.isoformat() if e.created_at else None,
                    }
                    for e in entries
                ]
            }
        )
