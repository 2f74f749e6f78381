from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.enums import ErrorCode
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def status_for(error: DomainError) -> int:
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, AuthorizationError):
        return 403
    if isinstance(error, NotFoundError) or error.code == ErrorCode.NO_PROFILE:
        return 404
    if isinstance(error, PersistenceError) or error.code == ErrorCode.INTERNAL_ERROR:
        return 500
    return 400


def error_response(error: DomainError):
    body: dict[str, Any] = {"error": error.message, "code": error.code.value}
    body.update(error.extra)
    return jsonify(body), status_for(error)


def internal_error_response():
    return jsonify({"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value}), 500


def json_errors(view):
    """Answer domain errors with their stable code; anything else is a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return internal_error_response()

    return wrapper


def request_metadata(req) -> dict[str, Any]:
    forwarded = req.headers.get("X-Forwarded-For", "")
    ip = forwarded.split(",")[0].strip() if forwarded else req.remote_addr
    return {"ip_address": ip, "user_agent": req.headers.get("User-Agent")}


def date_arg(name: str, value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}, expected YYYY-MM-DD")


def json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
