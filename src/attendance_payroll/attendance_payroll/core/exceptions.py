from __future__ import annotations

from typing import Any

from .enums import ErrorCode


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries a stable ``code`` for clients plus optional ``extra`` fields
    (e.g. measured distance) that explain the rejection.
    """

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, *, code: ErrorCode | None = None, **extra: Any):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.extra = extra


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    default_code = ErrorCode.INVALID_INPUT


class PolicyRejection(DomainError):
    """Raised when a well-formed request is refused by attendance policy."""


class AuthenticationError(DomainError):
    """Raised when the caller identity is missing or invalid."""

    default_code = ErrorCode.NO_AUTH


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    default_code = ErrorCode.FORBIDDEN


class NotFoundError(DomainError):
    default_code = ErrorCode.NOT_FOUND


class PersistenceError(DomainError):
    """Raised when the store refuses a write after all checks passed."""

    default_code = ErrorCode.INSERT_FAILED
