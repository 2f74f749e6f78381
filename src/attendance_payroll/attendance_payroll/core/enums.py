from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    DEVELOPER = "developer"
    EMPLOYEE = "employee"

    @property
    def is_privileged(self) -> bool:
        return self in (Role.ADMIN, Role.DEVELOPER)


class EventKind(str, Enum):
    """Kind of presence event an employee can submit."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_OUT = "break_out"
    BREAK_IN = "break_in"


class DayState(str, Enum):
    """Where an employee stands within the current calendar day."""

    ABSENT = "absent"
    PRESENT = "present"
    ON_BREAK = "on_break"
    DEPARTED = "departed"


class EmployeeKind(str, Enum):
    OFFICE = "office"
    FIELD = "field"


class SalaryBasis(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERMIT = "permit"


class RequestStatus(str, Enum):
    """Approval workflow status of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ErrorCode(str, Enum):
    """Stable, machine-checkable error codes returned to clients."""

    INVALID_TYPE = "INVALID_TYPE"
    INVALID_COORDS = "INVALID_COORDS"
    NO_PHOTO = "NO_PHOTO"
    LOW_ACCURACY = "LOW_ACCURACY"
    OUTSIDE_GEOFENCE = "OUTSIDE_GEOFENCE"
    ALREADY_CLOCKED_IN = "ALREADY_CLOCKED_IN"
    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
    ON_BREAK = "ON_BREAK"
    ALREADY_ON_BREAK = "ALREADY_ON_BREAK"
    NOT_ON_BREAK = "NOT_ON_BREAK"
    NO_AUTH = "NO_AUTH"
    INVALID_USER = "INVALID_USER"
    NO_PROFILE = "NO_PROFILE"
    INSERT_FAILED = "INSERT_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
