from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str]
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None

    def as_grant(self) -> "LeaveGrant":
        return LeaveGrant(
            user_id=self.user_id,
            leave_type=self.leave_type,
            start_date=self.start_date,
            end_date=self.end_date,
        )


@dataclass(frozen=True)
class LeaveGrant:
    """An approved absence covering an inclusive date range."""

    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
