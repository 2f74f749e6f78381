from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveRequest


class RequestRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_approved_overlapping(
        self,
        *,
        start: date,
        end: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[LeaveRequest]:
        """Approved leaves whose range intersects [start, end]."""

        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status``. False if it was not pending."""

        raise NotImplementedError
