from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..audit.recorder import AuditRecorder
from ..core.enums import LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)


class RequestService:
    """Use case: employees ask for leave, admins decide."""

    def __init__(self, requests: RequestRepository, audit: AuditRecorder):
        self._requests = requests
        self._audit = audit

    @staticmethod
    def _parse_leave_type(value: str) -> LeaveType:
        try:
            return LeaveType((value or "").strip().lower())
        except ValueError:
            raise ValidationError("Leave type must be one of: annual, sick, permit")

    def create_leave(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str = "",
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request leave")

        kind = self._parse_leave_type(leave_type)
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        return self._requests.create_leave(
            user_id=int(user_id),
            leave_type=kind,
            start_date=start_date,
            end_date=end_date,
            reason=(reason or "").strip() or None,
        )

    def approve_leave(self, **kwargs) -> None:
        self._decide(status=RequestStatus.APPROVED, **kwargs)

    def reject_leave(self, **kwargs) -> None:
        self._decide(status=RequestStatus.REJECTED, **kwargs)

    def _decide(
        self,
        *,
        status: RequestStatus,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        admin_note: str = "",
        request_meta: Optional[dict] = None,
    ) -> None:
        if not current_role.is_privileged:
            raise AuthorizationError("You do not have permission for this action")

        req = self._requests.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        note = (admin_note or "").strip() or None
        decided = self._requests.decide_leave(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_user_id),
            admin_note=note,
        )
        if not decided:
            raise ValidationError("Leave request has already been decided")

        action = "approve_leave" if status == RequestStatus.APPROVED else "reject_leave"
        logger.info("Leave request %s %s by %s", request_id, status.value, admin_user_id)
        self._audit.record(
            actor_id=admin_user_id,
            action=action,
            resource_type="leave_request",
            resource_id=str(request_id),
            details={
                "employee_id": req.user_id,
                "leave_type": req.leave_type.value,
                "start_date": req.start_date.isoformat(),
                "end_date": req.end_date.isoformat(),
                "review_notes": note,
            },
            request_meta=request_meta,
        )

    def list_my_requests(self, *, user_id: int) -> Sequence[LeaveRequest]:
        return self._requests.list_leave_requests(user_id=int(user_id), limit=200)

    def list_admin_pending(self) -> Sequence[LeaveRequest]:
        return self._requests.list_leave_requests(status=RequestStatus.PENDING, limit=500)
