from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..audit.recorder import AuditRecorder
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Holiday
from .repository import HolidayRepository


class HolidayService:
    def __init__(self, holidays: HolidayRepository, audit: AuditRecorder):
        self._holidays = holidays
        self._audit = audit

    def create(
        self,
        *,
        current_role: Role,
        actor_id: int,
        name: str,
        start_date: date,
        end_date: Optional[date] = None,
        request_meta: Optional[dict] = None,
    ) -> int:
        if not current_role.is_privileged:
            raise AuthorizationError("You do not have permission for this action")

        name = require_non_empty(name, "Holiday name")
        if end_date is not None and end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        holiday_id = self._holidays.create(name=name, start_date=start_date, end_date=end_date)
        self._audit.record(
            actor_id=actor_id,
            action="create_holiday",
            resource_type="holiday",
            resource_id=str(holiday_id),
            details={
                "name": name,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat() if end_date else None,
            },
            request_meta=request_meta,
        )
        return holiday_id

    def list_range(self, *, start: date, end: date) -> Sequence[Holiday]:
        return self._holidays.list_overlapping(start=start, end=end)
