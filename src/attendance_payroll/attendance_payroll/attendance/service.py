from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Mapping, Optional

from ..audit.recorder import AuditRecorder
from ..common.datetime_utils import now_local
from ..company.model import CompanyPolicy
from ..company.repository import CompanyRepository
from ..core.constants import DEFAULT_HISTORY_DAYS
from ..core.enums import ErrorCode
from ..core.exceptions import DomainError, PersistenceError, ValidationError
from ..shifts.repository import ShiftRepository
from ..users.model import EmployeeProfile
from ..users.service import AuthService
from .history import AttendanceHistoryReader
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .state_machine import AttendanceStateMachine
from .validator import AttendanceEventValidator

logger = logging.getLogger(__name__)

_SUCCESS_MESSAGES = {
    "clock_in": "Clock in recorded",
    "clock_out": "Clock out recorded",
    "break_out": "Break started",
    "break_in": "Break ended",
}

# The calendar day can roll over at most once while we wait for the lock.
_MAX_LOCK_ATTEMPTS = 2


def resolve_company(
    companies: CompanyRepository,
    profile: EmployeeProfile,
    default_company_id: Optional[int] = None,
) -> CompanyPolicy:
    """Stored policy of the employee's company, or documented defaults."""
    company_id = profile.company_id or default_company_id
    company = companies.get_by_id(int(company_id)) if company_id else None
    return company or CompanyPolicy(company_id=company_id)


class AttendanceService:
    """Use case: accept presence events and expose the employee's history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        auth: AuthService,
        companies: CompanyRepository,
        shifts: ShiftRepository,
        audit: AuditRecorder,
        *,
        validator: AttendanceEventValidator | None = None,
        state_machine: AttendanceStateMachine | None = None,
        clock: Callable[[], datetime] = now_local,
        default_company_id: Optional[int] = None,
    ):
        self._attendance = attendance
        self._auth = auth
        self._companies = companies
        self._shifts = shifts
        self._audit = audit
        self._validator = validator or AttendanceEventValidator()
        self._machine = state_machine or AttendanceStateMachine()
        self._clock = clock
        self._default_company_id = default_company_id
        self._history = AttendanceHistoryReader(attendance)

    @property
    def history(self) -> AttendanceHistoryReader:
        return self._history

    def submit(
        self,
        user_id: Optional[Any],
        payload: Mapping[str, Any],
        *,
        request_meta: Optional[dict[str, Any]] = None,
    ) -> AttendanceRecord:
        user = self._auth.resolve(user_id)
        try:
            submission = self._validator.parse_submission(payload)
            profile = self._auth.get_profile(user.user_id)
            company = resolve_company(self._companies, profile, self._default_company_id)
            location = self._validator.check_location(submission, profile, company)
        except DomainError as exc:
            logger.warning("Attendance rejected for user %s: %s (%s)", user.user_id, exc.code.value, exc.message)
            raise

        record = self._persist(user.user_id, submission, location.note)

        logger.info(
            "Attendance %s recorded for user %s at %s",
            record.event_kind.value,
            user.user_id,
            record.recorded_at.isoformat(),
        )
        details: dict[str, Any] = {
            "record_type": record.event_kind.value,
            "latitude": record.latitude,
            "longitude": record.longitude,
            "accuracy_meters": record.accuracy_meters,
            "suspected_mock": location.suspected_mock,
        }
        if location.distance_meters is not None:
            details["distance_meters"] = round(location.distance_meters)
            details["radius_meters"] = location.radius_meters
        self._audit.record(
            actor_id=user.user_id,
            action=record.event_kind.value,
            resource_type="attendance_record",
            resource_id=str(record.record_id),
            details=details,
            request_meta=request_meta,
        )
        return record

    def _persist(self, user_id: int, submission, note: Optional[str]) -> AttendanceRecord:
        work_date = self._clock().date()
        for _ in range(_MAX_LOCK_ATTEMPTS):
            with self._attendance.locked_day(user_id=user_id, work_date=work_date) as ledger:
                # Timestamp is read only once the day lock is held.
                now = self._clock()
                if now.date() != work_date:
                    work_date = now.date()
                    continue
                try:
                    self._machine.check(ledger.records(), submission.event_kind)
                except DomainError as exc:
                    logger.warning("Attendance rejected for user %s: %s (%s)", user_id, exc.code.value, exc.message)
                    raise
                return ledger.append(
                    event_kind=submission.event_kind,
                    recorded_at=now,
                    latitude=submission.latitude,
                    longitude=submission.longitude,
                    accuracy_meters=submission.accuracy_meters,
                    photo_ref=submission.photo_ref,
                    notes=note,
                )
        logger.error("Could not settle the attendance day for user %s", user_id)
        raise PersistenceError("Failed to save attendance record")

    @staticmethod
    def success_message(record: AttendanceRecord) -> str:
        return _SUCCESS_MESSAGES[record.event_kind.value]

    def today(self, user_id: Optional[Any]) -> dict[str, Any]:
        user = self._auth.resolve(user_id)
        today = self._clock().date()
        records = self._history.for_day(user.user_id, today)

        scheduled = today.weekday() < 5
        profile = self._auth.get_profile(user.user_id)
        if profile.shift_id:
            shift = self._shifts.get_by_id(int(profile.shift_id))
            if shift:
                scheduled = shift.works_on(today.weekday())

        return {
            "date": today.isoformat(),
            "state": self._machine.day_state(records).value,
            "is_scheduled_day": scheduled,
            "records": [r.as_dict() for r in records],
        }

    def history_for(self, user_id: Optional[Any], *, start: Optional[date] = None, end: Optional[date] = None):
        user = self._auth.resolve(user_id)
        end = end or self._clock().date()
        start = start or end - timedelta(days=DEFAULT_HISTORY_DAYS - 1)
        if end < start:
            raise ValidationError("End date must not be before start date", code=ErrorCode.INVALID_INPUT)
        return self._history.for_period(user.user_id, start, end)
