from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import TransitionStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.state_machine import AttendanceStateMachine
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.recorder import AuditRecorder
from .company.mysql_company_repository import MySQLCompanyRepository
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .payroll.service import PayrollService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import RequestService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    request_service: RequestService
    holiday_service: HolidayService
    audit_recorder: AuditRecorder
    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users,
    shifts,
    companies,
    holidays,
    requests,
    attendance,
    audit,
    strict_break_ordering: bool = True,
    default_company_id: Optional[int] = None,
    conn: Optional[DatabaseConnection] = None,
    **service_kwargs,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    recorder = AuditRecorder(audit)
    auth_service = AuthService(users)
    attendance_service = AttendanceService(
        attendance,
        auth_service,
        companies,
        shifts,
        recorder,
        state_machine=AttendanceStateMachine(TransitionStrategyFactory(strict_breaks=strict_break_ordering)),
        default_company_id=default_company_id,
        **service_kwargs,
    )
    payroll_service = PayrollService(
        users,
        shifts,
        companies,
        holidays,
        requests,
        attendance_service.history,
        recorder,
        default_company_id=default_company_id,
        **service_kwargs,
    )

    return Container(
        auth_service=auth_service,
        user_service=UserService(users),
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        request_service=RequestService(requests, recorder),
        holiday_service=HolidayService(holidays, recorder),
        audit_recorder=recorder,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    strict_break_ordering: bool = True,
    default_company_id: Optional[int] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        users=MySQLUserRepository(conn),
        shifts=MySQLShiftRepository(conn),
        companies=MySQLCompanyRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        requests=MySQLRequestRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        audit=MySQLAuditRepository(conn),
        strict_break_ordering=strict_break_ordering,
        default_company_id=default_company_id,
        conn=conn,
    )
