from __future__ import annotations

import math
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, time
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_payroll.attendance_payroll.attendance.model import AttendanceRecord
from src.attendance_payroll.attendance_payroll.audit.model import AuditEntry
from src.attendance_payroll.attendance_payroll.company.model import CompanyPolicy
from src.attendance_payroll.attendance_payroll.container import build_services
from src.attendance_payroll.attendance_payroll.core.constants import EARTH_RADIUS_METERS
from src.attendance_payroll.attendance_payroll.core.enums import EmployeeKind, EventKind, RequestStatus, Role
from src.attendance_payroll.attendance_payroll.core.exceptions import PersistenceError
from src.attendance_payroll.attendance_payroll.holidays.model import Holiday
from src.attendance_payroll.attendance_payroll.requests.model import LeaveRequest
from src.attendance_payroll.attendance_payroll.shifts.model import Shift
from src.attendance_payroll.attendance_payroll.users.model import EmployeeProfile, User

OFFICE_LAT = -6.2
OFFICE_LNG = 106.816666

ADMIN_ID = 1
EMPLOYEE_ID = 2
FIELD_ID = 3


def north_of_office(meters: float) -> float:
    """Latitude exactly ``meters`` north of the office (same longitude)."""
    return OFFICE_LAT + math.degrees(meters / EARTH_RADIUS_METERS)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeUsersRepo:
    def __init__(self):
        self.users: dict[int, User] = {}
        self.profiles: dict[int, EmployeeProfile] = {}
        self._next_id = 100

    def add(self, user: User, profile: EmployeeProfile | None = None):
        self.users[user.user_id] = user
        if profile:
            self.profiles[user.user_id] = profile

    def get_by_id(self, user_id):
        return self.users.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self.users.values() if u.username == username), None)

    def get_profile(self, user_id):
        return self.profiles.get(int(user_id))

    def list_active_profiles(self, user_ids=None):
        rows = [p for p in self.profiles.values() if self.users[p.user_id].is_active]
        if user_ids:
            rows = [p for p in rows if p.user_id in set(user_ids)]
        return sorted(rows, key=lambda p: p.full_name)

    def create_user_with_profile(self, *, username, password_hash, role, email, profile):
        uid = self._next_id
        self._next_id += 1
        self.users[uid] = User(uid, profile.full_name, username, password_hash, role, email=email)
        self.profiles[uid] = replace(profile, user_id=uid)
        return uid

    def upsert_profile(self, profile):
        current = self.profiles.get(profile.user_id)
        full_name = current.full_name if current else self.users[profile.user_id].full_name
        self.profiles[profile.user_id] = replace(profile, full_name=full_name)


class FakeShiftsRepo:
    def __init__(self, shifts=()):
        self.shifts = {s.shift_id: s for s in shifts}

    def list_all(self):
        return list(self.shifts.values())

    def get_by_id(self, shift_id):
        return self.shifts.get(int(shift_id))


class FakeCompanyRepo:
    def __init__(self, companies=()):
        self.companies = {c.company_id: c for c in companies}

    def get_by_id(self, company_id):
        return self.companies.get(int(company_id))


class FakeHolidaysRepo:
    def __init__(self):
        self.holidays: list[Holiday] = []

    def list_overlapping(self, *, start, end, active_only=True):
        return [
            h
            for h in self.holidays
            if h.start_date <= end and h.last_date >= start and (h.is_active or not active_only)
        ]

    def create(self, *, name, start_date, end_date):
        hid = len(self.holidays) + 1
        self.holidays.append(Holiday(hid, name, start_date, end_date))
        return hid


class FakeRequestsRepo:
    def __init__(self):
        self.leaves: dict[int, LeaveRequest] = {}

    def create_leave(self, *, user_id, leave_type, start_date, end_date, reason):
        rid = len(self.leaves) + 1
        self.leaves[rid] = LeaveRequest(
            request_id=rid,
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2026, 3, 1, 9, 0, 0),
        )
        return rid

    def get_leave(self, *, request_id):
        return self.leaves.get(int(request_id))

    def list_leave_requests(self, *, status=None, user_id=None, limit=200):
        rows = list(self.leaves.values())
        if status:
            rows = [r for r in rows if r.status == status]
        if user_id is not None:
            rows = [r for r in rows if r.user_id == int(user_id)]
        return rows[:limit]

    def list_approved_overlapping(self, *, start, end, user_ids=None):
        return [
            r
            for r in self.leaves.values()
            if r.status == RequestStatus.APPROVED
            and r.start_date <= end
            and r.end_date >= start
            and (not user_ids or r.user_id in set(user_ids))
        ]

    def decide_leave(self, *, request_id, status, decided_by, admin_note=None):
        req = self.leaves.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.leaves[int(request_id)] = replace(
            req,
            status=status,
            decided_by=decided_by,
            decided_at=datetime(2026, 3, 1, 10, 0, 0),
            admin_note=admin_note,
        )
        return True


class FakeLedger:
    def __init__(self, repo: "FakeAttendanceRepo", user_id: int, day_records):
        self._repo = repo
        self._user_id = user_id
        self._day_records = day_records

    def records(self):
        return list(self._day_records)

    def append(self, *, event_kind, recorded_at, latitude, longitude, accuracy_meters, photo_ref, notes=None):
        if self._repo.fail_on_append:
            raise PersistenceError("Failed to save attendance record")
        record = AttendanceRecord(
            record_id=len(self._repo.records) + 1,
            user_id=self._user_id,
            event_kind=EventKind(event_kind),
            recorded_at=recorded_at,
            latitude=latitude,
            longitude=longitude,
            accuracy_meters=accuracy_meters,
            photo_ref=photo_ref,
            notes=notes,
        )
        self._repo.records.append(record)
        return record


class FakeAttendanceRepo:
    def __init__(self):
        self.records: list[AttendanceRecord] = []
        self.locked: list[tuple[int, object]] = []
        self.fail_on_append = False
        # Called while waiting for the day lock, before it is acquired.
        self.on_lock = None
        self._day_locks: dict[tuple[int, object], threading.Lock] = {}
        self._guard = threading.Lock()

    def add(self, user_id, kind, at, *, notes=None):
        record = AttendanceRecord(
            record_id=len(self.records) + 1,
            user_id=user_id,
            event_kind=EventKind(kind),
            recorded_at=at,
            latitude=OFFICE_LAT,
            longitude=OFFICE_LNG,
            accuracy_meters=10.0,
            photo_ref="photos/x.jpg",
            notes=notes,
        )
        self.records.append(record)
        return record

    @contextmanager
    def locked_day(self, *, user_id, work_date):
        self.locked.append((user_id, work_date))
        with self._guard:
            day_lock = self._day_locks.setdefault((user_id, work_date), threading.Lock())
        if self.on_lock:
            self.on_lock()
        with day_lock:
            day_records = [r for r in self.records if r.user_id == user_id and r.recorded_at.date() == work_date]
            yield FakeLedger(self, user_id, day_records)

    def list_for_user_between(self, *, user_id, start, end):
        rows = [r for r in self.records if r.user_id == user_id and start <= r.recorded_at < end]
        return sorted(rows, key=lambda r: r.recorded_at, reverse=True)

    def list_for_users_between(self, *, start, end, user_ids=None):
        rows = [r for r in self.records if start <= r.recorded_at < end]
        if user_ids:
            rows = [r for r in rows if r.user_id in set(user_ids)]
        return sorted(rows, key=lambda r: (r.user_id, r.recorded_at))


class FakeAuditRepo:
    def __init__(self):
        self.entries: list[AuditEntry] = []
        self.fail = False

    def append(self, *, actor_id, action, resource_type, resource_id, details, ip_address, user_agent):
        if self.fail:
            raise RuntimeError("audit store unavailable")
        self.entries.append(
            AuditEntry(
                audit_id=len(self.entries) + 1,
                actor_id=actor_id,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                details=details,
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=datetime(2026, 3, 4, 12, 0, 0),
            )
        )

    def list_recent(self, *, action=None, limit=100):
        rows = [e for e in reversed(self.entries) if action is None or e.action == action]
        return rows[:limit]

    def actions(self):
        return [e.action for e in self.entries]


@pytest.fixture
def clock():
    # Wednesday
    return FakeClock(datetime(2026, 3, 4, 8, 5, 0))


@pytest.fixture
def company():
    return CompanyPolicy(
        company_id=1,
        name="Acme",
        office_latitude=OFFICE_LAT,
        office_longitude=OFFICE_LNG,
        radius_meters=100,
        grace_period_minutes=15,
        late_penalty_per_minute=1000,
        early_leave_penalty_per_minute=500,
        overtime_rate_per_hour=25000,
    )


@pytest.fixture
def office_shift():
    return Shift(shift_id=1, shift_name="Office", start_time=time(8, 0), end_time=time(17, 0), break_minutes=60)


@pytest.fixture
def repos(company, office_shift):
    users = FakeUsersRepo()
    users.add(User(ADMIN_ID, "Admin", "admin", generate_password_hash("admin123"), Role.ADMIN))
    users.add(
        User(EMPLOYEE_ID, "Budi", "budi", generate_password_hash("secret1"), Role.EMPLOYEE),
        EmployeeProfile(EMPLOYEE_ID, "Budi", shift_id=1, company_id=1, base_salary=5_000_000),
    )
    users.add(
        User(FIELD_ID, "Sari", "sari", generate_password_hash("secret2"), Role.EMPLOYEE),
        EmployeeProfile(
            FIELD_ID,
            "Sari",
            employee_kind=EmployeeKind.FIELD,
            requires_geofence=False,
            company_id=1,
            base_salary=200_000,
        ),
    )
    return SimpleNamespace(
        users=users,
        shifts=FakeShiftsRepo([office_shift]),
        companies=FakeCompanyRepo([company]),
        holidays=FakeHolidaysRepo(),
        requests=FakeRequestsRepo(),
        attendance=FakeAttendanceRepo(),
        audit=FakeAuditRepo(),
    )


@pytest.fixture
def make_container(repos, clock):
    def _make(**kwargs):
        return build_services(
            users=repos.users,
            shifts=repos.shifts,
            companies=repos.companies,
            holidays=repos.holidays,
            requests=repos.requests,
            attendance=repos.attendance,
            audit=repos.audit,
            clock=clock,
            **kwargs,
        )

    return _make


@pytest.fixture
def container(make_container):
    return make_container()


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_payroll.attendance_payroll.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id

    return _login


@pytest.fixture
def valid_payload():
    return {
        "event_kind": "clock_in",
        "latitude": north_of_office(20),
        "longitude": OFFICE_LNG,
        "accuracy_meters": 15,
        "photo_ref": "attendance/2/2026-03-04/clock_in.jpg",
    }


@pytest.fixture
def office_point():
    """(lat, lng) at ``meters`` north of the office."""

    def _point(meters: float):
        return north_of_office(meters), OFFICE_LNG

    return _point
