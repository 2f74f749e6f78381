from datetime import time

import pytest

from src.attendance_payroll.attendance_payroll.company.mysql_company_repository import MySQLCompanyRepository


class _Cursor:
    def __init__(self, row):
        self._row = row
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchone(self):
        return self._row

    def close(self):
        pass


class _Connection:
    def __init__(self, row):
        self.cursor_obj = _Cursor(row)
        self.committed = False

    def cursor(self, dictionary=False):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class _ConnFactory:
    def __init__(self, row):
        self.conn = _Connection(row)

    def connect(self):
        return self.conn


def _row(**overrides):
    row = {
        "company_id": 1,
        "name": "Demo Company",
        "office_latitude": -6.2,
        "office_longitude": 106.816666,
        "radius_meters": 150,
        "grace_period_minutes": 15,
        "work_start_time": "08:00:00",
        "late_penalty_per_minute": 1000,
        "early_leave_penalty_per_minute": 500,
        "overtime_rate_per_hour": 25000,
        "overtime_start_after_minutes": 30,
        "standard_work_hours": 8,
        "contribution_scheme": "default",
        "tax_table": "progressive",
    }
    row.update(overrides)
    return row


def test_maps_stored_policy():
    policy = MySQLCompanyRepository(_ConnFactory(_row())).get_by_id(1)

    assert policy.radius_meters == 150
    assert policy.grace_period_minutes == 15
    assert policy.work_start_time == time(8, 0)
    assert policy.has_office_location


@pytest.mark.parametrize("stored,expected", [(0, 0), (None, 100)])
def test_radius_falls_back_only_when_null(stored, expected):
    policy = MySQLCompanyRepository(_ConnFactory(_row(radius_meters=stored))).get_by_id(1)
    assert policy.radius_meters == expected


def test_missing_company_returns_none():
    factory = _ConnFactory(None)
    assert MySQLCompanyRepository(factory).get_by_id(9) is None
    assert factory.conn.cursor_obj.executed[0][1] == (9,)
