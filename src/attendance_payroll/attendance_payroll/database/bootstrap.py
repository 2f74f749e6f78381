from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _server_connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql independent of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside of quoted strings."""
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _server_connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = _server_connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def seed_demo_data(db_config: dict) -> None:
    """Insert a demo company, shift, admin and employee (idempotent)."""
    conn = _server_connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT company_id FROM companies WHERE name=%s", ("Demo Company",))
        row = cur.fetchone()
        if row:
            company_id = int(row["company_id"])
        else:
            cur.execute(
                """
                INSERT INTO companies(
                    name, office_latitude, office_longitude, radius_meters, grace_period_minutes,
                    late_penalty_per_minute, early_leave_penalty_per_minute, overtime_rate_per_hour
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                ("Demo Company", -6.2000000, 106.8166667, 100, 15, 1000, 1000, 25000),
            )
            company_id = int(cur.lastrowid)

        cur.execute(
            """
            INSERT IGNORE INTO shifts(shift_name, start_time, end_time, break_minutes, working_days)
            VALUES(%s,%s,%s,%s,%s)
            """,
            ("Office", "08:00:00", "17:00:00", 60, "1,2,3,4,5"),
        )
        cur.execute("SELECT shift_id FROM shifts WHERE shift_name=%s", ("Office",))
        shift_id = int(cur.fetchone()["shift_id"])

        def upsert_user(full_name: str, username: str, password: str, role: str) -> int:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    "UPDATE users SET full_name=%s, password_hash=%s, role=%s, is_active=1 WHERE username=%s",
                    (full_name, password_hash, role, username),
                )
                return int(existing["user_id"])
            cur.execute(
                "INSERT INTO users(full_name, username, password_hash, role) VALUES(%s,%s,%s,%s)",
                (full_name, username, password_hash, role),
            )
            return int(cur.lastrowid)

        upsert_user("Admin Demo", "admin", "admin123", "admin")
        employee_id = upsert_user("Employee Demo", "employee", "employee123", "employee")
        cur.execute(
            """
            INSERT INTO employee_profiles(user_id, employee_kind, requires_geofence, shift_id, company_id, base_salary)
            VALUES(%s,'office',1,%s,%s,%s)
            ON DUPLICATE KEY UPDATE shift_id=VALUES(shift_id), company_id=VALUES(company_id)
            """,
            (employee_id, shift_id, company_id, 5_000_000),
        )

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo data ready (company=%s, shift=%s)", company_id, shift_id)


def list_tables(db_config: dict) -> list[str]:
    conn = _server_connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
