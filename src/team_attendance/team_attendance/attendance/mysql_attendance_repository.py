from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "user_id, work_date, status, check_in_time, notes, screenshot_url"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        user_id=str(row["user_id"]),
        work_date=row["work_date"],
        status=AttendanceStatus(row["status"]),
        check_in_time=row.get("check_in_time"),
        notes=row.get("notes"),
        screenshot_url=row.get("screenshot_url"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_attendance
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_attendance
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_attendance
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime] = None,
        screenshot_url: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_attendance(user_id, work_date, status, check_in_time, screenshot_url, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in_time=VALUES(check_in_time),
                    screenshot_url=VALUES(screenshot_url),
                    notes=VALUES(notes)
                """,
                (user_id, work_date, status.value, check_in_time, screenshot_url, notes),
            )

    def insert_if_missing(
        self,
        *,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO daily_attendance(user_id, work_date, status, notes)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, work_date, status.value, notes),
            )
            return cur.rowcount > 0
