from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveApplication
from .repository import LeaveRepository

_COLUMNS = "id, user_id, start_date, end_date, reason, status, created_at, approved_by, approved_at"


def _to_leave(row: dict) -> LeaveApplication:
    approved_by = row.get("approved_by")
    return LeaveApplication(
        leave_id=int(row["id"]),
        user_id=str(row["user_id"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        reason=row["reason"],
        status=LeaveStatus(row["status"]),
        created_at=row.get("created_at"),
        approved_by=str(approved_by) if approved_by else None,
        approved_at=row.get("approved_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: str, start_date: date, end_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_applications(user_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (user_id, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_applications WHERE id=%s", (int(leave_id),))
            row = fetchone(cur)
            return _to_leave(row) if row else None

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_applications
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[LeaveApplication]:
        clauses = ["status=%s", "start_date<=%s", "end_date>=%s"]
        params: list[object] = [LeaveStatus.APPROVED.value, end_date, start_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_applications
                WHERE {" AND ".join(clauses)}
                ORDER BY start_date ASC, id ASC
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_applications
                SET status=%s, approved_by=%s, approved_at=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
