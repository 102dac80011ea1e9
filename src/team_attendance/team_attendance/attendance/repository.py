from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with start_date <= work_date <= end_date, optionally for one user."""

        raise NotImplementedError

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
        """Create or overwrite the row keyed by (user_id, work_date)."""

        raise NotImplementedError

    def insert_if_missing(
        self,
        *,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        """Insert unless a row for (user_id, work_date) exists. Returns True when inserted."""

        raise NotImplementedError
