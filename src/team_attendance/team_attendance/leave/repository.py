from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveRepository(Protocol):
    def create(self, *, user_id: str, start_date: date, end_date: date, reason: str) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_applications(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[LeaveApplication]:
        """Newest first."""

        raise NotImplementedError

    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[str] = None,
    ) -> Sequence[LeaveApplication]:
        """Approved applications whose range intersects [start_date, end_date]."""

        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        """Set the final status of a pending application. False if it was not pending."""

        raise NotImplementedError
