from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, DayStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one daily attendance row, unique per (user_id, work_date)."""

    user_id: str
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    notes: Optional[str] = None
    screenshot_url: Optional[str] = None


@dataclass(frozen=True)
class MemberDayStatus:
    """Read-model for the team overview of a single day."""

    user_id: str
    full_name: str
    role: str
    status: DayStatus
    check_in_time: Optional[datetime] = None
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class TeamDayOverview:
    work_date: date
    members: list[MemberDayStatus]

    def count(self, status: DayStatus) -> int:
        return sum(1 for m in self.members if m.status == status)

    def counts(self) -> dict:
        return {
            "total_members": len(self.members),
            "present": self.count(DayStatus.PRESENT),
            "absent": self.count(DayStatus.ABSENT),
            "leave": self.count(DayStatus.LEAVE),
            "not_marked": self.count(DayStatus.NOT_MARKED),
        }
