from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_manager
from ..core.constants import (
    AUTO_ABSENT_NOTE,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_WORK_END_HOUR,
    DEFAULT_WORK_START_HOUR,
)
from ..core.enums import AttendanceStatus, DayStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..leave.repository import LeaveRepository
from ..users.repository import ProfileRepository
from .model import AttendanceRecord, MemberDayStatus, TeamDayOverview
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        leaves: LeaveRepository,
        *,
        work_start_hour: int = DEFAULT_WORK_START_HOUR,
        work_end_hour: int = DEFAULT_WORK_END_HOUR,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._leaves = leaves
        self._work_start_hour = int(work_start_hour)
        self._work_end_hour = int(work_end_hour)

    def within_working_hours(self, now: datetime) -> bool:
        return self._work_start_hour <= now.hour < self._work_end_hour

    def mark_attendance(
        self,
        user_id: str,
        *,
        screenshot_url: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceStatus:
        """Record today's attendance; a screenshot makes it present, none makes it absent."""
        now = now or now_local()
        if not self.within_working_hours(now):
            raise ValidationError(
                f"Attendance can only be marked between {self._work_start_hour:02d}:00 and {self._work_end_hour:02d}:00"
            )

        if not self._profiles.get_by_id(user_id):
            raise NotFoundError("Profile not found")

        screenshot_url = optional_text(screenshot_url)
        status = AttendanceStatus.PRESENT if screenshot_url else AttendanceStatus.ABSENT
        self._attendance.upsert(
            user_id=user_id,
            work_date=now.date(),
            status=status,
            check_in_time=now if screenshot_url else None,
            screenshot_url=screenshot_url,
            notes=optional_text(notes),
        )
        logger.info("attendance %s marked %s for %s", now.date(), status.value, user_id)
        return status

    def admin_set_status(
        self,
        *,
        current_role: Role,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        notes: Optional[str] = None,
        check_in_time: Optional[datetime] = None,
        screenshot_url: Optional[str] = None,
    ) -> None:
        """Manager override of one member's day.

        Only a present day keeps a check-in time; any other status clears it.
        """
        require_manager(current_role)

        if not self._profiles.get_by_id(user_id):
            raise NotFoundError("Profile not found")

        existing = self._attendance.get_for_user_and_date(user_id, work_date)
        if status == AttendanceStatus.PRESENT:
            check_in_time = check_in_time or (existing.check_in_time if existing else None)
        else:
            check_in_time = None

        self._attendance.upsert(
            user_id=user_id,
            work_date=work_date,
            status=status,
            check_in_time=check_in_time,
            screenshot_url=optional_text(screenshot_url) or (existing.screenshot_url if existing else None),
            notes=optional_text(notes) or (existing.notes if existing else None),
        )
        logger.info("attendance %s for %s set to %s by %s", work_date, user_id, status.value, current_role.value)

    def get_history(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_user(user_id, limit)

    def team_overview(self, *, today: date) -> TeamDayOverview:
        members = self._profiles.list_active()
        records = {r.user_id: r for r in self._attendance.list_range(start_date=today, end_date=today)}
        on_leave = {
            leave.user_id for leave in self._leaves.list_approved_overlapping(start_date=today, end_date=today)
        }

        rows = []
        for member in members:
            record = records.get(member.user_id)
            if member.user_id in on_leave:
                status = DayStatus.LEAVE
            elif record:
                status = DayStatus(record.status.value)
            else:
                status = DayStatus.NOT_MARKED

            rows.append(
                MemberDayStatus(
                    user_id=member.user_id,
                    full_name=member.full_name,
                    role=member.role.value,
                    status=status,
                    check_in_time=record.check_in_time if record else None,
                    avatar_url=member.avatar_url,
                )
            )
        return TeamDayOverview(work_date=today, members=rows)

    def auto_mark_absent(self, *, now: Optional[datetime] = None) -> int:
        """Mark active members without a record or approved leave as absent.

        Runs only once working hours are over; existing rows are left untouched.
        """
        now = now or now_local()
        if now.hour < self._work_end_hour:
            logger.info("auto-absent skipped: %s is before %02d:00", now.strftime("%H:%M"), self._work_end_hour)
            return 0

        today = now.date()
        on_leave = {
            leave.user_id for leave in self._leaves.list_approved_overlapping(start_date=today, end_date=today)
        }

        inserted = 0
        for member in self._profiles.list_active():
            if member.user_id in on_leave:
                continue
            if self._attendance.insert_if_missing(
                user_id=member.user_id,
                work_date=today,
                status=AttendanceStatus.ABSENT,
                notes=f"{AUTO_ABSENT_NOTE} ({self._work_start_hour:02d}:00 - {self._work_end_hour:02d}:00)",
            ):
                inserted += 1

        logger.info("auto-absent %s: %d members marked absent", today, inserted)
        return inserted
