from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import AbstractSet

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_manager
from ..core.constants import DEFAULT_EXCLUDED_WEEKDAYS
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..leave.repository import LeaveRepository
from ..users.repository import ProfileRepository
from .engine import compute_monthly_stats, rate_band, summarize_team
from .model import MonthlyStats, TeamSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamStatsReport:
    rows: list[dict]
    summary: TeamSummary


class MonthlyStatsService:
    """Fetches the three feeds for a month and hands them to the engine.

    The feeds are read back to back; the engine assumes they describe one
    consistent snapshot.
    """

    def __init__(
        self,
        profiles: ProfileRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        excluded_weekdays: AbstractSet[int] = DEFAULT_EXCLUDED_WEEKDAYS,
    ):
        self._profiles = profiles
        self._attendance = attendance
        self._leaves = leaves
        self._excluded_weekdays = frozenset(excluded_weekdays)

    def my_stats(self, *, user_id: str, year: int, month: int, today: date) -> MonthlyStats:
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            raise NotFoundError("Profile not found")

        start, end = month_bounds(year, month)
        records = self._attendance.list_range(start_date=start, end_date=end, user_id=user_id)
        leaves = self._leaves.list_approved_overlapping(start_date=start, end_date=end, user_id=user_id)

        (stats,) = compute_monthly_stats(
            [profile],
            records,
            leaves,
            year=year,
            month=month,
            today=today,
            excluded_weekdays=self._excluded_weekdays,
        )
        return stats

    def team_stats(self, *, current_role: Role, year: int, month: int, today: date) -> TeamStatsReport:
        require_manager(current_role)

        start, end = month_bounds(year, month)
        members = list(self._profiles.list_active())
        records = self._attendance.list_range(start_date=start, end_date=end)
        leaves = self._leaves.list_approved_overlapping(start_date=start, end_date=end)
        logger.debug(
            "team stats %04d-%02d: %d members, %d records, %d leaves",
            year, month, len(members), len(records), len(leaves),
        )

        stats = compute_monthly_stats(
            members,
            records,
            leaves,
            year=year,
            month=month,
            today=today,
            excluded_weekdays=self._excluded_weekdays,
        )

        by_id = {m.user_id: m for m in members}
        rows = []
        for s in stats:
            member = by_id[s.user_id]
            row = s.to_dict()
            row.update(
                full_name=member.full_name,
                role=member.role.value,
                avatar_url=member.avatar_url,
                band=rate_band(s.attendance_rate).value,
            )
            rows.append(row)

        return TeamStatsReport(rows=rows, summary=summarize_team(stats))
