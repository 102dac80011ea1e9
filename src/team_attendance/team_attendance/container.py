from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_EXCLUDED_WEEKDAYS, DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .stats.service import MonthlyStatsService
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    stats_service: MonthlyStatsService


def wire(
    *,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    excluded_weekdays: AbstractSet[int] = DEFAULT_EXCLUDED_WEEKDAYS,
    work_start_hour: int = DEFAULT_WORK_START_HOUR,
    work_end_hour: int = DEFAULT_WORK_END_HOUR,
) -> Container:
    """Build services over any set of repositories (MySQL or in-memory)."""
    return Container(
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        attendance_service=AttendanceService(
            attendance_repo,
            profiles_repo,
            leave_repo,
            work_start_hour=work_start_hour,
            work_end_hour=work_end_hour,
        ),
        leave_service=LeaveService(leave_repo, profiles_repo),
        stats_service=MonthlyStatsService(
            profiles_repo,
            attendance_repo,
            leave_repo,
            excluded_weekdays=excluded_weekdays,
        ),
    )


def build_container(
    *,
    db_config: dict,
    excluded_weekdays: AbstractSet[int] = DEFAULT_EXCLUDED_WEEKDAYS,
    work_start_hour: int = DEFAULT_WORK_START_HOUR,
    work_end_hour: int = DEFAULT_WORK_END_HOUR,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        excluded_weekdays=excluded_weekdays,
        work_start_hour=work_start_hour,
        work_end_hour=work_end_hour,
    )
