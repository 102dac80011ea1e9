from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from team_attendance.attendance.model import AttendanceRecord
from team_attendance.container import wire
from team_attendance.core.enums import AttendanceStatus, LeaveStatus, Role
from team_attendance.leave.model import LeaveApplication
from team_attendance.users.model import Profile


class InMemoryProfiles:
    def __init__(self, profiles=()):
        self._by_id: dict[str, Profile] = {p.user_id: p for p in profiles}

    def add(self, profile: Profile) -> Profile:
        self._by_id[profile.user_id] = profile
        return profile

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        return self._by_id.get(user_id)

    def list_active(self):
        return [p for p in self._by_id.values() if p.is_active]


class InMemoryAttendance:
    def __init__(self):
        self._by_user_date: dict[tuple[str, date], AttendanceRecord] = {}

    def all(self):
        return list(self._by_user_date.values())

    def get_recent_for_user(self, user_id: str, limit: int):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def list_range(self, *, start_date: date, end_date: date, user_id: Optional[str] = None):
        return [
            r
            for r in self._by_user_date.values()
            if start_date <= r.work_date <= end_date and (user_id is None or r.user_id == user_id)
        ]

    def upsert(self, *, user_id, work_date, status, check_in_time=None, screenshot_url=None, notes=None) -> None:
        self._by_user_date[(user_id, work_date)] = AttendanceRecord(
            user_id=user_id,
            work_date=work_date,
            status=status,
            check_in_time=check_in_time,
            notes=notes,
            screenshot_url=screenshot_url,
        )

    def insert_if_missing(self, *, user_id, work_date, status, notes=None) -> bool:
        if (user_id, work_date) in self._by_user_date:
            return False
        self.upsert(user_id=user_id, work_date=work_date, status=status, notes=notes)
        return True


class InMemoryLeaves:
    def __init__(self):
        self._by_id: dict[int, LeaveApplication] = {}
        self._next_id = 1

    def create(self, *, user_id, start_date, end_date, reason) -> int:
        leave_id = self._next_id
        self._next_id += 1
        self._by_id[leave_id] = LeaveApplication(
            leave_id=leave_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=datetime(2024, 1, 1, 9, 0),
        )
        return leave_id

    def add_approved(self, user_id: str, start_date: date, end_date: date) -> LeaveApplication:
        leave_id = self.create(user_id=user_id, start_date=start_date, end_date=end_date, reason="approved")
        self.decide(leave_id=leave_id, status=LeaveStatus.APPROVED, decided_by="admin", decided_at=datetime(2024, 1, 1))
        return self._by_id[leave_id]

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        return self._by_id.get(int(leave_id))

    def list_applications(self, *, status=None, user_id=None, limit=200):
        items = [
            a
            for a in self._by_id.values()
            if (status is None or a.status == status) and (user_id is None or a.user_id == user_id)
        ]
        items.sort(key=lambda a: a.leave_id, reverse=True)
        return items[:limit]

    def list_approved_overlapping(self, *, start_date, end_date, user_id=None):
        return [
            a
            for a in self._by_id.values()
            if a.is_approved and a.overlaps(start_date, end_date) and (user_id is None or a.user_id == user_id)
        ]

    def decide(self, *, leave_id, status, decided_by, decided_at) -> bool:
        current = self._by_id.get(int(leave_id))
        if not current or current.status != LeaveStatus.PENDING:
            return False
        self._by_id[int(leave_id)] = LeaveApplication(
            leave_id=current.leave_id,
            user_id=current.user_id,
            start_date=current.start_date,
            end_date=current.end_date,
            reason=current.reason,
            status=status,
            created_at=current.created_at,
            approved_by=decided_by,
            approved_at=decided_at,
        )
        return True


def make_profile(user_id: str, role: Role = Role.DEVELOPER, *, is_active: bool = True) -> Profile:
    return Profile(user_id=user_id, first_name=user_id.upper(), last_name="Test", role=role, is_active=is_active)


@pytest.fixture
def fixed_now() -> datetime:
    # Saturday 10 Feb 2024, inside working hours
    return datetime(2024, 2, 10, 10, 0, 0)


@pytest.fixture
def profiles_repo():
    return InMemoryProfiles(
        [
            make_profile("admin", Role.ADMIN),
            make_profile("dev"),
            make_profile("designer", Role.DESIGNER),
            make_profile("gone", is_active=False),
        ]
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leave_repo():
    return InMemoryLeaves()


@pytest.fixture
def container(profiles_repo, attendance_repo, leave_repo):
    return wire(profiles_repo=profiles_repo, attendance_repo=attendance_repo, leave_repo=leave_repo)
