from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles stored on profiles, used for permission checks."""

    ADMIN = "admin"
    PROJECT_MANAGER = "project_manager"
    DEVELOPER = "developer"
    DESIGNER = "designer"
    CLIENT = "client"


# Roles allowed to review leave and view team-wide statistics.
MANAGER_ROLES = frozenset({Role.ADMIN, Role.PROJECT_MANAGER})


class AttendanceStatus(str, Enum):
    """Status persisted in daily_attendance."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class DayStatus(str, Enum):
    """Resolved classification of one working day for one user.

    NOT_MARKED only survives for days that have not passed yet; see ``settle``.
    """

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    NOT_MARKED = "not_marked"

    def settle(self, *, day_passed: bool) -> "DayStatus":
        if self is DayStatus.NOT_MARKED and day_passed:
            return DayStatus.ABSENT
        return self


class LeaveStatus(str, Enum):
    """Leave application review workflow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RateBand(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
