from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class MonthlyStats:
    """Attendance figures for one user over one month.

    Derived on every request; never persisted. The four day buckets partition
    ``total_working_days``.
    """

    user_id: str
    year: int
    month: int
    total_working_days: int
    present_days: int
    absent_days: int
    leave_days: int
    unresolved_days: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class TeamSummary:
    total_members: int
    total_present: int
    total_absent: int
    total_leave: int
    # Mean of per-member rates, not a rate over the summed days.
    average_attendance: float

    def to_dict(self) -> dict:
        return asdict(self)
