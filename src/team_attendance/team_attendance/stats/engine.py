"""Monthly attendance statistics.

Reconciles three feeds (daily attendance records, approved leave applications
and the working-day calendar) into per-user figures and a team summary. Every
function here is pure: no I/O, no clock access, no shared state. Callers pass
``today`` explicitly.

Classification of a working day, in order:

1. covered by an approved leave application -> leave
2. record with status present / absent -> that status
3. otherwise not marked, which settles to absent once the day is strictly
   before ``today`` and stays unresolved otherwise
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import AbstractSet, Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iter_days, month_bounds
from ..core.constants import DEFAULT_EXCLUDED_WEEKDAYS, RATE_FAIR_THRESHOLD, RATE_GOOD_THRESHOLD
from ..core.enums import AttendanceStatus, DayStatus, RateBand
from ..leave.model import LeaveApplication
from ..users.model import Profile
from .model import MonthlyStats, TeamSummary

_ONE_DECIMAL = Decimal("0.1")


def round_half_up(value: Decimal | float | int, places: Decimal = _ONE_DECIMAL) -> float:
    return float(Decimal(str(value)).quantize(places, rounding=ROUND_HALF_UP))


def attendance_rate(present_days: int, leave_days: int, total_working_days: int) -> float:
    """(present + leave) / total * 100, rounded half-up to one decimal; 0.0 for an empty month."""
    if total_working_days <= 0:
        return 0.0
    ratio = Decimal(present_days + leave_days) * 100 / Decimal(total_working_days)
    return float(ratio.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def rate_band(rate: float) -> RateBand:
    if rate >= RATE_GOOD_THRESHOLD:
        return RateBand.GOOD
    if rate >= RATE_FAIR_THRESHOLD:
        return RateBand.FAIR
    return RateBand.POOR


def working_days(year: int, month: int, *, excluded_weekdays: AbstractSet[int] = DEFAULT_EXCLUDED_WEEKDAYS) -> list[date]:
    """Days of the month whose weekday() is not excluded, in calendar order."""
    days_in_month = calendar.monthrange(year, month)[1]
    return [
        date(year, month, d)
        for d in range(1, days_in_month + 1)
        if date(year, month, d).weekday() not in excluded_weekdays
    ]


def leave_days(leaves: Iterable[LeaveApplication], working: AbstractSet[date]) -> set[date]:
    """Working days covered by any approved application. Overlaps count once.

    Each range is clipped to the span of ``working`` before it is walked, so
    open-ended leave costs no more than a month.
    """
    covered: set[date] = set()
    if not working:
        return covered

    first, last = min(working), max(working)
    for leave in leaves:
        if not leave.is_approved:
            continue
        start, end = max(leave.start_date, first), min(leave.end_date, last)
        covered.update(d for d in iter_days(start, end) if d in working)
    return covered


def classify_day(
    day: date,
    *,
    on_leave: bool,
    record: Optional[AttendanceRecord],
    today: date,
) -> DayStatus:
    if on_leave:
        return DayStatus.LEAVE

    if record is not None:
        if record.status == AttendanceStatus.PRESENT:
            return DayStatus.PRESENT
        if record.status == AttendanceStatus.ABSENT:
            return DayStatus.ABSENT

    return DayStatus.NOT_MARKED.settle(day_passed=day < today)


def _user_stats(
    user_id: str,
    *,
    year: int,
    month: int,
    working: Sequence[date],
    records: Mapping[date, AttendanceRecord],
    leaves: Iterable[LeaveApplication],
    today: date,
) -> MonthlyStats:
    on_leave = leave_days(leaves, set(working))
    counts = {status: 0 for status in DayStatus}
    for day in working:
        status = classify_day(day, on_leave=day in on_leave, record=records.get(day), today=today)
        counts[status] += 1

    total = len(working)
    return MonthlyStats(
        user_id=user_id,
        year=year,
        month=month,
        total_working_days=total,
        present_days=counts[DayStatus.PRESENT],
        absent_days=counts[DayStatus.ABSENT],
        leave_days=counts[DayStatus.LEAVE],
        unresolved_days=counts[DayStatus.NOT_MARKED],
        attendance_rate=attendance_rate(counts[DayStatus.PRESENT], counts[DayStatus.LEAVE], total),
    )


def compute_monthly_stats(
    users: Iterable[Profile],
    attendance_records: Iterable[AttendanceRecord],
    approved_leaves: Iterable[LeaveApplication],
    *,
    year: int,
    month: int,
    today: date,
    excluded_weekdays: AbstractSet[int] = DEFAULT_EXCLUDED_WEEKDAYS,
) -> list[MonthlyStats]:
    """One MonthlyStats per user, highest attendance rate first.

    Records outside the month and leave applications that are not approved
    are ignored, so unfiltered feeds are accepted. Ties keep the input order
    of ``users``.
    """
    start, end = month_bounds(year, month)
    working = working_days(year, month, excluded_weekdays=excluded_weekdays)

    records_by_user: dict[str, dict[date, AttendanceRecord]] = defaultdict(dict)
    for record in attendance_records:
        if start <= record.work_date <= end:
            records_by_user[record.user_id][record.work_date] = record

    leaves_by_user: dict[str, list[LeaveApplication]] = defaultdict(list)
    for leave in approved_leaves:
        if leave.is_approved and leave.overlaps(start, end):
            leaves_by_user[leave.user_id].append(leave)

    stats = [
        _user_stats(
            user.user_id,
            year=year,
            month=month,
            working=working,
            records=records_by_user.get(user.user_id, {}),
            leaves=leaves_by_user.get(user.user_id, []),
            today=today,
        )
        for user in users
    ]
    return sorted(stats, key=lambda s: s.attendance_rate, reverse=True)


def summarize_team(stats: Sequence[MonthlyStats]) -> TeamSummary:
    if not stats:
        return TeamSummary(total_members=0, total_present=0, total_absent=0, total_leave=0, average_attendance=0.0)

    rate_sum = sum(Decimal(str(s.attendance_rate)) for s in stats)
    return TeamSummary(
        total_members=len(stats),
        total_present=sum(s.present_days for s in stats),
        total_absent=sum(s.absent_days for s in stats),
        total_leave=sum(s.leave_days for s in stats),
        average_attendance=round_half_up(rate_sum / len(stats)),
    )
