from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime string (YYYY-MM-DDTHH:MM[:SS])."""
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid datetime (ISO 8601): {value!r}")


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")
    return parsed.year, parsed.month


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month (leap years included)."""
    year, month = int(year), int(month)
    if not 1 <= month <= 12:
        raise ValidationError(f"Month out of range: {month!r}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day in [start, end]; nothing when end < start."""
    day = start
    while day <= end:
        yield day
        if day == date.max:
            return
        day += timedelta(days=1)


def recent_months(today: date, count: int = 12) -> list[str]:
    """YYYY-MM values for the current month and the ``count - 1`` before it."""
    out: list[str] = []
    year, month = today.year, today.month
    for _ in range(int(count)):
        out.append(format_month(year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return out


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
