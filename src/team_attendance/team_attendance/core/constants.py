"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# datetime.date.weekday(): Monday=0 ... Sunday=6
SATURDAY = 5
SUNDAY = 6
DEFAULT_EXCLUDED_WEEKDAYS = frozenset({SATURDAY, SUNDAY})

DEFAULT_WORK_START_HOUR = 8
DEFAULT_WORK_END_HOUR = 23

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LEAVE_LIST_LIMIT = 500
DEFAULT_MONTH_OPTIONS = 12

RATE_GOOD_THRESHOLD = 90.0
RATE_FAIR_THRESHOLD = 75.0

AUTO_ABSENT_NOTE = "Auto-marked absent - no attendance submitted within working hours"
