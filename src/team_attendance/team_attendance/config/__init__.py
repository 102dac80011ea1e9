import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "team_attendance.config.production"

    if env in {"test", "testing"}:
        return "team_attendance.config.testing"

    return "team_attendance.config.development"


def parse_weekdays(value: str) -> frozenset:
    """'5,6' -> frozenset({5, 6}); weekday numbers follow date.weekday() (Monday=0)."""
    days = set()
    for part in (value or "").split(","):
        part = part.strip()
        if not part:
            continue
        day = int(part)
        if not 0 <= day <= 6:
            raise ValueError(f"Invalid weekday number: {part!r}")
        days.add(day)
    return frozenset(days)
