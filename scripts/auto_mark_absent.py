"""Nightly job: mark members who never checked in as absent.

Schedule after working hours (e.g. cron ``5 23 * * *``).
"""

from __future__ import annotations

import logging

from team_attendance.container import build_container
from team_attendance.core.constants import DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR
from team_attendance.main import load_settings


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        work_start_hour=getattr(settings, "WORK_START_HOUR", DEFAULT_WORK_START_HOUR),
        work_end_hour=getattr(settings, "WORK_END_HOUR", DEFAULT_WORK_END_HOUR),
    )
    inserted = container.attendance_service.auto_mark_absent()
    print(f"OK: marked {inserted} member(s) absent")


if __name__ == "__main__":
    main()
