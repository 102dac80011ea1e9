import os

from . import parse_weekdays

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "team_attendance_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

EXCLUDED_WEEKDAYS = parse_weekdays("5,6")

WORK_START_HOUR = 8
WORK_END_HOUR = 23
