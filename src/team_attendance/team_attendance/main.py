from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_EXCLUDED_WEEKDAYS, DEFAULT_WORK_END_HOUR, DEFAULT_WORK_START_HOUR
from .database.bootstrap import apply_schema, list_tables
from .leave.controller import register as register_leave
from .stats.controller import register as register_stats

logger = logging.getLogger(__name__)


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app(container: Optional[Container] = None) -> Flask:
    settings = load_settings()
    app = Flask(__name__)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__, db_config.get("user"), db_config.get("host"),
            db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            excluded_weekdays=getattr(settings, "EXCLUDED_WEEKDAYS", DEFAULT_EXCLUDED_WEEKDAYS),
            work_start_hour=getattr(settings, "WORK_START_HOUR", DEFAULT_WORK_START_HOUR),
            work_end_hour=getattr(settings, "WORK_END_HOUR", DEFAULT_WORK_END_HOUR),
        )

    app.extensions["team_attendance"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_leave(app, container)
    register_stats(app, container)

    return app
