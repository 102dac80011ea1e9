from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import format_month, now_local, parse_month, recent_months
from ..common.http import current_role, current_user_id, login_required, manager_required, ok
from ..container import Container
from ..core.constants import DEFAULT_MONTH_OPTIONS
from .engine import rate_band


def _selected_month(today: date) -> tuple[int, int]:
    value = request.args.get("month")
    if not value:
        return today.year, today.month
    return parse_month(value)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats/me", methods=["GET"], endpoint="stats_me")
    @login_required
    def stats_me():
        today = now_local().date()
        year, month = _selected_month(today)

        stats = container.stats_service.my_stats(user_id=current_user_id(), year=year, month=month, today=today)
        data = stats.to_dict()
        data["band"] = rate_band(stats.attendance_rate).value
        return ok(data, month=format_month(year, month), months=recent_months(today, DEFAULT_MONTH_OPTIONS))

    @app.route("/api/stats/team", methods=["GET"], endpoint="stats_team")
    @manager_required
    def stats_team():
        today = now_local().date()
        year, month = _selected_month(today)

        report = container.stats_service.team_stats(current_role=current_role(), year=year, month=month, today=today)
        return ok(
            {"members": report.rows, "summary": report.summary.to_dict()},
            month=format_month(year, month),
            months=recent_months(today, DEFAULT_MONTH_OPTIONS),
        )
