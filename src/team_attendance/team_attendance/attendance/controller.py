from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime
from ..common.http import current_role, current_user_id, login_required, manager_required, ok
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def record_json(r: AttendanceRecord) -> dict:
    return {
        "user_id": r.user_id,
        "date": r.work_date.isoformat(),
        "status": r.status.value,
        "check_in_time": r.check_in_time.isoformat() if r.check_in_time else None,
        "notes": r.notes,
        "screenshot_url": r.screenshot_url,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        data = request.get_json(silent=True) or {}
        status = container.attendance_service.mark_attendance(
            current_user_id(),
            screenshot_url=data.get("screenshot_url"),
            notes=data.get("notes"),
        )
        return ok({"status": status.value}, message=f"You are marked as {status.value} for today.")

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", type=int) or DEFAULT_HISTORY_LIMIT
        rows = container.attendance_service.get_history(current_user_id(), limit=limit)
        return ok([record_json(r) for r in rows])

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @manager_required
    def attendance_today():
        overview = container.attendance_service.team_overview(today=now_local().date())
        members = [
            {
                "user_id": m.user_id,
                "full_name": m.full_name,
                "role": m.role,
                "avatar_url": m.avatar_url,
                "status": m.status.value,
                "check_in_time": m.check_in_time.isoformat() if m.check_in_time else None,
            }
            for m in overview.members
        ]
        return ok({"date": overview.work_date.isoformat(), "members": members, "stats": overview.counts()})

    @app.route("/api/admin/attendance", methods=["POST"], endpoint="admin_attendance_set")
    @manager_required
    def admin_attendance_set():
        data = request.get_json(silent=True) or {}
        user_id = (data.get("user_id") or "").strip()
        if not user_id:
            raise ValidationError("user_id is required")
        try:
            status = AttendanceStatus(data.get("status"))
        except ValueError:
            raise ValidationError("status must be one of present, absent, leave")

        work_date = parse_iso_date(data["date"]) if data.get("date") else now_local().date()
        container.attendance_service.admin_set_status(
            current_role=current_role(),
            user_id=user_id,
            work_date=work_date,
            status=status,
            notes=data.get("notes"),
            check_in_time=parse_iso_datetime(data["check_in_time"]) if data.get("check_in_time") else None,
            screenshot_url=data.get("screenshot_url"),
        )
        return ok({"user_id": user_id, "date": work_date.isoformat(), "status": status.value})
