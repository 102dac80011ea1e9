from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_role, current_user_id, login_required, manager_required, ok
from ..container import Container
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from .model import LeaveApplication


def leave_json(a: LeaveApplication) -> dict:
    return {
        "id": a.leave_id,
        "user_id": a.user_id,
        "applicant_name": a.applicant_name,
        "start_date": a.start_date.isoformat(),
        "end_date": a.end_date.isoformat(),
        "reason": a.reason,
        "status": a.status.value,
        "approved_by": a.approved_by,
        "approver_name": a.approver_name,
        "approved_at": a.approved_at.isoformat() if a.approved_at else None,
        "created_at": a.created_at.isoformat() if a.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave", methods=["POST"], endpoint="leave_apply")
    @login_required
    def leave_apply():
        data = request.get_json(silent=True) or {}
        if not data.get("start_date") or not data.get("end_date"):
            raise ValidationError("start_date and end_date are required")

        leave_id = container.leave_service.apply(
            user_id=current_user_id(),
            start_date=parse_iso_date(data["start_date"]),
            end_date=parse_iso_date(data["end_date"]),
            reason=data.get("reason") or "",
        )
        return ok({"id": leave_id}, status=201)

    @app.route("/api/leave/mine", methods=["GET"], endpoint="leave_mine")
    @login_required
    def leave_mine():
        rows = container.leave_service.list_mine(user_id=current_user_id())
        return ok([leave_json(a) for a in rows])

    @app.route("/api/admin/leave", methods=["GET"], endpoint="admin_leave_list")
    @manager_required
    def admin_leave_list():
        status_s = request.args.get("status")
        try:
            status = LeaveStatus(status_s) if status_s else None
        except ValueError:
            raise ValidationError("status must be one of pending, approved, rejected")

        rows = container.leave_service.list_all(current_role=current_role(), status=status)
        return ok([leave_json(a) for a in rows])

    @app.route("/api/admin/leave/<int:leave_id>/approve", methods=["POST"], endpoint="admin_leave_approve")
    @manager_required
    def admin_leave_approve(leave_id: int):
        container.leave_service.approve(current_role=current_role(), approver_id=current_user_id(), leave_id=leave_id)
        return ok({"id": leave_id, "status": LeaveStatus.APPROVED.value})

    @app.route("/api/admin/leave/<int:leave_id>/reject", methods=["POST"], endpoint="admin_leave_reject")
    @manager_required
    def admin_leave_reject(leave_id: int):
        container.leave_service.reject(current_role=current_role(), approver_id=current_user_id(), leave_id=leave_id)
        return ok({"id": leave_id, "status": LeaveStatus.REJECTED.value})
