from __future__ import annotations

from datetime import date, datetime

import pytest

from team_attendance.core.enums import AttendanceStatus, LeaveStatus
from team_attendance.main import create_app

NOW = datetime(2024, 2, 12, 10, 0)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    for module in ("attendance.service", "attendance.controller", "stats.controller"):
        monkeypatch.setattr(f"team_attendance.{module}.now_local", lambda: NOW)
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user_id: str, role: str) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_requires_session(client):
    resp = client.get("/api/stats/me")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_mark_attendance(client, attendance_repo):
    login(client, "dev", "developer")

    resp = client.post("/api/attendance/mark", json={"screenshot_url": "https://cdn.example/a.png"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "present"
    assert attendance_repo.get_for_user_and_date("dev", NOW.date()).status == AttendanceStatus.PRESENT


def test_my_stats_for_selected_month(client, attendance_repo):
    login(client, "dev", "developer")
    attendance_repo.upsert(user_id="dev", work_date=date(2024, 1, 2), status=AttendanceStatus.PRESENT)

    resp = client.get("/api/stats/me?month=2024-01")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["data"]["present_days"] == 1
    assert body["data"]["total_working_days"] == 23
    assert body["data"]["absent_days"] == 22
    assert body["data"]["attendance_rate"] == 4.3
    assert body["data"]["band"] == "poor"
    assert body["meta"]["month"] == "2024-01"
    assert body["meta"]["months"][:2] == ["2024-02", "2024-01"]
    assert len(body["meta"]["months"]) == 12


def test_invalid_month_is_400(client):
    login(client, "dev", "developer")

    resp = client.get("/api/stats/me?month=2024-13")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_team_stats_forbidden_for_developer(client):
    login(client, "dev", "developer")

    assert client.get("/api/stats/team").status_code == 403


def test_team_stats_for_manager(client):
    login(client, "admin", "admin")

    resp = client.get("/api/stats/team?month=2024-02")

    body = resp.get_json()["data"]
    assert resp.status_code == 200
    assert body["summary"]["total_members"] == 3
    assert len(body["members"]) == 3


def test_leave_flow(client, leave_repo):
    login(client, "dev", "developer")
    resp = client.post("/api/leave", json={"start_date": "2024-02-26", "end_date": "2024-02-27", "reason": "Trip"})
    assert resp.status_code == 201
    leave_id = resp.get_json()["data"]["id"]

    assert client.post(f"/api/admin/leave/{leave_id}/approve").status_code == 403

    login(client, "admin", "project_manager")
    pending = client.get("/api/admin/leave?status=pending").get_json()["data"]
    assert [a["id"] for a in pending] == [leave_id]

    resp = client.post(f"/api/admin/leave/{leave_id}/approve")
    assert resp.status_code == 200
    assert leave_repo.get_by_id(leave_id).status == LeaveStatus.APPROVED

    again = client.post(f"/api/admin/leave/{leave_id}/reject")
    assert again.status_code == 400

    login(client, "dev", "developer")
    (mine,) = client.get("/api/leave/mine").get_json()["data"]
    assert mine["applicant_name"] == "DEV Test"
    assert mine["approver_name"] == "ADMIN Test"


def test_leave_with_bad_dates(client):
    login(client, "dev", "developer")

    resp = client.post("/api/leave", json={"start_date": "2024-02-27", "end_date": "2024-02-26", "reason": "x"})

    assert resp.status_code == 400


def test_today_overview(client, attendance_repo):
    login(client, "admin", "admin")
    attendance_repo.upsert(user_id="dev", work_date=NOW.date(), status=AttendanceStatus.ABSENT)

    body = client.get("/api/attendance/today").get_json()["data"]

    assert body["date"] == "2024-02-12"
    assert body["stats"]["absent"] == 1
    assert body["stats"]["not_marked"] == 2


def test_admin_override(client, attendance_repo):
    login(client, "admin", "admin")

    resp = client.post("/api/admin/attendance", json={"user_id": "dev", "date": "2024-02-09", "status": "present"})

    assert resp.status_code == 200
    assert attendance_repo.get_for_user_and_date("dev", date(2024, 2, 9)).status == AttendanceStatus.PRESENT


def test_admin_override_with_check_in_and_screenshot(client, attendance_repo):
    login(client, "admin", "admin")

    resp = client.post(
        "/api/admin/attendance",
        json={
            "user_id": "designer",
            "date": "2024-02-09",
            "status": "present",
            "check_in_time": "2024-02-09T08:40:00",
            "screenshot_url": "https://cdn.example/fix.png",
        },
    )

    assert resp.status_code == 200
    rec = attendance_repo.get_for_user_and_date("designer", date(2024, 2, 9))
    assert rec.check_in_time == datetime(2024, 2, 9, 8, 40)
    assert rec.screenshot_url == "https://cdn.example/fix.png"


def test_admin_override_unknown_member_is_404(client, attendance_repo):
    login(client, "admin", "admin")

    resp = client.post("/api/admin/attendance", json={"user_id": "ghost", "status": "absent"})

    assert resp.status_code == 404
    assert attendance_repo.all() == []


def test_admin_override_rejects_bad_check_in_time(client):
    login(client, "admin", "admin")

    resp = client.post("/api/admin/attendance", json={"user_id": "dev", "status": "present", "check_in_time": "9am"})

    assert resp.status_code == 400


def test_admin_override_rejects_unknown_status(client):
    login(client, "admin", "admin")

    resp = client.post("/api/admin/attendance", json={"user_id": "dev", "status": "holiday"})

    assert resp.status_code == 400
