from __future__ import annotations

from datetime import date, datetime

import pytest

from team_attendance.core.enums import AttendanceStatus, DayStatus, Role
from team_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_mark_with_screenshot_is_present(container, attendance_repo, fixed_now):
    status = container.attendance_service.mark_attendance(
        "dev", screenshot_url="https://cdn.example/shot.png", notes=" on site ", now=fixed_now
    )

    rec = attendance_repo.get_for_user_and_date("dev", fixed_now.date())
    assert status == AttendanceStatus.PRESENT
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.check_in_time == fixed_now
    assert rec.notes == "on site"


def test_mark_without_screenshot_is_absent(container, attendance_repo, fixed_now):
    status = container.attendance_service.mark_attendance("dev", now=fixed_now)

    rec = attendance_repo.get_for_user_and_date("dev", fixed_now.date())
    assert status == AttendanceStatus.ABSENT
    assert rec.check_in_time is None


def test_marking_twice_overwrites_same_day(container, attendance_repo, fixed_now):
    container.attendance_service.mark_attendance("dev", now=fixed_now)
    container.attendance_service.mark_attendance("dev", screenshot_url="s.png", now=fixed_now.replace(hour=11))

    rows = attendance_repo.list_range(start_date=fixed_now.date(), end_date=fixed_now.date(), user_id="dev")
    assert len(rows) == 1
    assert rows[0].status == AttendanceStatus.PRESENT


@pytest.mark.parametrize("hour", [0, 7, 23])
def test_mark_outside_working_hours_rejected(container, hour):
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance("dev", now=datetime(2024, 2, 12, hour, 30))


def test_mark_unknown_profile(container, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.mark_attendance("nobody", now=fixed_now)


def test_history_newest_first(container, attendance_repo):
    for day in (1, 3, 2):
        attendance_repo.upsert(user_id="dev", work_date=date(2024, 2, day), status=AttendanceStatus.PRESENT)

    rows = container.attendance_service.get_history("dev", limit=2)

    assert [r.work_date.day for r in rows] == [3, 2]


def test_team_overview_classifies_each_member(container, attendance_repo, leave_repo):
    today = date(2024, 2, 12)
    attendance_repo.upsert(user_id="admin", work_date=today, status=AttendanceStatus.PRESENT, check_in_time=datetime(2024, 2, 12, 9))
    attendance_repo.upsert(user_id="dev", work_date=today, status=AttendanceStatus.PRESENT)
    leave_repo.add_approved("dev", date(2024, 2, 12), date(2024, 2, 13))

    overview = container.attendance_service.team_overview(today=today)

    by_id = {m.user_id: m for m in overview.members}
    assert by_id["admin"].status == DayStatus.PRESENT
    assert by_id["dev"].status == DayStatus.LEAVE
    assert by_id["designer"].status == DayStatus.NOT_MARKED
    assert "gone" not in by_id
    assert overview.counts() == {"total_members": 3, "present": 1, "absent": 0, "leave": 1, "not_marked": 1}


def test_admin_set_status_clears_check_in_unless_present(container, attendance_repo, fixed_now):
    container.attendance_service.mark_attendance("dev", screenshot_url="s.png", notes="ok", now=fixed_now)

    container.attendance_service.admin_set_status(
        current_role=Role.ADMIN, user_id="dev", work_date=fixed_now.date(), status=AttendanceStatus.ABSENT
    )

    rec = attendance_repo.get_for_user_and_date("dev", fixed_now.date())
    assert rec.status == AttendanceStatus.ABSENT
    assert rec.check_in_time is None
    assert rec.screenshot_url == "s.png"
    assert rec.notes == "ok"


def test_admin_set_present_keeps_existing_check_in(container, attendance_repo):
    day = date(2024, 2, 12)
    attendance_repo.upsert(user_id="dev", work_date=day, status=AttendanceStatus.PRESENT, check_in_time=datetime(2024, 2, 12, 9))

    container.attendance_service.admin_set_status(
        current_role=Role.PROJECT_MANAGER, user_id="dev", work_date=day, status=AttendanceStatus.PRESENT, notes="late sync"
    )

    rec = attendance_repo.get_for_user_and_date("dev", day)
    assert rec.check_in_time == datetime(2024, 2, 12, 9)
    assert rec.notes == "late sync"


def test_admin_set_present_with_explicit_check_in_and_screenshot(container, attendance_repo):
    day = date(2024, 2, 12)

    container.attendance_service.admin_set_status(
        current_role=Role.ADMIN,
        user_id="designer",
        work_date=day,
        status=AttendanceStatus.PRESENT,
        check_in_time=datetime(2024, 2, 12, 8, 45),
        screenshot_url=" https://cdn.example/late.png ",
    )

    rec = attendance_repo.get_for_user_and_date("designer", day)
    assert rec.check_in_time == datetime(2024, 2, 12, 8, 45)
    assert rec.screenshot_url == "https://cdn.example/late.png"


def test_admin_set_leave_ignores_supplied_check_in(container, attendance_repo):
    day = date(2024, 2, 12)

    container.attendance_service.admin_set_status(
        current_role=Role.ADMIN,
        user_id="dev",
        work_date=day,
        status=AttendanceStatus.LEAVE,
        check_in_time=datetime(2024, 2, 12, 9),
    )

    assert attendance_repo.get_for_user_and_date("dev", day).check_in_time is None


def test_admin_set_status_unknown_profile(container, attendance_repo):
    with pytest.raises(NotFoundError):
        container.attendance_service.admin_set_status(
            current_role=Role.ADMIN, user_id="ghost", work_date=date(2024, 2, 12), status=AttendanceStatus.ABSENT
        )

    assert attendance_repo.all() == []


def test_admin_set_status_requires_manager(container):
    with pytest.raises(AuthorizationError):
        container.attendance_service.admin_set_status(
            current_role=Role.DESIGNER, user_id="dev", work_date=date(2024, 2, 12), status=AttendanceStatus.ABSENT
        )


def test_auto_mark_absent_before_end_of_day_does_nothing(container, attendance_repo):
    assert container.attendance_service.auto_mark_absent(now=datetime(2024, 2, 12, 22, 59)) == 0
    assert attendance_repo.all() == []


def test_auto_mark_absent_skips_marked_and_on_leave(container, attendance_repo, leave_repo):
    today = date(2024, 2, 12)
    attendance_repo.upsert(user_id="admin", work_date=today, status=AttendanceStatus.PRESENT)
    leave_repo.add_approved("designer", date(2024, 2, 10), date(2024, 2, 12))

    inserted = container.attendance_service.auto_mark_absent(now=datetime(2024, 2, 12, 23, 5))

    assert inserted == 1
    assert attendance_repo.get_for_user_and_date("admin", today).status == AttendanceStatus.PRESENT
    assert attendance_repo.get_for_user_and_date("designer", today) is None
    dev = attendance_repo.get_for_user_and_date("dev", today)
    assert dev.status == AttendanceStatus.ABSENT
    assert dev.notes.startswith("Auto-marked absent")
    assert attendance_repo.get_for_user_and_date("gone", today) is None


def test_auto_mark_absent_is_repeatable(container):
    now = datetime(2024, 2, 12, 23, 30)
    assert container.attendance_service.auto_mark_absent(now=now) == 3
    assert container.attendance_service.auto_mark_absent(now=now) == 0
