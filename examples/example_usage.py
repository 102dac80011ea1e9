"""Example: compute monthly stats with the engine alone (no Flask, no database)."""

from datetime import date

from team_attendance.attendance.model import AttendanceRecord
from team_attendance.core.enums import AttendanceStatus, LeaveStatus, Role
from team_attendance.leave.model import LeaveApplication
from team_attendance.stats.engine import compute_monthly_stats, summarize_team
from team_attendance.users.model import Profile


def main():
    users = [
        Profile(user_id="u1", first_name="Ana", last_name="Lee", role=Role.DEVELOPER),
        Profile(user_id="u2", first_name="Bo", last_name="Kim", role=Role.DESIGNER),
    ]
    records = [
        AttendanceRecord(user_id="u1", work_date=date(2024, 2, 1), status=AttendanceStatus.PRESENT),
        AttendanceRecord(user_id="u2", work_date=date(2024, 2, 1), status=AttendanceStatus.ABSENT),
    ]
    leaves = [
        LeaveApplication(
            leave_id=1,
            user_id="u2",
            start_date=date(2024, 2, 5),
            end_date=date(2024, 2, 9),
            reason="Trip",
            status=LeaveStatus.APPROVED,
        )
    ]

    stats = compute_monthly_stats(users, records, leaves, year=2024, month=2, today=date(2024, 2, 10))
    for s in stats:
        print(s.to_dict())
    print(summarize_team(stats).to_dict())


if __name__ == "__main__":
    main()
