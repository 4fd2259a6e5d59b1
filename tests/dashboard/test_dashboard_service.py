from __future__ import annotations

from datetime import date, time

import pytest

from src.attendance_console.attendance_console.core.enums import LeaveType
from src.attendance_console.attendance_console.dashboard.service import DashboardService
from src.attendance_console.attendance_console.roster.model import RosterAssignment
from src.attendance_console.attendance_console.roster.service import RosterService


@pytest.fixture
def service(employees_repo, leave_repo, roster_repo, shifts_repo, shift_types_repo):
    roster = RosterService(roster_repo, employees_repo, shifts_repo, shift_types_repo)
    return DashboardService(employees_repo, leave_repo, roster)


def _plan(leave_repo, employee, leave_type, start, end):
    leave_repo.create(
        employee_id=employee.employee_id, leave_type=leave_type, start_date=start, end_date=end, created_by=None
    )


def test_summary_counts(service, leave_repo, roster_repo, shifts_repo, alice, bala):
    _plan(leave_repo, alice, LeaveType.SICK, date(2024, 3, 14), date(2024, 3, 16))
    _plan(leave_repo, bala, LeaveType.FRL, date(2024, 3, 15), date(2024, 3, 15))
    _plan(leave_repo, bala, LeaveType.ANNUAL, date(2024, 2, 20), date(2024, 3, 2))
    _plan(leave_repo, alice, LeaveType.ANNUAL, date(2024, 4, 1), date(2024, 4, 2))
    shift = shifts_repo.add("Morning", time(8, 0), time(16, 0))
    roster_repo.items[(bala.employee_id, date(2024, 3, 15))] = RosterAssignment(
        employee_id=bala.employee_id, date=date(2024, 3, 15), shift_id=shift.shift_id
    )

    summary = service.summary(date(2024, 3, 15)).to_dict()

    assert summary["total_staff"] == 2
    assert summary["on_leave_today"] == 2
    assert summary["sick_today"] == 1
    assert summary["frl_today"] == 1
    assert summary["leaves_this_month"] == 3
    assert summary["sick_leaves_this_month"] == 1
    assert [r["employee_name"] for r in summary["today_roster"]] == ["Bala Kumar"]


def test_month_calendar_weeks_start_on_monday(service, leave_repo, alice):
    _plan(leave_repo, alice, LeaveType.SICK, date(2024, 1, 31), date(2024, 2, 2))
    _plan(leave_repo, alice, LeaveType.ANNUAL, date(2024, 2, 29), date(2024, 3, 1))

    weeks = service.month_calendar(2024, 2)

    # 1 Feb 2024 is a Thursday
    assert weeks[0][:3] == [None, None, None]
    assert weeks[0][3]["date"] == "2024-02-01"
    assert all(len(w) == 7 for w in weeks)
    assert [p["leave_type"] for p in weeks[0][3]["leaves"]] == ["Sick"]
    last_day = next(d for d in reversed(weeks[-1]) if d)
    assert last_day["date"] == "2024-02-29"
    assert [p["leave_type"] for p in last_day["leaves"]] == ["Annual"]

    sick_only = service.month_calendar(2024, 2, LeaveType.SICK)
    assert next(d for d in reversed(sick_only[-1]) if d)["leaves"] == []


def test_leaves_for_date(service, leave_repo, alice):
    _plan(leave_repo, alice, LeaveType.FRL, date(2024, 5, 1), date(2024, 5, 3))

    assert [p.employee_name for p in service.leaves_for_date(date(2024, 5, 3))] == ["Alice Tan"]
    assert service.leaves_for_date(date(2024, 5, 4)) == []
