from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import iter_dates
from ..core.enums import LeaveType
from ..employees.repository import EmployeeRepository
from ..leave.model import LeavePlan
from ..leave.repository import LeavePlanRepository
from ..roster.service import RosterService


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _on_day(plan: LeavePlan, day: date) -> bool:
    return plan.start_date <= day <= plan.end_date


@dataclass(frozen=True)
class DashboardSummary:
    total_staff: int
    leaves_today: list[LeavePlan]
    leaves_this_month: int
    sick_leaves_this_month: int
    today_roster: list[dict]

    def to_dict(self) -> dict:
        return {
            "total_staff": self.total_staff,
            "on_leave_today": len(self.leaves_today),
            "sick_today": sum(1 for p in self.leaves_today if p.leave_type == LeaveType.SICK),
            "frl_today": sum(1 for p in self.leaves_today if p.leave_type == LeaveType.FRL),
            "leaves_this_month": self.leaves_this_month,
            "sick_leaves_this_month": self.sick_leaves_this_month,
            "leaves_today": [p.to_dict() for p in self.leaves_today],
            "today_roster": self.today_roster,
        }


class DashboardService:
    """Read-only figures for the landing page and the leave calendar."""

    def __init__(self, employees: EmployeeRepository, leave_plans: LeavePlanRepository, roster: RosterService):
        self._employees = employees
        self._leave_plans = leave_plans
        self._roster = roster

    def leaves_for_date(self, day: date) -> list[LeavePlan]:
        return list(self._leave_plans.list_overlapping(day, day))

    def summary(self, today: date) -> DashboardSummary:
        month_start, month_end = _month_bounds(today.year, today.month)
        month_plans = list(self._leave_plans.list_overlapping(month_start, month_end))
        return DashboardSummary(
            total_staff=len(self._employees.list_all()),
            leaves_today=[p for p in month_plans if _on_day(p, today)],
            leaves_this_month=len(month_plans),
            sick_leaves_this_month=sum(1 for p in month_plans if p.leave_type == LeaveType.SICK),
            today_roster=self._roster.today_roster(today),
        )

    def month_calendar(self, year: int, month: int, leave_type: Optional[LeaveType] = None) -> list[list[dict]]:
        """Weeks (Monday first) of the month; padding days outside it are None."""

        month_start, month_end = _month_bounds(year, month)
        plans = [
            p
            for p in self._leave_plans.list_overlapping(month_start, month_end)
            if leave_type is None or p.leave_type == leave_type
        ]

        days = [None] * month_start.weekday()
        for day in iter_dates(month_start, month_end):
            days.append(
                {
                    "date": day.strftime("%Y-%m-%d"),
                    "leaves": [p.to_dict() for p in plans if _on_day(p, day)],
                }
            )
        days.extend([None] * (-len(days) % 7))
        return [days[i : i + 7] for i in range(0, len(days), 7)]
