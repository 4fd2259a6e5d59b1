from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date, today_local
from ..core.constants import MAX_LEAVE_PLANS
from ..core.enums import LEAVE_QUOTAS, LeaveType
from ..core.exceptions import NotFoundError, QuotaExceededError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeavePlan
from .repository import LeavePlanRepository

logger = logging.getLogger(__name__)

DateLike = Union[date, str, None]


def calculate_leave_days(start: date, end: date) -> int:
    """Inclusive day count: a plan starting and ending on the same day is 1 day."""
    return (end - start).days + 1


def _as_date(value: DateLike) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")
    value = value.strip()
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def _as_leave_type(value) -> Optional[LeaveType]:
    if value is None or isinstance(value, LeaveType):
        return value
    value = str(value).strip()
    if not value:
        return None
    try:
        return LeaveType(value)
    except ValueError:
        raise ValidationError(f"Leave type must be one of: {', '.join(t.value for t in LeaveType)}")


def used_days(plans: Sequence[LeavePlan], leave_type: LeaveType, year: int) -> int:
    """Days of `leave_type` booked by plans that start in `year`."""
    return sum(
        calculate_leave_days(p.start_date, p.end_date)
        for p in plans
        if p.leave_type == leave_type and p.start_date.year == year
    )


class LeaveService:
    """Use case: leave plans checked against per-type yearly quotas."""

    def __init__(self, plans: LeavePlanRepository, employees: EmployeeRepository):
        self._plans = plans
        self._employees = employees

    def list_plans(self, employee_id: Optional[str] = None) -> Sequence[LeavePlan]:
        return self._plans.list_plans(employee_id)

    def add_plan(
        self,
        employee_id: Optional[str],
        leave_type,
        start_date: DateLike,
        end_date: DateLike,
        *,
        created_by: Optional[str] = None,
        today: Optional[date] = None,
    ) -> LeavePlan:
        leave_type = _as_leave_type(leave_type) or LeaveType.ANNUAL
        start = _as_date(start_date)
        end = _as_date(end_date)
        if not employee_id or not start or not end:
            raise ValidationError("Please fill in all fields")
        if end < start:
            raise ValidationError("End date must be on or after start date")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        existing = self._plans.list_plans(employee_id)
        if len(existing) >= MAX_LEAVE_PLANS:
            raise ValidationError(f"Maximum {MAX_LEAVE_PLANS} leave plans per employee allowed")

        year = (today or today_local()).year
        requested = calculate_leave_days(start, end)
        used = used_days(existing, leave_type, year)
        limit = LEAVE_QUOTAS[leave_type]
        if used + requested > limit:
            raise QuotaExceededError(leave_type=leave_type.value, used=used, requested=requested, limit=limit)

        plan_id = self._plans.create(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            created_by=created_by,
        )
        logger.info("Added %s leave plan for employee %s (%d days)", leave_type.value, employee_id, requested)
        for plan in self._plans.list_plans(employee_id):
            if plan.plan_id == plan_id:
                return plan
        raise NotFoundError("Leave plan not found")

    def delete_plan(self, plan_id: str) -> None:
        if not self._plans.delete(plan_id):
            raise NotFoundError("Leave plan not found")

    def usage_summary(self, employee_id: str, today: Optional[date] = None) -> dict[str, dict[str, int]]:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        year = (today or today_local()).year
        plans = self._plans.list_plans(employee_id)
        summary = {}
        for leave_type, limit in LEAVE_QUOTAS.items():
            used = used_days(plans, leave_type, year)
            summary[leave_type.value] = {"used": used, "limit": limit, "remaining": max(0, limit - used)}
        return summary
