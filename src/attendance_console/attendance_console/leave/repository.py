from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType
from .model import LeavePlan


class LeavePlanRepository(Protocol):
    def list_plans(self, employee_id: Optional[str] = None) -> Sequence[LeavePlan]:
        """Plans newest first, with the employee's name filled in."""

        raise NotImplementedError

    def list_overlapping(self, start: date, end: date) -> Sequence[LeavePlan]:
        """Plans whose [start_date, end_date] intersects [start, end]."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        created_by: Optional[str],
    ) -> str:
        raise NotImplementedError

    def delete(self, plan_id: str) -> bool:
        raise NotImplementedError
