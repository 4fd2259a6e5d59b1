from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: employee directory (list / add / edit)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _clean(
        self,
        *,
        name: str,
        staff_id: str,
        joined_date: Optional[date],
        today: Optional[date],
        exclude_id: Optional[str] = None,
    ) -> tuple[str, str]:
        name = require_non_empty(name, "Name")
        staff_id = require_non_empty(staff_id, "Staff ID")

        if joined_date and joined_date > (today or today_local()):
            raise ValidationError("Joined date cannot be in the future.")

        holder = self._employees.get_by_staff_id(staff_id)
        if holder and holder.employee_id != exclude_id:
            raise ValidationError(f"Staff ID {staff_id} is already assigned to {holder.name}")
        return name, staff_id

    def add_employee(
        self,
        *,
        name: str,
        staff_id: str,
        position: str = "",
        department: str = "",
        contact_number: str = "",
        joined_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Employee:
        name, staff_id = self._clean(name=name, staff_id=staff_id, joined_date=joined_date, today=today)
        employee_id = self._employees.create(
            name=name,
            staff_id=staff_id,
            position=(position or "").strip(),
            department=(department or "").strip(),
            contact_number=(contact_number or "").strip(),
            joined_date=joined_date,
        )
        logger.info("Added employee %s (%s)", name, staff_id)
        return self.get_employee(employee_id)

    def edit_employee(
        self,
        employee_id: str,
        *,
        name: str,
        staff_id: str,
        position: str = "",
        department: str = "",
        contact_number: str = "",
        joined_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> Employee:
        self.get_employee(employee_id)
        name, staff_id = self._clean(
            name=name, staff_id=staff_id, joined_date=joined_date, today=today, exclude_id=employee_id
        )
        self._employees.update(
            employee_id=employee_id,
            name=name,
            staff_id=staff_id,
            position=(position or "").strip(),
            department=(department or "").strip(),
            contact_number=(contact_number or "").strip(),
            joined_date=joined_date,
        )
        return self.get_employee(employee_id)
