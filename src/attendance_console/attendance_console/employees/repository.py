from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        """All employees ordered by name."""

        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_staff_id(self, staff_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        staff_id: str,
        position: str,
        department: str,
        contact_number: str,
        joined_date: Optional[date],
    ) -> str:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: str,
        name: str,
        staff_id: str,
        position: str,
        department: str,
        contact_number: str,
        joined_date: Optional[date],
    ) -> bool:
        raise NotImplementedError
