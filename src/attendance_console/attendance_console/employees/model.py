from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member whose attendance is tracked."""

    employee_id: str
    name: str
    staff_id: str
    position: str = ""
    department: str = ""
    contact_number: str = ""
    joined_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "staff_id": self.staff_id,
            "position": self.position,
            "department": self.department,
            "contact_number": self.contact_number,
            "joined_date": self.joined_date.strftime("%Y-%m-%d") if self.joined_date else None,
        }
