from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import iter_dates
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class RosterAssignment:
    """Stored roster entry: at most one per (employee, date)."""

    employee_id: str
    date: date
    shift_id: Optional[str] = None
    shift_type_id: Optional[str] = None
    assignment_id: Optional[str] = None


@dataclass(frozen=True)
class RosterCell:
    employee_id: str
    date: date
    shift_id: Optional[str] = None
    shift_type_id: Optional[str] = None

    @property
    def is_populated(self) -> bool:
        return bool(self.shift_id or self.shift_type_id)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "shift_id": self.shift_id,
            "shift_type_id": self.shift_type_id,
        }


class RosterGrid:
    """Dense grid of one cell per (employee, calendar date) in an inclusive range.

    Cell changes stay local until the grid is saved.
    """

    def __init__(self, employee_ids: Iterable[str], start: date, end: date):
        if end < start:
            raise ValidationError("End date must be on or after start date")
        self.employee_ids = list(dict.fromkeys(employee_ids))
        self.start = start
        self.end = end
        self._dates = list(iter_dates(start, end))
        self._cells: dict[tuple[str, date], RosterCell] = {
            (employee_id, day): RosterCell(employee_id=employee_id, date=day)
            for employee_id in self.employee_ids
            for day in self._dates
        }

    @property
    def dates(self) -> list[date]:
        return list(self._dates)

    def __len__(self) -> int:
        return len(self._cells)

    def cell(self, employee_id: str, day: date) -> RosterCell:
        try:
            return self._cells[(employee_id, day)]
        except KeyError:
            raise ValidationError(f"No roster cell for employee {employee_id} on {day:%Y-%m-%d}")

    def set_shift(self, employee_id: str, day: date, shift_id: Optional[str]) -> RosterCell:
        updated = replace(self.cell(employee_id, day), shift_id=shift_id or None)
        self._cells[(employee_id, day)] = updated
        return updated

    def set_shift_type(self, employee_id: str, day: date, shift_type_id: Optional[str]) -> RosterCell:
        updated = replace(self.cell(employee_id, day), shift_type_id=shift_type_id or None)
        self._cells[(employee_id, day)] = updated
        return updated

    def load(self, assignments: Iterable[RosterAssignment]) -> None:
        """Preload stored assignments; entries outside the grid are ignored."""

        for a in assignments:
            key = (a.employee_id, a.date)
            if key in self._cells:
                self._cells[key] = RosterCell(
                    employee_id=a.employee_id, date=a.date, shift_id=a.shift_id, shift_type_id=a.shift_type_id
                )

    def populated_cells(self) -> list[RosterCell]:
        return [c for c in self._cells.values() if c.is_populated]

    def rows(self) -> list[tuple[str, list[RosterCell]]]:
        return [(employee_id, [self._cells[(employee_id, d)] for d in self._dates]) for employee_id in self.employee_ids]
