from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.model import Shift, ShiftType
from ..shifts.repository import ShiftRepository, ShiftTypeRepository
from .model import RosterAssignment, RosterCell, RosterGrid
from .repository import RosterRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterView:
    """Read-only roster with shift / shift type details resolved per cell."""

    dates: list[date]
    rows: list[tuple[Employee, list[RosterCell]]]
    shifts: dict[str, Shift]
    shift_types: dict[str, ShiftType]

    def _cell_dict(self, cell: RosterCell) -> dict:
        shift = self.shifts.get(cell.shift_id) if cell.shift_id else None
        shift_type = self.shift_types.get(cell.shift_type_id) if cell.shift_type_id else None
        return {
            **cell.to_dict(),
            "shift": shift.to_dict() if shift else None,
            "shift_type": shift_type.to_dict() if shift_type else None,
        }

    def to_dict(self) -> dict:
        return {
            "dates": [d.strftime("%Y-%m-%d") for d in self.dates],
            "rows": [
                {"employee": employee.to_dict(), "cells": [self._cell_dict(c) for c in cells]}
                for employee, cells in self.rows
            ],
        }


class RosterService:
    def __init__(
        self,
        roster: RosterRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        shift_types: ShiftTypeRepository,
    ):
        self._roster = roster
        self._employees = employees
        self._shifts = shifts
        self._shift_types = shift_types

    def _employee_ids(self, employee_ids: Optional[Sequence[str]]) -> list[str]:
        if employee_ids:
            for employee_id in employee_ids:
                if not self._employees.get_by_id(employee_id):
                    raise NotFoundError(f"Employee {employee_id} not found")
            return list(employee_ids)
        return [e.employee_id for e in self._employees.list_all()]

    def build_grid(self, employee_ids: Optional[Sequence[str]], start: date, end: date) -> RosterGrid:
        grid = RosterGrid(self._employee_ids(employee_ids), start, end)
        if grid.employee_ids:
            grid.load(self._roster.list_between(start, end, grid.employee_ids))
        return grid

    def save_grid(self, grid: RosterGrid, *, created_by: Optional[str]) -> int:
        """Upsert every populated cell one at a time; returns the number written."""

        known_shifts = {s.shift_id for s in self._shifts.list_all()}
        known_types = {t.shift_type_id for t in self._shift_types.list_all()}
        cells = grid.populated_cells()
        for cell in cells:
            if cell.shift_id and cell.shift_id not in known_shifts:
                raise ValidationError(f"Unknown shift {cell.shift_id}")
            if cell.shift_type_id and cell.shift_type_id not in known_types:
                raise ValidationError(f"Unknown shift type {cell.shift_type_id}")

        for cell in cells:
            self._roster.upsert(
                RosterAssignment(
                    employee_id=cell.employee_id,
                    date=cell.date,
                    shift_id=cell.shift_id,
                    shift_type_id=cell.shift_type_id,
                ),
                created_by=created_by,
            )
        logger.info("Saved %d roster cells (%s to %s)", len(cells), grid.start, grid.end)
        return len(cells)

    def view(self, employee_ids: Optional[Sequence[str]], start: date, end: date) -> RosterView:
        grid = self.build_grid(employee_ids, start, end)
        employees = {e.employee_id: e for e in self._employees.list_all()}
        return RosterView(
            dates=grid.dates,
            rows=[(employees[eid], cells) for eid, cells in grid.rows() if eid in employees],
            shifts={s.shift_id: s for s in self._shifts.list_all()},
            shift_types={t.shift_type_id: t for t in self._shift_types.list_all()},
        )

    def today_roster(self, today: date) -> list[dict]:
        employees = {e.employee_id: e for e in self._employees.list_all()}
        shifts = {s.shift_id: s for s in self._shifts.list_all()}
        shift_types = {t.shift_type_id: t for t in self._shift_types.list_all()}

        entries = []
        for a in self._roster.list_between(today, today):
            employee = employees.get(a.employee_id)
            if not employee:
                continue
            shift = shifts.get(a.shift_id) if a.shift_id else None
            shift_type = shift_types.get(a.shift_type_id) if a.shift_type_id else None
            entries.append(
                {
                    "employee_id": employee.employee_id,
                    "employee_name": employee.name,
                    "shift": shift.to_dict() if shift else None,
                    "shift_type": shift_type.to_dict() if shift_type else None,
                }
            )
        entries.sort(key=lambda e: ((e["shift"] or {}).get("start_time", "99:99"), e["employee_name"]))
        return entries
