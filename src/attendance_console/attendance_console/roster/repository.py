from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import RosterAssignment


class RosterRepository(Protocol):
    def list_between(
        self, start: date, end: date, employee_ids: Optional[Sequence[str]] = None
    ) -> Sequence[RosterAssignment]:
        """Assignments dated within [start, end], optionally limited to some employees."""

        raise NotImplementedError

    def upsert(self, assignment: RosterAssignment, *, created_by: Optional[str]) -> None:
        """Insert or replace the assignment keyed on (employee_id, date)."""

        raise NotImplementedError
