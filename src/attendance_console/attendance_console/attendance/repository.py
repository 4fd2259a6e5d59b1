from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        """Records ascending by date, with duty time / grace period from the roster."""

        raise NotImplementedError

    def list_all(self) -> dict[str, list[AttendanceRecord]]:
        """Every employee's records keyed by employee id."""

        raise NotImplementedError

    def list_existing(self, employee_id: str) -> dict[str, str]:
        """Stored record ids keyed by ISO date."""

        raise NotImplementedError

    def upsert(self, employee_id: str, record: AttendanceRecord) -> None:
        """Insert or replace the record keyed on (employee_id, date)."""

        raise NotImplementedError

    def insert(self, employee_id: str, record: AttendanceRecord) -> str:
        raise NotImplementedError

    def update(self, record_id: str, employee_id: str, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete_many(self, record_ids: Sequence[str]) -> int:
        raise NotImplementedError
