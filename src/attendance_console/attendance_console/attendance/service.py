from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .editor import AttendanceEditor, ensure_unique_dates, paginate, sort_by_date
from .exporter import ExportGroup
from .factory import AttendanceStrategyFactory
from .lateness import is_late
from .model import AttendanceRecord, AttendanceRowUI
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendancePage:
    rows: list[AttendanceRowUI]
    page: int
    page_count: int
    total: int
    descending: bool

    def to_dict(self) -> dict:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "page": self.page,
            "page_count": self.page_count,
            "total": self.total,
            "descending": self.descending,
        }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._page_size = int(page_size)

    @property
    def page_size(self) -> int:
        return self._page_size

    def _require_employee(self, employee_id: str) -> None:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

    @staticmethod
    def _require_dates(records: Sequence[AttendanceRecord]) -> None:
        for r in records:
            try:
                parse_iso_date(r.date)
            except ValueError:
                raise ValidationError(f"Invalid date {r.date!r} (expected YYYY-MM-DD)")

    def get_records(self, employee_id: str) -> list[AttendanceRecord]:
        self._require_employee(employee_id)
        return sort_by_date(self._attendance.list_for_employee(employee_id))

    def save_records(self, employee_id: str, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Make the stored set for `employee_id` equal to `records`.

        Existing dates are updated, new dates inserted and stored dates missing from
        `records` deleted, one statement at a time. Returns the re-read records.
        """

        self._require_employee(employee_id)
        ordered = sort_by_date(records)
        ensure_unique_dates(ordered)
        self._require_dates(ordered)

        existing = self._attendance.list_existing(employee_id)
        for record in ordered:
            record_id = existing.get(record.date)
            if record_id:
                self._attendance.update(record_id, employee_id, record)
            else:
                self._attendance.insert(employee_id, record)

        kept = {r.date for r in ordered}
        removed = [record_id for day, record_id in existing.items() if day not in kept]
        if removed:
            self._attendance.delete_many(removed)

        logger.info(
            "Saved %d attendance records for employee %s (%d removed)", len(ordered), employee_id, len(removed)
        )
        return self.get_records(employee_id)

    def upsert_records(self, employee_id: str, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Upsert each record on (employee, date); stored dates not listed are kept."""

        self._require_employee(employee_id)
        ordered = sort_by_date(records)
        ensure_unique_dates(ordered)
        self._require_dates(ordered)

        for record in ordered:
            self._attendance.upsert(employee_id, record)
        return self.get_records(employee_id)

    def to_row_ui(self, record: AttendanceRecord) -> AttendanceRowUI:
        decision = self._factory.decide(record)
        return AttendanceRowUI(
            date=record.date,
            record=record,
            status=decision.status,
            label=decision.label,
            css_class=decision.css_class,
            is_late=is_late(record),
        )

    def view_page(self, employee_id: str, *, page: int = 1, descending: bool = False) -> AttendancePage:
        records = sort_by_date(self.get_records(employee_id), descending=descending)
        rows, page, page_count = paginate(records, page=page, page_size=self._page_size)
        return AttendancePage(
            rows=[self.to_row_ui(r) for r in rows],
            page=page,
            page_count=page_count,
            total=len(records),
            descending=descending,
        )

    def open_editor(self, employee_id: str) -> AttendanceEditor:
        """Editor over the stored records; saving replaces the employee's stored set."""

        return AttendanceEditor(
            self.get_records(employee_id),
            lambda records: self.save_records(employee_id, records),
            page_size=self._page_size,
        )

    def open_upload_editor(self, employee_id: str, records: Sequence[AttendanceRecord]) -> AttendanceEditor:
        """Editor over freshly imported records; saving upserts them."""

        self._require_employee(employee_id)
        return AttendanceEditor(
            records,
            lambda edited: self.upsert_records(employee_id, edited),
            page_size=self._page_size,
        )

    def export_groups(self, employee_id: Optional[str] = None) -> list[ExportGroup]:
        if employee_id:
            employee = self._employees.get_by_id(employee_id)
            if not employee:
                raise NotFoundError("Employee not found")
            return [ExportGroup(employee=employee, records=self._attendance.list_for_employee(employee_id))]

        by_employee = self._attendance.list_all()
        return [
            ExportGroup(employee=e, records=by_employee.get(e.employee_id, []))
            for e in self._employees.list_all()
        ]
