"""Spreadsheet upload pipeline.

An uploaded sheet is read into text rows, every row is matched to a known employee by
staff ID and case-insensitive name, times and dates are normalized, and the accepted
records are upserted one (employee, date) at a time.
"""
from __future__ import annotations

import logging
import math
import zipfile
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import IO, Iterable, Mapping, Optional, Sequence

import pandas as pd

from ..common.datetime_utils import format_hhmm, parse_iso_date
from ..core.exceptions import NoMatchingRowsError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .editor import sort_by_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("ID Number", "Name", "Date", "IN", "OUT")

# pandas suffixes repeated headers, so the second and third IN/OUT pairs arrive as IN.1/OUT.1 and IN.2/OUT.2.
TIME_COLUMNS = (
    ("IN", "in_time1"),
    ("OUT", "out_time1"),
    ("IN.1", "in_time2"),
    ("OUT.1", "out_time2"),
    ("IN.2", "in_time3"),
    ("OUT.2", "out_time3"),
)

SERIAL_EPOCH = date(1899, 12, 30)


def _cell_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (pd.Timestamp, datetime)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value).strip()


def read_attendance_sheet(stream: IO[bytes], filename: Optional[str] = None) -> list[dict[str, str]]:
    """Read the first sheet of an upload into rows of header -> text."""

    try:
        if filename and filename.lower().endswith(".csv"):
            df = pd.read_csv(stream, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(stream, sheet_name=0, dtype=object)
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        raise ValidationError(f"Could not read the uploaded file: {e}")

    df.columns = [str(c).strip() for c in df.columns]
    missing = [h for h in REQUIRED_HEADERS if h not in df.columns]
    if missing:
        raise ValidationError(f"Missing required columns: {', '.join(missing)}")

    df = df.fillna("")
    return [{col: _cell_text(value) for col, value in row.items()} for row in df.to_dict(orient="records")]


def normalize_time(value) -> str:
    """Decimal hours become zero-padded HH:MM; any other text passes through."""

    text = _cell_text(value)
    if not text:
        return ""
    try:
        hours = float(text)
    except ValueError:
        return text
    if not math.isfinite(hours * 60):
        return text

    return format_hhmm(math.floor(hours * 60 + 0.5))


def normalize_date(value) -> str:
    """Reduce a date cell to YYYY-MM-DD.

    Numbers are spreadsheet serials (1900 system), text with "/" is DD/MM/YYYY and
    anything else goes through pandas' parser. Raises ValidationError when unparseable.
    """

    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.strftime("%Y-%m-%d")

    text = _cell_text(value)
    if not text:
        raise ValidationError("Date is empty")

    try:
        serial = float(text)
    except ValueError:
        serial = None
    if serial is not None:
        if not math.isfinite(serial):
            raise ValidationError(f"Unrecognised date {text!r}")
        try:
            return (SERIAL_EPOCH + timedelta(days=int(serial))).strftime("%Y-%m-%d")
        except (OverflowError, ValueError):
            raise ValidationError(f"Unrecognised date {text!r}")

    if "/" in text:
        try:
            return datetime.strptime(text, "%d/%m/%Y").strftime("%Y-%m-%d")
        except ValueError:
            raise ValidationError(f"Unrecognised date {text!r} (expected DD/MM/YYYY)")

    try:
        return parse_iso_date(text).strftime("%Y-%m-%d")
    except ValueError:
        pass
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError):
        raise ValidationError(f"Unrecognised date {text!r}")
    if pd.isna(parsed):
        raise ValidationError(f"Unrecognised date {text!r}")
    return parsed.strftime("%Y-%m-%d")


def match_employee(row: Mapping[str, str], employees: Iterable[Employee]) -> Optional[Employee]:
    staff_id = str(row.get("ID Number") or "").strip()
    name = str(row.get("Name") or "").strip().lower()
    if not staff_id or not name:
        return None
    for employee in employees:
        if employee.staff_id == staff_id and employee.name.strip().lower() == name:
            return employee
    return None


def record_from_sheet_row(row: Mapping[str, str]) -> AttendanceRecord:
    times = {attr: normalize_time(row.get(col, "")) for col, attr in TIME_COLUMNS}
    return AttendanceRecord(date=normalize_date(row.get("Date", "")), **times)


@dataclass
class ImportBatch:
    employee: Employee
    records: list[AttendanceRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class ImportResult:
    batches: list[ImportBatch]
    skipped_rows: int
    saved: bool

    @property
    def record_count(self) -> int:
        return sum(len(b.records) for b in self.batches)

    def to_dict(self) -> dict:
        return {
            "saved": self.saved,
            "record_count": self.record_count,
            "skipped_rows": self.skipped_rows,
            "employees": [
                {"employee_id": b.employee.employee_id, "name": b.employee.name, "records": len(b.records)}
                for b in self.batches
            ],
            "batches": [b.to_dict() for b in self.batches],
        }


class AttendanceImporter:
    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository):
        self._employees = employees
        self._attendance = attendance

    def build_batches(self, rows: Sequence[Mapping[str, str]], employees: Sequence[Employee]) -> list[ImportBatch]:
        """Group matched rows per employee, records sorted by date.

        Within one employee a later row for the same date replaces the earlier one.
        """

        batches, _ = self._collect(rows, employees)
        return batches

    def _collect(
        self, rows: Sequence[Mapping[str, str]], employees: Sequence[Employee]
    ) -> tuple[list[ImportBatch], int]:
        grouped: dict[str, ImportBatch] = {}
        by_date: dict[str, dict[str, AttendanceRecord]] = {}
        skipped = 0

        for index, row in enumerate(rows, start=2):
            employee = match_employee(row, employees)
            if employee is None:
                skipped += 1
                continue
            try:
                record = record_from_sheet_row(row)
            except ValidationError as e:
                logger.warning("Skipping sheet row %d for %s: %s", index, employee.staff_id, e)
                skipped += 1
                continue

            grouped.setdefault(employee.employee_id, ImportBatch(employee=employee))
            by_date.setdefault(employee.employee_id, {})[record.date] = record

        if not grouped:
            raise NoMatchingRowsError()

        batches = []
        for employee_id, batch in grouped.items():
            batch.records = sort_by_date(by_date[employee_id].values())
            batches.append(batch)
        return batches, skipped

    def preview(self, stream: IO[bytes], filename: Optional[str] = None) -> ImportResult:
        rows = read_attendance_sheet(stream, filename)
        batches, skipped = self._collect(rows, list(self._employees.list_all()))
        return ImportResult(batches=batches, skipped_rows=skipped, saved=False)

    def import_file(self, stream: IO[bytes], filename: Optional[str] = None) -> ImportResult:
        result = self.preview(stream, filename)

        for batch in result.batches:
            for record in batch.records:
                self._attendance.upsert(batch.employee.employee_id, record)
            logger.info(
                "Imported %d attendance records for %s (%s)",
                len(batch.records),
                batch.employee.name,
                batch.employee.staff_id,
            )

        return ImportResult(batches=result.batches, skipped_rows=result.skipped_rows, saved=True)
