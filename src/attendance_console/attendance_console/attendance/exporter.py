from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_EXPORT_DATE_FORMAT, SHEET_NAME_LIMIT
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from .editor import sort_by_date
from .model import AttendanceRecord

logger = logging.getLogger(__name__)

HEADERS = (
    "Date",
    "Duty Time",
    "First In",
    "First Out",
    "Second In",
    "Second Out",
    "Third In",
    "Third Out",
    "Medical",
    "Absent",
    "Remarks",
)
COLUMN_WIDTHS = (12, 10, 10, 10, 10, 10, 10, 10, 8, 8, 20)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


@dataclass(frozen=True)
class ExportGroup:
    employee: Employee
    records: Sequence[AttendanceRecord]


def filter_records(
    records: Iterable[AttendanceRecord], start: Optional[date], end: Optional[date]
) -> list[AttendanceRecord]:
    """Records dated within [start, end]; a missing bound leaves that side open."""

    kept = []
    for record in records:
        try:
            day = parse_iso_date(record.date)
        except ValueError:
            logger.warning("Skipping attendance record with malformed date %r", record.date)
            continue
        if start and day < start:
            continue
        if end and day > end:
            continue
        kept.append(record)
    return kept


def export_filename(employee_name: Optional[str], start: Optional[date], end: Optional[date]) -> str:
    prefix = re.sub(r"\s+", "_", employee_name.strip()) if employee_name and employee_name.strip() else "report"
    start_s = start.strftime("%Y-%m-%d") if start else "start"
    end_s = end.strftime("%Y-%m-%d") if end else "end"
    return f"attendance_{prefix}_{start_s}_{end_s}.xlsx"


def sheet_title(name: str, taken: set[str]) -> str:
    base = _INVALID_SHEET_CHARS.sub("_", name).strip() or "Sheet"
    title = base[:SHEET_NAME_LIMIT]
    n = 2
    while title.lower() in taken:
        suffix = f" ({n})"
        title = base[: SHEET_NAME_LIMIT - len(suffix)] + suffix
        n += 1
    taken.add(title.lower())
    return title


class AttendanceExporter:
    """Formats attendance groups as an .xlsx workbook, one sheet per employee."""

    def __init__(self, *, date_format: str = DEFAULT_EXPORT_DATE_FORMAT):
        self._date_format = date_format

    def _fmt_date(self, value: Optional[date], default: str) -> str:
        return value.strftime(self._date_format) if value else default

    def sheet_rows(self, employee: Employee, records: Sequence[AttendanceRecord], *, start, end) -> list[list]:
        rows: list[list] = [
            ["Attendance Report"],
            [],
            ["Employee Information"],
            ["Name:", employee.name],
            ["Staff ID:", employee.staff_id],
            ["Position:", employee.position],
            ["Department:", employee.department],
            ["Contact No.:", employee.contact_number],
            [],
            ["Period:", self._fmt_date(start, "Start"), "to", self._fmt_date(end, "End")],
            [],
            list(HEADERS),
        ]
        for r in sort_by_date(records):
            rows.append(
                [
                    parse_iso_date(r.date).strftime(self._date_format),
                    r.duty_time,
                    r.in_time1,
                    r.out_time1,
                    r.in_time2,
                    r.out_time2,
                    r.in_time3,
                    r.out_time3,
                    "Yes" if r.medical else "No",
                    "Yes" if r.absent else "No",
                    r.remarks,
                ]
            )
        return rows

    def build_workbook(
        self, groups: Iterable[ExportGroup], *, start: Optional[date] = None, end: Optional[date] = None
    ) -> bytes:
        sheets = []
        for group in groups:
            records = filter_records(group.records, start, end)
            if not records:
                continue
            sheets.append((group.employee, records))

        if not sheets:
            raise ValidationError("No attendance records found for the selected period")

        out = io.BytesIO()
        taken: set[str] = set()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            for employee, records in sheets:
                title = sheet_title(employee.name, taken)
                rows = self.sheet_rows(employee, records, start=start, end=end)
                pd.DataFrame(rows).to_excel(writer, sheet_name=title, index=False, header=False)
                self._format_sheet(writer.sheets[title], header_row=12)

        logger.info("Exported attendance workbook with %d sheet(s)", len(sheets))
        return out.getvalue()

    @staticmethod
    def _format_sheet(ws, *, header_row: int) -> None:
        last = len(HEADERS)
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=last)
        ws.merge_cells(start_row=3, start_column=1, end_row=3, end_column=last)
        ws.cell(row=1, column=1).font = Font(bold=True, size=14)
        ws.cell(row=3, column=1).font = Font(bold=True)
        for col in range(1, last + 1):
            ws.cell(row=header_row, column=col).font = Font(bold=True)
        for idx, width in enumerate(COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width
