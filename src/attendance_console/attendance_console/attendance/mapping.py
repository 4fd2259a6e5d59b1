"""Conversions between store rows and in-memory records.

Store rows are the `attendance_records` / `employees` column dicts returned by the
repository layer (nullable columns, DATE/TINYINT types). In-memory records use empty
strings and booleans instead of NULLs. Every page-level flow goes through here so the
two shapes cannot drift apart.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..database.mysql_base import date_to_iso
from ..employees.model import Employee
from .model import TIME_FIELDS, AttendanceRecord


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _flag(value: Any) -> bool:
    return bool(value) if value is not None else False


def _nullable(value: str) -> Optional[str]:
    return value if value != "" else None


def record_from_row(
    row: Mapping[str, Any],
    *,
    duty_time: Optional[str] = None,
    grace_period: Optional[int] = None,
) -> AttendanceRecord:
    """Build a record from a stored row.

    A stored duty time wins; the rostered shift start (`duty_time`) only fills an
    empty one.
    """

    stored_duty = _text(row.get("duty_time"))
    return AttendanceRecord(
        date=date_to_iso(row.get("date")),
        duty_time=stored_duty or (duty_time or ""),
        in_time1=_text(row.get("in_time1")),
        out_time1=_text(row.get("out_time1")),
        in_time2=_text(row.get("in_time2")),
        out_time2=_text(row.get("out_time2")),
        in_time3=_text(row.get("in_time3")),
        out_time3=_text(row.get("out_time3")),
        medical=_flag(row.get("medical")),
        absent=_flag(row.get("absent")),
        remarks=_text(row.get("remarks")),
        grace_period=int(grace_period or 0),
        record_id=_text(row.get("id")) or None,
    )


def row_from_record(employee_id: str, record: AttendanceRecord) -> dict:
    row = {
        "employee_id": employee_id,
        "date": record.date,
        "duty_time": _nullable(record.duty_time),
        "medical": bool(record.medical),
        "absent": bool(record.absent),
        "remarks": _nullable(record.remarks),
    }
    for field in TIME_FIELDS:
        row[field] = _nullable(getattr(record, field))
    return row


def record_from_payload(payload: Mapping[str, Any]) -> AttendanceRecord:
    """Build a record from a JSON body item (same field names as `to_dict`)."""

    values = {field: _text(payload.get(field)).strip() for field in ("date", "duty_time", *TIME_FIELDS)}
    return AttendanceRecord(
        **values,
        medical=_flag(payload.get("medical")),
        absent=_flag(payload.get("absent")),
        remarks=_text(payload.get("remarks")),
        grace_period=int(payload.get("grace_period") or 0),
    )


def employee_from_row(row: Mapping[str, Any]) -> Employee:
    joined = row.get("joined_date")
    return Employee(
        employee_id=_text(row.get("id")),
        name=_text(row.get("name")),
        staff_id=_text(row.get("staff_id")),
        position=_text(row.get("position")),
        department=_text(row.get("department")),
        contact_number=_text(row.get("contact_number")),
        joined_date=joined if isinstance(joined, date) else None,
    )


def employee_to_row(employee: Employee) -> dict:
    return {
        "id": employee.employee_id,
        "name": employee.name,
        "staff_id": employee.staff_id,
        "position": employee.position,
        "department": employee.department,
        "contact_number": employee.contact_number,
        "joined_date": employee.joined_date,
    }
