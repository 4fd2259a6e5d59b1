from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import date_to_iso, db_cursor, fetchall, new_id, placeholders, time_to_hhmm
from .mapping import record_from_row, row_from_record
from .model import TIME_FIELDS, AttendanceRecord
from .repository import AttendanceRepository

_WRITE_COLUMNS = ("employee_id", "date", "duty_time", *TIME_FIELDS, "medical", "absent", "remarks")

_SELECT_WITH_ROSTER = """
    SELECT
        ar.id, ar.employee_id, ar.date, ar.duty_time,
        ar.in_time1, ar.out_time1, ar.in_time2, ar.out_time2, ar.in_time3, ar.out_time3,
        ar.medical, ar.absent, ar.remarks,
        s.start_time AS shift_start, s.grace_period AS shift_grace
    FROM attendance_records ar
    LEFT JOIN roster_assignments ra ON ra.employee_id = ar.employee_id AND ra.date = ar.date
    LEFT JOIN shifts s ON s.id = ra.shift_id
"""


def _from_joined_row(r: dict) -> AttendanceRecord:
    return record_from_row(
        r,
        duty_time=time_to_hhmm(r.get("shift_start")),
        grace_period=int(r.get("shift_grace") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT_WITH_ROSTER} WHERE ar.employee_id=%s ORDER BY ar.date ASC",
                (employee_id,),
            )
            return [_from_joined_row(r) for r in fetchall(cur)]

    def list_all(self) -> dict[str, list[AttendanceRecord]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_WITH_ROSTER} ORDER BY ar.employee_id, ar.date ASC")
            out: dict[str, list[AttendanceRecord]] = defaultdict(list)
            for r in fetchall(cur):
                out[str(r["employee_id"])].append(_from_joined_row(r))
            return dict(out)

    def list_existing(self, employee_id: str) -> dict[str, str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, date FROM attendance_records WHERE employee_id=%s", (employee_id,))
            return {date_to_iso(r["date"]): str(r["id"]) for r in fetchall(cur)}

    def upsert(self, employee_id: str, record: AttendanceRecord) -> None:
        row = row_from_record(employee_id, record)
        columns = ("id", *_WRITE_COLUMNS)
        updates = ", ".join(f"{c}=VALUES({c})" for c in _WRITE_COLUMNS[2:])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({", ".join(columns)})
                VALUES({placeholders(len(columns))})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                (new_id(), *(row[c] for c in _WRITE_COLUMNS)),
            )

    def insert(self, employee_id: str, record: AttendanceRecord) -> str:
        row = row_from_record(employee_id, record)
        record_id = new_id()
        columns = ("id", *_WRITE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO attendance_records({', '.join(columns)}) VALUES({placeholders(len(columns))})",
                (record_id, *(row[c] for c in _WRITE_COLUMNS)),
            )
        return record_id

    def update(self, record_id: str, employee_id: str, record: AttendanceRecord) -> bool:
        row = row_from_record(employee_id, record)
        assignments = ", ".join(f"{c}=%s" for c in _WRITE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {assignments} WHERE id=%s",
                (*(row[c] for c in _WRITE_COLUMNS), record_id),
            )
            return cur.rowcount > 0

    def delete_many(self, record_ids: Sequence[str]) -> int:
        if not record_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM attendance_records WHERE id IN ({placeholders(len(record_ids))})",
                tuple(record_ids),
            )
            return int(cur.rowcount)
