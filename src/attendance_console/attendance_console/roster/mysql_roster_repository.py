from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id, placeholders
from .model import RosterAssignment
from .repository import RosterRepository


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(
        self, start: date, end: date, employee_ids: Optional[Sequence[str]] = None
    ) -> Sequence[RosterAssignment]:
        sql = """
            SELECT id, employee_id, date, shift_id, shift_type_id
            FROM roster_assignments
            WHERE date BETWEEN %s AND %s
        """
        params: list = [start, end]
        if employee_ids is not None:
            if not employee_ids:
                return []
            sql += f" AND employee_id IN ({placeholders(len(employee_ids))})"
            params.extend(employee_ids)
        sql += " ORDER BY date, employee_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                RosterAssignment(
                    employee_id=str(r["employee_id"]),
                    date=r["date"],
                    shift_id=r.get("shift_id"),
                    shift_type_id=r.get("shift_type_id"),
                    assignment_id=str(r["id"]),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, assignment: RosterAssignment, *, created_by: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO roster_assignments(id, employee_id, date, shift_id, shift_type_id, created_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE shift_id=VALUES(shift_id), shift_type_id=VALUES(shift_type_id)
                """,
                (
                    new_id(),
                    assignment.employee_id,
                    assignment.date,
                    assignment.shift_id,
                    assignment.shift_type_id,
                    created_by,
                ),
            )
