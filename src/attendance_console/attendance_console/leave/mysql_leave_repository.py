from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id
from .model import LeavePlan
from .repository import LeavePlanRepository

_SELECT = """
    SELECT lp.id, lp.employee_id, lp.leave_type, lp.start_date, lp.end_date, lp.created_by, e.name AS employee_name
    FROM leave_plans lp
    JOIN employees e ON e.id = lp.employee_id
"""


def _plan_from_row(r: Mapping[str, Any]) -> LeavePlan:
    return LeavePlan(
        plan_id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        employee_name=r.get("employee_name") or "",
        created_by=r.get("created_by"),
    )


class MySQLLeavePlanRepository(LeavePlanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_plans(self, employee_id: Optional[str] = None) -> Sequence[LeavePlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            if employee_id:
                cur.execute(_SELECT + " WHERE lp.employee_id=%s ORDER BY lp.created_at DESC", (employee_id,))
            else:
                cur.execute(_SELECT + " ORDER BY lp.created_at DESC")
            return [_plan_from_row(r) for r in fetchall(cur)]

    def list_overlapping(self, start: date, end: date) -> Sequence[LeavePlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE lp.start_date <= %s AND lp.end_date >= %s ORDER BY lp.start_date, e.name",
                (end, start),
            )
            return [_plan_from_row(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        created_by: Optional[str],
    ) -> str:
        plan_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_plans(id, employee_id, leave_type, start_date, end_date, created_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (plan_id, employee_id, leave_type.value, start_date, end_date, created_by),
            )
        return plan_id

    def delete(self, plan_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_plans WHERE id=%s", (plan_id,))
            return cur.rowcount > 0
