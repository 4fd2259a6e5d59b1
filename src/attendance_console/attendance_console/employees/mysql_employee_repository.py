from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.mapping import employee_from_row
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, name, staff_id, position, department, contact_number, joined_date"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY name")
            return [employee_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            return employee_from_row(r) if r else None

    def get_by_staff_id(self, staff_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE staff_id=%s", (staff_id,))
            r = fetchone(cur)
            return employee_from_row(r) if r else None

    def create(
        self,
        *,
        name: str,
        staff_id: str,
        position: str,
        department: str,
        contact_number: str,
        joined_date: Optional[date],
    ) -> str:
        employee_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(id, name, staff_id, position, department, contact_number, joined_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, name, staff_id, position, department, contact_number, joined_date),
            )
        return employee_id

    def update(
        self,
        *,
        employee_id: str,
        name: str,
        staff_id: str,
        position: str,
        department: str,
        contact_number: str,
        joined_date: Optional[date],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, staff_id=%s, position=%s, department=%s, contact_number=%s, joined_date=%s
                WHERE id=%s
                """,
                (name, staff_id, position, department, contact_number, joined_date, employee_id),
            )
            return cur.rowcount > 0
