from __future__ import annotations

from datetime import time
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, normalize_mysql_time
from .model import Shift, ShiftType
from .repository import ShiftRepository, ShiftTypeRepository


def _shift_from_row(r: Mapping[str, Any]) -> Shift:
    return Shift(
        shift_id=str(r["id"]),
        name=r["name"],
        description=r.get("description") or "",
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        color=r.get("color") or "#3B82F6",
        grace_period=int(r.get("grace_period") or 0),
    )


def _shift_type_from_row(r: Mapping[str, Any]) -> ShiftType:
    return ShiftType(
        shift_type_id=str(r["id"]),
        name=r["name"],
        description=r.get("description") or "",
        location=r.get("location") or "",
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, description, start_time, end_time, color, grace_period
                FROM shifts
                ORDER BY start_time, name
                """
            )
            return [_shift_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, description, start_time, end_time, color, grace_period
                FROM shifts
                WHERE id=%s
                """,
                (shift_id,),
            )
            r = fetchone(cur)
            return _shift_from_row(r) if r else None

    def create(
        self,
        *,
        name: str,
        description: str,
        start_time: time,
        end_time: time,
        color: str,
        grace_period: int,
        created_by: Optional[str],
    ) -> str:
        shift_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(id, name, description, start_time, end_time, color, grace_period, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (shift_id, name, description, start_time, end_time, color, grace_period, created_by),
            )
        return shift_id

    def delete(self, shift_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE id=%s", (shift_id,))
            return cur.rowcount > 0


class MySQLShiftTypeRepository(ShiftTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description, location FROM shift_types ORDER BY name")
            return [_shift_type_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, shift_type_id: str) -> Optional[ShiftType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description, location FROM shift_types WHERE id=%s", (shift_type_id,))
            r = fetchone(cur)
            return _shift_type_from_row(r) if r else None

    def create(self, *, name: str, description: str, location: str, created_by: Optional[str]) -> str:
        shift_type_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_types(id, name, description, location, created_by)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (shift_type_id, name, description, location, created_by),
            )
        return shift_type_id

    def delete(self, shift_type_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_types WHERE id=%s", (shift_type_id,))
            return cur.rowcount > 0
