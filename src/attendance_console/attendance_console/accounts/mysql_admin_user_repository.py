from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, new_id
from .model import AdminUser
from .repository import AdminUserRepository


def _to_user(r: dict) -> AdminUser:
    return AdminUser(
        user_id=str(r["id"]),
        email=r["email"],
        full_name=r.get("full_name") or "",
        password_hash=r["password_hash"],
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLAdminUserRepository(AdminUserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, full_name, password_hash, is_active FROM admin_users WHERE id=%s",
                (user_id,),
            )
            r = fetchone(cur)
            return _to_user(r) if r else None

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, full_name, password_hash, is_active FROM admin_users WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            return _to_user(r) if r else None

    def create(self, *, email: str, full_name: str, password_hash: str) -> str:
        user_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admin_users(id, email, full_name, password_hash) VALUES(%s,%s,%s,%s)",
                (user_id, email, full_name, password_hash),
            )
        return user_id
