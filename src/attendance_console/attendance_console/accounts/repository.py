from __future__ import annotations

from typing import Optional, Protocol

from .model import AdminUser


class AdminUserRepository(Protocol):
    """Repository interface for console accounts.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def create(self, *, email: str, full_name: str, password_hash: str) -> str:
        raise NotImplementedError
