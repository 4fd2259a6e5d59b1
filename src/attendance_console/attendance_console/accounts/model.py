from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminUser:
    """Console operator account.

    Note: Plain data object (no DB access code).
    """

    user_id: str
    email: str
    full_name: str
    password_hash: str
    is_active: bool = True


@dataclass(frozen=True)
class SessionContext:
    """Signed-in operator, handed explicitly to every page-level handler."""

    token: str
    user_id: str
    email: str
    full_name: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_public_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "full_name": self.full_name,
            "expires_at": self.expires_at.isoformat(timespec="seconds"),
        }
