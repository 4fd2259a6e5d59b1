from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_SESSION_HOURS
from ..core.exceptions import AuthenticationError, ValidationError
from .model import SessionContext
from .repository import AdminUserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign operators in and out.

    Live session contexts are kept per process and looked up by token; a context
    is dropped on sign-out, when it is resolved after expiry, or on the next sign-in
    after it expires.
    """

    def __init__(self, users: AdminUserRepository, *, session_hours: int = DEFAULT_SESSION_HOURS):
        self._users = users
        self._lifetime = timedelta(hours=int(session_hours))
        self._sessions: dict[str, SessionContext] = {}

    def sign_in(self, email: str, password: str, *, now: Optional[datetime] = None) -> SessionContext:
        now = now or datetime.now()
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        ctx = SessionContext(
            token=secrets.token_urlsafe(32),
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            issued_at=now,
            expires_at=now + self._lifetime,
        )
        self._sessions = {t: c for t, c in self._sessions.items() if not c.is_expired(now)}
        self._sessions[ctx.token] = ctx
        logger.info("Operator %s signed in", user.email)
        return ctx

    def resolve(self, token: Optional[str], *, now: Optional[datetime] = None) -> SessionContext:
        now = now or datetime.now()
        ctx = self._sessions.get(token or "")
        if ctx is None:
            raise AuthenticationError("Please sign in to continue")
        if ctx.is_expired(now):
            self._sessions.pop(ctx.token, None)
            raise AuthenticationError("Session expired, please sign in again")
        return ctx

    def sign_out(self, ctx: SessionContext) -> None:
        if self._sessions.pop(ctx.token, None) is not None:
            logger.info("Operator %s signed out", ctx.email)


class AccountService:
    """Use case: manage console operator accounts."""

    def __init__(self, users: AdminUserRepository):
        self._users = users

    def create_admin(self, *, email: str, full_name: str, password: str) -> str:
        email = require_non_empty(email, "Email").lower()
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", 6)

        if self._users.get_by_email(email):
            raise ValidationError("Email already registered")

        return self._users.create(email=email, full_name=full_name, password_hash=generate_password_hash(password))
