"""Request/response helpers shared by the feature controllers."""
from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateDateError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "console_token"

_STATUS = (
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS:
        if isinstance(error, cls):
            return status
    return 400


def error_response(error: DomainError):
    payload = {"success": False, "message": str(error)}
    if isinstance(error, DuplicateDateError):
        payload["dates"] = error.dates
    if isinstance(error, QuotaExceededError):
        payload.update(used=error.used, requested=error.requested, limit=error.limit)
    if isinstance(error, AuthenticationError):
        payload["redirect"] = "/login"
    return jsonify(payload), status_for(error)


def json_view(view):
    """Map domain errors to JSON error responses; anything else is logged as a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "Something went wrong. Please try again."}), 500

    return wrapper


def make_login_required(auth_service):
    """Build a decorator that resolves the signed-in operator and passes it as `ctx`."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                ctx = auth_service.resolve(session.get(SESSION_TOKEN_KEY))
            except AuthenticationError as e:
                session.pop(SESSION_TOKEN_KEY, None)
                return error_response(e)
            return view(ctx, *args, **kwargs)

        return wrapper

    return login_required


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def date_arg(value: Optional[str], field_name: str) -> Optional[date]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def required_date_arg(value: Optional[str], field_name: str) -> date:
    parsed = date_arg(value, field_name)
    if parsed is None:
        raise ValidationError(f"{field_name} is required")
    return parsed


def int_arg(value, field_name: str, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")


def flag_arg(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
