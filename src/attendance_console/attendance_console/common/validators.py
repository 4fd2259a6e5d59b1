from __future__ import annotations

from datetime import datetime

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_hhmm(value: str, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    try:
        datetime.strptime(value[:5], "%H:%M")
    except ValueError:
        raise ValidationError(f"{field_name} must be a time (HH:MM)")
    return value[:5]
