from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when credentials or a session context are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DuplicateDateError(ValidationError):
    def __init__(self, dates: Sequence[str]):
        self.dates = sorted(set(dates))
        super().__init__(f"Duplicate dates found: {', '.join(self.dates)}")


class QuotaExceededError(ValidationError):
    def __init__(self, *, leave_type: str, used: int, requested: int, limit: int):
        self.leave_type = leave_type
        self.used = used
        self.requested = requested
        self.limit = limit
        super().__init__(f"Exceeds {leave_type} Leave limit. Used: {used} days, Limit: {limit} days")


class NoMatchingRowsError(ValidationError):
    """Raised when an uploaded sheet has no row matching a known employee."""

    def __init__(self):
        super().__init__("No matching employees found in the uploaded file. Please check the Staff IDs and Names.")
