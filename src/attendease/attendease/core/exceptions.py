from __future__ import annotations

from typing import Any, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ScheduleRejected(ValidationError):
    """Raised when a proposed period fails the window or conflict checks.

    Carries the machine-readable reason and the conflicting periods so the
    caller can build its own message.
    """

    def __init__(self, message: str, *, reason: Any, conflicts: Sequence[Any] = ()):
        super().__init__(message)
        self.reason = reason
        self.conflicts = tuple(conflicts)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when the requested record does not exist."""

    def __init__(self, message: str, *, key: Optional[Any] = None):
        super().__init__(message)
        self.key = key
