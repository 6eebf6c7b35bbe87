from __future__ import annotations

from typing import Optional

from .enums import AuthErrorCode, SessionErrorCode, ValidationErrorCode


class DomainError(Exception):
    """Base exception for business rule violations.

    These are expected outcomes: callers branch on them and show the message.
    """

    code = None

    def __init__(self, message: str, code=None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ValidationError(DomainError):
    """Raised when input data is invalid or incomplete."""

    def __init__(self, message: str, code: ValidationErrorCode):
        super().__init__(message, code)


class AuthenticationError(DomainError):
    """Raised when a username cannot be resolved on this device."""

    def __init__(self, message: str, code: AuthErrorCode):
        super().__init__(message, code)


class AuthorizationError(DomainError):
    """Raised when there is no logged-in user for an action."""


class SessionError(DomainError):
    """Raised when a check-in/check-out transition is not permitted."""

    def __init__(self, message: str, code: SessionErrorCode, *, distance_meters: Optional[float] = None):
        super().__init__(message, code)
        self.distance_meters = distance_meters


class StorageCorruptionError(Exception):
    """A persisted record could not be decoded.

    Not a business outcome: treat as data loss that needs manual recovery.
    """

    def __init__(self, key: str, detail: str):
        super().__init__(f"Corrupted record under {key!r}: {detail}")
        self.key = key
        self.detail = detail
