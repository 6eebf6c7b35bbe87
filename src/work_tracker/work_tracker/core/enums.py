from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for report scoping."""

    ADMIN = "ADMIN"
    USER = "USER"


class WorkLogStatus(str, Enum):
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class AuthErrorCode(str, Enum):
    NOT_REGISTERED = "NOT_REGISTERED"
    USERNAME_MISMATCH = "USERNAME_MISMATCH"
    DEVICE_MISMATCH = "DEVICE_MISMATCH"


class SessionErrorCode(str, Enum):
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    OUT_OF_RANGE = "OUT_OF_RANGE"


class ValidationErrorCode(str, Enum):
    MISSING_USERNAME = "MISSING_USERNAME"
    MISSING_JOB_NAME = "MISSING_JOB_NAME"
    MISSING_LOCATION = "MISSING_LOCATION"
    INVALID_MONTH = "INVALID_MONTH"
    EMPTY_REPORT = "EMPTY_REPORT"
