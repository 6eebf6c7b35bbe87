"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role, SessionErrorCode
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    SessionError,
    StorageCorruptionError,
    ValidationError,
)
from ..users.model import User

logger = logging.getLogger(__name__)


def session_user() -> Optional[User]:
    if "username" not in session:
        return None
    return User(username=session["username"], device_id=session.get("device_id", ""), role=Role(session["role"]))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "username" not in session:
            return error_response(AuthorizationError("Please log in to continue"))
        return view(*args, **kwargs)

    return wrapper


def status_for(error: Exception) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, (AuthenticationError, AuthorizationError)):
        return 401
    if isinstance(error, SessionError):
        return 404 if error.code == SessionErrorCode.NOT_FOUND else 409
    if isinstance(error, DomainError):
        return 400
    return 500


def error_response(error: Exception):
    body = {"success": False, "message": str(error)}
    if isinstance(error, DomainError):
        if error.code is not None:
            body["code"] = error.code.value
        if isinstance(error, SessionError) and error.distance_meters is not None:
            body["distanceMeters"] = round(error.distance_meters, 1)
    elif isinstance(error, StorageCorruptionError):
        logger.error("Storage corruption: %s", error)
        body["message"] = "Stored data is corrupted and needs manual recovery"
    else:
        logger.exception("Unexpected error")
        body["message"] = "Internal error"
    return jsonify(body), status_for(error)


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def optional_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
