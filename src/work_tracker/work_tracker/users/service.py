from __future__ import annotations

import logging
from typing import NoReturn, Optional

from ..common.validators import require_non_empty
from ..core.enums import AuthErrorCode, Role, ValidationErrorCode
from ..core.exceptions import AuthenticationError
from .device import DeviceFingerprint
from .model import User
from .policy import AdminPolicy
from .repository import CurrentUserRepository

logger = logging.getLogger(__name__)


class IdentityService:
    """Use case: bind a username to this device and log in with it."""

    def __init__(
        self,
        users: CurrentUserRepository,
        device: DeviceFingerprint,
        *,
        policy: Optional[AdminPolicy] = None,
    ):
        self._users = users
        self._device = device
        self._policy = policy or AdminPolicy()

    def current_user(self) -> Optional[User]:
        return self._users.get()

    def register(self, username: str) -> User:
        username = require_non_empty(username, "Username", ValidationErrorCode.MISSING_USERNAME)
        user = User(username=username, device_id=self._device.device_id(), role=self._policy.role_for(username))
        self._users.save(user)
        logger.info("Registered %s as %s on device %s", user.username, user.role.value, user.device_id)
        return user

    def login(self, username: str) -> User:
        username = require_non_empty(username, "Username", ValidationErrorCode.MISSING_USERNAME)
        device_id = self._device.device_id()

        admin_name = self._policy.canonical_name(username)
        if admin_name is not None:
            # Administrators are not tied to a device; the session still records this one.
            user = User(username=admin_name, device_id=device_id, role=Role.ADMIN)
            self._users.save(user)
            logger.info("Administrator %s logged in on device %s", admin_name, device_id)
            return user

        stored = self._users.get()
        if not stored:
            self._reject(username, "User not found. Please register first.", AuthErrorCode.NOT_REGISTERED)
        if stored.username != username:
            self._reject(
                username,
                "Username does not match the registered user on this device.",
                AuthErrorCode.USERNAME_MISMATCH,
            )
        if stored.device_id != device_id:
            self._reject(username, "Device mismatch. You must use the registered device.", AuthErrorCode.DEVICE_MISMATCH)

        logger.info("User %s logged in", stored.username)
        return stored

    @staticmethod
    def _reject(username: str, message: str, code: AuthErrorCode) -> NoReturn:
        logger.warning("Login refused for %s: %s", username, code.value)
        raise AuthenticationError(message, code)
