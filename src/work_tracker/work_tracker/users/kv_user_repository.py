from __future__ import annotations

import json
import logging
from typing import Optional

from ..core.constants import DEVICE_ID_KEY, USER_KEY
from ..core.enums import Role
from ..core.exceptions import StorageCorruptionError
from ..storage.kv import KeyValueStore
from .model import User
from .repository import CurrentUserRepository, DeviceRepository

logger = logging.getLogger(__name__)


class KeyValueCurrentUserRepository(CurrentUserRepository):
    def __init__(self, store: KeyValueStore, *, key: str = USER_KEY):
        self._store = store
        self._key = key

    def get(self) -> Optional[User]:
        raw = self._store.get(self._key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
            username = data["username"]
            device_id = data["deviceId"]
            role_s = data.get("role")
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Cannot decode current user record", exc_info=True)
            raise StorageCorruptionError(self._key, str(e)) from e

        try:
            role = Role(role_s) if role_s else Role.USER
        except ValueError as e:
            raise StorageCorruptionError(self._key, f"unknown role {role_s!r}") from e

        user = User(username=str(username), device_id=str(device_id), role=role)
        if not role_s:
            # Records written before roles existed: default to USER and store the fix.
            logger.info("Migrating user %s without role to %s", user.username, Role.USER.value)
            self.save(user)
        return user

    def save(self, user: User) -> None:
        self._store.set(self._key, json.dumps(user.to_dict(), ensure_ascii=False))


class KeyValueDeviceRepository(DeviceRepository):
    def __init__(self, store: KeyValueStore, *, key: str = DEVICE_ID_KEY):
        self._store = store
        self._key = key

    def get_device_id(self) -> Optional[str]:
        return self._store.get(self._key)

    def save_device_id(self, device_id: str) -> None:
        self._store.set(self._key, device_id)
