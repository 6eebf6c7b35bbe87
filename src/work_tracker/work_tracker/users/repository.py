from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class CurrentUserRepository(Protocol):
    """Single-slot store for the user bound to this device.

    Saving replaces the previous binding (last writer wins).
    """

    def get(self) -> Optional[User]:
        raise NotImplementedError

    def save(self, user: User) -> None:
        raise NotImplementedError


class DeviceRepository(Protocol):
    def get_device_id(self) -> Optional[str]:
        raise NotImplementedError

    def save_device_id(self, device_id: str) -> None:
        raise NotImplementedError
