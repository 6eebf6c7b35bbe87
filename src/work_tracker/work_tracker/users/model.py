from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: the user bound to this device.

    Plain data object (no storage access).
    """

    username: str
    device_id: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {"username": self.username, "deviceId": self.device_id, "role": self.role.value}
