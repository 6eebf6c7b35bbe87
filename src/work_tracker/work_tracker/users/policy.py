from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.constants import DEFAULT_ADMIN_USERNAMES
from ..core.enums import Role


def _normalize(username: str) -> str:
    return (username or "").strip().casefold()


@dataclass(frozen=True)
class AdminPolicy:
    """Which usernames are administrators.

    Administrators get role ADMIN on registration and may log in from any
    device without a prior registration.
    """

    admin_usernames: tuple[str, ...] = field(default=DEFAULT_ADMIN_USERNAMES)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "AdminPolicy":
        cleaned = tuple(n.strip() for n in names if n and n.strip())
        return cls(admin_usernames=cleaned)

    def canonical_name(self, username: str) -> Optional[str]:
        """Configured spelling of ``username`` if it is an admin, else None."""
        wanted = _normalize(username)
        for name in self.admin_usernames:
            if _normalize(name) == wanted:
                return name
        return None

    def is_admin(self, username: str) -> bool:
        return self.canonical_name(username) is not None

    def role_for(self, username: str) -> Role:
        return Role.ADMIN if self.is_admin(username) else Role.USER
