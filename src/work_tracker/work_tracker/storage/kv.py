from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Persistence substrate: string values under string keys.

    Note (DIP): repositories depend on this interface, not on a concrete backend.
    Each ``set`` replaces the whole value at once.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError
