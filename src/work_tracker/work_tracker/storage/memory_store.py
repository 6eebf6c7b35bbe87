from __future__ import annotations

from typing import Optional

from .kv import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used by tests and the ``memory`` backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
