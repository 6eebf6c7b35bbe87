from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..core.exceptions import StorageCorruptionError
from .kv import KeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    """Device-local store: one JSON object file holding every key.

    Writes go to a temp file in the same directory and are moved into place,
    so a reader sees either the old or the new file, never a partial one.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageCorruptionError(str(self._path), str(e)) from e
        if not isinstance(data, dict):
            raise StorageCorruptionError(str(self._path), "top-level value is not an object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".kv-", suffix=".json", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
