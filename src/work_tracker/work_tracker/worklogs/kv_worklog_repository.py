from __future__ import annotations

import json
import logging
from typing import Sequence

from ..core.constants import LOGS_KEY
from ..core.exceptions import StorageCorruptionError
from ..storage.kv import KeyValueStore
from .model import WorkLog
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)


def dump_logs(logs: Sequence[WorkLog]) -> str:
    return json.dumps([log.to_dict() for log in logs], ensure_ascii=False)


def load_logs(raw: str, *, key: str = LOGS_KEY) -> list[WorkLog]:
    try:
        items = json.loads(raw)
        if not isinstance(items, list):
            raise TypeError("log collection is not a list")
        return [WorkLog.from_dict(item) for item in items]
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.error("Cannot decode work log collection", exc_info=True)
        raise StorageCorruptionError(key, str(e)) from e


class KeyValueWorkLogRepository(WorkLogRepository):
    """Whole-collection read-modify-write on a single key.

    Fine for one interactive user; concurrent writers would need per-log
    atomic updates instead.
    """

    def __init__(self, store: KeyValueStore, *, key: str = LOGS_KEY):
        self._store = store
        self._key = key

    def list_all(self) -> list[WorkLog]:
        raw = self._store.get(self._key)
        if not raw:
            return []
        return load_logs(raw, key=self._key)

    def _write(self, logs: Sequence[WorkLog]) -> None:
        self._store.set(self._key, dump_logs(logs))

    def append(self, log: WorkLog) -> None:
        logs = self.list_all()
        logs.append(log)
        self._write(logs)

    def replace(self, log: WorkLog) -> bool:
        logs = self.list_all()
        for index, existing in enumerate(logs):
            if existing.id == log.id:
                logs[index] = log
                self._write(logs)
                return True
        return False
