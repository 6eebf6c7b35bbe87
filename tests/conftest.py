from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.work_tracker.work_tracker.storage.memory_store import InMemoryKeyValueStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 2, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
