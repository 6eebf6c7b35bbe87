from __future__ import annotations

import pytest

from src.work_tracker.work_tracker.core.exceptions import StorageCorruptionError
from src.work_tracker.work_tracker.storage.json_file_store import JsonFileKeyValueStore


def test_missing_file_reads_as_empty(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "nested" / "kv.json")

    assert store.get("wt_user") is None


def test_values_survive_a_new_instance(tmp_path):
    path = tmp_path / "nested" / "kv.json"
    JsonFileKeyValueStore(path).set("wt_device_id", "abc")
    JsonFileKeyValueStore(path).set("wt_logs", "[]")

    store = JsonFileKeyValueStore(path)

    assert store.get("wt_device_id") == "abc"
    assert store.get("wt_logs") == "[]"
    assert [p.name for p in path.parent.iterdir()] == ["kv.json"]


def test_corrupted_file_raises(tmp_path):
    path = tmp_path / "kv.json"
    path.write_text("not json", encoding="utf-8")

    with pytest.raises(StorageCorruptionError):
        JsonFileKeyValueStore(path).get("wt_user")
