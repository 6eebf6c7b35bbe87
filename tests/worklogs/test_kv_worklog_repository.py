from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from src.work_tracker.work_tracker.core.constants import LOGS_KEY
from src.work_tracker.work_tracker.core.enums import WorkLogStatus
from src.work_tracker.work_tracker.core.exceptions import StorageCorruptionError
from src.work_tracker.work_tracker.storage.memory_store import InMemoryKeyValueStore
from src.work_tracker.work_tracker.worklogs.kv_worklog_repository import KeyValueWorkLogRepository
from src.work_tracker.work_tracker.worklogs.model import GeoPoint, WorkLog


def sample_logs(now: datetime) -> list[WorkLog]:
    open_log = WorkLog(
        id="1",
        username="alice",
        job_name="ติดตั้งระบบ",
        check_in_time=now,
        check_in_location=GeoPoint(13.7563, 100.5018),
    )
    closed = WorkLog(
        id="2",
        username="bob",
        job_name="Audit",
        check_in_time=now - timedelta(hours=3),
        check_in_location=GeoPoint(13.0, 100.0),
    ).checked_out(at=now - timedelta(hours=1), location=GeoPoint(13.0001, 100.0001), ai_summary="Completed Audit.")
    return [open_log, closed]


def test_collection_round_trips_field_for_field(store, fixed_now):
    repo = KeyValueWorkLogRepository(store)
    logs = sample_logs(fixed_now)
    for log in logs:
        repo.append(log)

    reread = KeyValueWorkLogRepository(InMemoryKeyValueStore({LOGS_KEY: store.get(LOGS_KEY)})).list_all()

    assert reread == logs


def test_persisted_form_uses_camel_case_and_omits_empty_fields(store, fixed_now):
    repo = KeyValueWorkLogRepository(store)
    for log in sample_logs(fixed_now):
        repo.append(log)

    open_raw, closed_raw = json.loads(store.get(LOGS_KEY))

    assert set(open_raw) == {"id", "username", "jobName", "checkInTime", "checkInLocation", "status"}
    assert open_raw["status"] == "CHECKED_IN"
    assert closed_raw["checkOutLocation"] == {"lat": 13.0001, "lng": 100.0001}
    assert closed_raw["aiSummary"] == "Completed Audit."


def test_reads_browser_style_utc_timestamps():
    raw = json.dumps(
        [
            {
                "id": "x",
                "username": "alice",
                "jobName": "Job",
                "checkInTime": "2025-01-15T02:00:00.000Z",
                "checkInLocation": {"lat": 1, "lng": 2},
                "status": "CHECKED_OUT",
                "checkOutTime": "2025-01-15T03:30:00.000Z",
                "checkOutLocation": {"lat": 1, "lng": 2},
            }
        ]
    )

    (log,) = KeyValueWorkLogRepository(InMemoryKeyValueStore({LOGS_KEY: raw})).list_all()

    assert log.check_in_time == datetime(2025, 1, 15, 2, 0, tzinfo=timezone.utc)
    assert log.duration == timedelta(minutes=90)
    assert log.status == WorkLogStatus.CHECKED_OUT


def test_replace_keeps_position(store, fixed_now):
    repo = KeyValueWorkLogRepository(store)
    logs = sample_logs(fixed_now)
    for log in logs:
        repo.append(log)

    closed = logs[0].checked_out(at=fixed_now + timedelta(hours=1), location=GeoPoint(13.7563, 100.5018))

    assert repo.replace(closed) is True
    assert [log.id for log in repo.list_all()] == ["1", "2"]
    assert repo.list_all()[0].status == WorkLogStatus.CHECKED_OUT


def test_replace_unknown_id_returns_false(store, fixed_now):
    repo = KeyValueWorkLogRepository(store)

    assert repo.replace(sample_logs(fixed_now)[0]) is False
    assert repo.list_all() == []


@pytest.mark.parametrize(
    "raw",
    [
        "{broken",
        json.dumps({"not": "a list"}),
        json.dumps([{"id": "1"}]),
        json.dumps([{"id": "1", "username": "a", "jobName": "j", "checkInTime": "x", "checkInLocation": {}, "status": "CHECKED_IN"}]),
        json.dumps([{"id": "1", "username": "a", "jobName": "j", "checkInTime": "2025-01-15T02:00:00Z", "checkInLocation": {"lat": 1, "lng": 2}, "status": "CHECKED_OUT"}]),
        json.dumps([{"id": "1", "username": "a", "jobName": "j", "checkInTime": "2025-01-15T02:00:00Z", "checkInLocation": {"lat": 1, "lng": 2}, "status": "CHECKED_IN", "checkOutTime": "2025-01-15T03:00:00Z", "checkOutLocation": {"lat": 1, "lng": 2}}]),
    ],
)
def test_malformed_collection_raises_storage_error(raw):
    repo = KeyValueWorkLogRepository(InMemoryKeyValueStore({LOGS_KEY: raw}))

    with pytest.raises(StorageCorruptionError):
        repo.list_all()
