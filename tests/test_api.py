from __future__ import annotations

import importlib
from datetime import datetime
from types import SimpleNamespace

import pytest

from src.work_tracker.work_tracker.container import build_container
from src.work_tracker.work_tracker.enrichment.gemini_service import MISSING_KEY_SUMMARY, GeminiEnrichmentService
from src.work_tracker.work_tracker.main import create_app
from src.work_tracker.work_tracker.storage.memory_store import InMemoryKeyValueStore

CHECK_IN = {"lat": 13.7563, "lng": 100.5018}
NEAR = {"lat": 13.7570, "lng": 100.5018}
FAR = {"lat": 13.7650, "lng": 100.5018}


@pytest.fixture
def container():
    settings = importlib.import_module("config.testing")
    return build_container(settings, store=InMemoryKeyValueStore(), enrichment=GeminiEnrichmentService(api_key=None))


@pytest.fixture
def client(container):
    settings = importlib.import_module("config.testing")
    app = create_app(settings, container=container)
    return app.test_client()


def test_routes_require_login(client):
    resp = client.get("/api/dashboard")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_login_unregistered_user(client):
    resp = client.post("/api/login", json={"username": "alice"})

    assert resp.status_code == 401
    assert resp.get_json()["code"] == "NOT_REGISTERED"


def test_register_then_login(client):
    assert client.post("/api/register", json={"username": "alice"}).status_code == 201
    client.post("/api/logout")

    resp = client.post("/api/login", json={"username": "alice"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "USER"
    assert client.get("/api/me").get_json()["user"]["username"] == "alice"


def test_admin_login_without_registration(client):
    resp = client.post("/api/login", json={"username": "Bamboo"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "ADMIN"
    assert resp.get_json()["message"] == "Welcome Administrator"


def test_non_string_fields_are_bad_requests(client):
    resp = client.post("/api/login", json={"username": 123})

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "MISSING_USERNAME"

    client.post("/api/register", json={"username": "alice"})
    resp = client.post("/api/checkin", json={"jobName": 5, **CHECK_IN})

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "MISSING_JOB_NAME"


def test_non_finite_coordinates_are_rejected(client):
    client.post("/api/register", json={"username": "alice"})

    bad_check_in = client.post("/api/checkin", json={"jobName": "Install", "lat": "nan", "lng": "inf"})
    assert bad_check_in.status_code == 400
    assert bad_check_in.get_json()["code"] == "MISSING_LOCATION"

    client.post("/api/checkin", json={"jobName": "Install", **CHECK_IN})
    bad_check_out = client.post("/api/checkout", json={"lat": "nan", "lng": CHECK_IN["lng"]})
    assert bad_check_out.status_code == 400
    assert client.get("/api/dashboard").get_json()["activeJob"] is not None

def test_full_check_in_check_out_flow(client):
    client.post("/api/register", json={"username": "alice"})

    missing = client.post("/api/checkin", json={"jobName": "Install"})
    assert missing.status_code == 400
    assert missing.get_json()["code"] == "MISSING_LOCATION"

    created = client.post("/api/checkin", json={"jobName": "Install", **CHECK_IN})
    assert created.status_code == 201
    assert created.get_json()["log"]["status"] == "CHECKED_IN"
    assert created.get_json()["locationName"] is None

    again = client.post("/api/checkin", json={"jobName": "Other", **CHECK_IN})
    assert again.status_code == 409
    assert again.get_json()["code"] == "ALREADY_ACTIVE"

    preview = client.get("/api/checkout/preview", query_string=FAR).get_json()
    assert preview["allowed"] is False
    assert preview["distanceMeters"] == pytest.approx(967, abs=1)

    refused = client.post("/api/checkout", json=FAR)
    assert refused.status_code == 409
    assert refused.get_json()["code"] == "OUT_OF_RANGE"

    assert client.get("/api/checkout/preview", query_string=NEAR).get_json()["allowed"] is True
    done = client.post("/api/checkout", json=NEAR)
    assert done.status_code == 200
    assert done.get_json()["log"]["status"] == "CHECKED_OUT"
    assert done.get_json()["log"]["aiSummary"] == MISSING_KEY_SUMMARY

    dashboard = client.get("/api/dashboard").get_json()
    assert dashboard["activeJob"] is None
    assert len(dashboard["recentLogs"]) == 1

    nothing_active = client.post("/api/checkout", json=NEAR)
    assert nothing_active.status_code == 404


def test_report_and_csv_export(client, container):
    client.post("/api/register", json={"username": "alice"})
    client.post("/api/checkin", json={"jobName": "Install", **CHECK_IN})
    client.post("/api/checkout", json=NEAR)

    today = datetime.now(container.timezone)
    query = {"year": today.year, "month": today.month}
    report = client.get("/api/report", query_string=query).get_json()["report"]

    assert report["count"] == 1
    assert report["perJob"]["Install"]["count"] == 1
    assert report["entries"][0]["username"] == "alice"

    resp = client.get("/api/report.csv", query_string=query)
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert f"work_report_{today.year}_{today.month}.csv" in resp.headers["Content-Disposition"]
    assert resp.data.decode("utf-8-sig").splitlines()[1].startswith("alice,Install,")

    empty = client.get("/api/report.csv", query_string={"year": 2000, "month": 1})
    assert empty.status_code == 400
    assert empty.get_json()["code"] == "EMPTY_REPORT"

    bad = client.get("/api/report", query_string={"year": 2025, "month": 13})
    assert bad.status_code == 400


def test_admin_sees_all_logs(client):
    client.post("/api/register", json={"username": "alice"})
    client.post("/api/checkin", json={"jobName": "Install", **CHECK_IN})
    client.post("/api/logout")

    client.post("/api/login", json={"username": "bamboo"})
    client.post("/api/checkin", json={"jobName": "Inspect", **CHECK_IN})

    logs = client.get("/api/logs").get_json()["logs"]
    assert {log["username"] for log in logs} == {"alice", "bamboo"}


def test_storage_corruption_is_a_server_error(container, client):
    client.post("/api/register", json={"username": "alice"})
    container.store.set("wt_logs", "{oops")

    resp = client.get("/api/dashboard")

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_create_app_reads_settings_object():
    settings = SimpleNamespace(
        SECRET_KEY="x",
        DEBUG=False,
        LOG_LEVEL="WARNING",
        STORAGE_BACKEND="memory",
        ADMIN_USERNAMES=("boss",),
        MAX_CHECKOUT_DISTANCE_METERS=50,
        ENFORCE_CHECKOUT_PROXIMITY=True,
        TIMEZONE="",
        GEMINI_API_KEY=None,
    )
    client = create_app(settings).test_client()

    assert client.post("/api/login", json={"username": "BOSS"}).get_json()["user"]["role"] == "ADMIN"
