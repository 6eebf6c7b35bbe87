from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any, Optional

from .common.datetime_utils import resolve_timezone
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .enrichment.gemini_service import GeminiEnrichmentService
from .reports.service import MonthlyReportService
from .storage.json_file_store import JsonFileKeyValueStore
from .storage.kv import KeyValueStore
from .storage.memory_store import InMemoryKeyValueStore
from .storage.mysql_kv_store import MySQLKeyValueStore
from .users.device import DeviceFingerprint
from .users.kv_user_repository import KeyValueCurrentUserRepository, KeyValueDeviceRepository
from .users.policy import AdminPolicy
from .users.service import IdentityService
from .worklogs.kv_worklog_repository import KeyValueWorkLogRepository
from .worklogs.proximity import ProximityGate
from .worklogs.service import WorkSessionService

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    timezone: Optional[tzinfo]

    users_repo: KeyValueCurrentUserRepository
    worklogs_repo: KeyValueWorkLogRepository

    proximity_gate: ProximityGate
    identity_service: IdentityService
    work_session_service: WorkSessionService
    report_service: MonthlyReportService
    enrichment_service: GeminiEnrichmentService


def build_store(settings: Any) -> KeyValueStore:
    backend = str(getattr(settings, "STORAGE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "json":
        return JsonFileKeyValueStore(getattr(settings, "STORAGE_PATH"))
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn, schema_path=SCHEMA_PATH)
        return MySQLKeyValueStore(conn)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_container(
    settings: Any,
    *,
    store: Optional[KeyValueStore] = None,
    enrichment: Optional[GeminiEnrichmentService] = None,
) -> Container:
    store = store if store is not None else build_store(settings)
    tz = resolve_timezone(getattr(settings, "TIMEZONE", None))

    users_repo = KeyValueCurrentUserRepository(store)
    devices_repo = KeyValueDeviceRepository(store)
    worklogs_repo = KeyValueWorkLogRepository(store)

    gate = ProximityGate(max_meters=float(getattr(settings, "MAX_CHECKOUT_DISTANCE_METERS", 100)))
    enforce = bool(getattr(settings, "ENFORCE_CHECKOUT_PROXIMITY", True))

    identity_service = IdentityService(
        users_repo,
        DeviceFingerprint(devices_repo),
        policy=AdminPolicy.from_names(getattr(settings, "ADMIN_USERNAMES", ("bamboo",))),
    )
    work_session_service = WorkSessionService(worklogs_repo, proximity_gate=gate if enforce else None)
    report_service = MonthlyReportService(tz=tz)
    enrichment_service = enrichment or GeminiEnrichmentService(
        api_key=getattr(settings, "GEMINI_API_KEY", None),
        model=getattr(settings, "GEMINI_MODEL", "gemini-2.5-flash"),
    )

    return Container(
        store=store,
        timezone=tz,
        users_repo=users_repo,
        worklogs_repo=worklogs_repo,
        proximity_gate=gate,
        identity_service=identity_service,
        work_session_service=work_session_service,
        report_service=report_service,
        enrichment_service=enrichment_service,
    )
