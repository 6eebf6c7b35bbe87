"""Backup the key-value store of the configured backend.

Writes every fixed key (current user, device fingerprint, work logs) to a
timestamped JSON file under ``backups/``. Values are copied as stored, so a
corrupted record is preserved for manual recovery instead of being rejected.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.work_tracker.work_tracker.container import build_store
from src.work_tracker.work_tracker.core.constants import DEVICE_ID_KEY, LOGS_KEY, USER_KEY


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(settings)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"work_tracker_{ts}.json"

    data = {key: store.get(key) for key in (USER_KEY, DEVICE_ID_KEY, LOGS_KEY)}
    out_file.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
