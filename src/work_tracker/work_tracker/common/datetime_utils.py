from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def now_utc() -> datetime:
    """Current time, timezone-aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat()


def from_iso(value: str) -> datetime:
    # Browsers write a trailing 'Z'; fromisoformat only accepts it from 3.11 on.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Return a zone for ``name``; None means the system local zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move a (year, month) pair by ``offset`` months."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def format_duration(value: timedelta) -> str:
    total_minutes = int(value.total_seconds() // 60)
    return f"{total_minutes // 60}h {total_minutes % 60}m"
