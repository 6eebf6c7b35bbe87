from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import from_iso, to_iso
from ..core.enums import WorkLogStatus


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict) -> "GeoPoint":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True)
class WorkLog:
    """Domain entity: one job from check-in to check-out.

    Created CHECKED_IN; moves to CHECKED_OUT exactly once, keeping its id.
    """

    id: str
    username: str
    job_name: str
    check_in_time: datetime
    check_in_location: GeoPoint
    status: WorkLogStatus = WorkLogStatus.CHECKED_IN
    check_out_time: Optional[datetime] = None
    check_out_location: Optional[GeoPoint] = None
    ai_summary: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == WorkLogStatus.CHECKED_IN

    @property
    def duration(self) -> Optional[timedelta]:
        if self.check_out_time is None:
            return None
        return self.check_out_time - self.check_in_time

    def checked_out(
        self,
        *,
        at: datetime,
        location: GeoPoint,
        ai_summary: Optional[str] = None,
    ) -> "WorkLog":
        return replace(
            self,
            status=WorkLogStatus.CHECKED_OUT,
            check_out_time=at,
            check_out_location=location,
            ai_summary=ai_summary,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "username": self.username,
            "jobName": self.job_name,
            "checkInTime": to_iso(self.check_in_time),
            "checkInLocation": self.check_in_location.to_dict(),
            "status": self.status.value,
        }
        if self.check_out_time is not None:
            data["checkOutTime"] = to_iso(self.check_out_time)
        if self.check_out_location is not None:
            data["checkOutLocation"] = self.check_out_location.to_dict()
        if self.ai_summary is not None:
            data["aiSummary"] = self.ai_summary
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WorkLog":
        """Build from the persisted camelCase form; raises KeyError/ValueError/TypeError on bad input."""
        check_out_time = data.get("checkOutTime")
        check_out_location = data.get("checkOutLocation")
        status = WorkLogStatus(data["status"])
        closed = status is WorkLogStatus.CHECKED_OUT
        if closed != bool(check_out_time) or closed != bool(check_out_location):
            raise ValueError(f"log {data.get('id')!r}: check-out fields do not match status {status.value}")
        return cls(
            id=str(data["id"]),
            username=str(data["username"]),
            job_name=str(data["jobName"]),
            check_in_time=from_iso(data["checkInTime"]),
            check_in_location=GeoPoint.from_dict(data["checkInLocation"]),
            status=status,
            check_out_time=from_iso(check_out_time) if check_out_time else None,
            check_out_location=GeoPoint.from_dict(check_out_location) if check_out_location else None,
            ai_summary=data.get("aiSummary"),
        )
