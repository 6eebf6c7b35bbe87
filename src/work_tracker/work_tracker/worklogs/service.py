from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_coordinates, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import SessionErrorCode, ValidationErrorCode
from ..core.exceptions import SessionError
from .model import GeoPoint, WorkLog
from .proximity import ProximityGate
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)


class WorkSessionService:
    """Use case: open and close jobs, one active job per user.

    With a ``proximity_gate`` the check-out location must be within the gate's
    radius of the check-in location. Without one, the distance check is left to
    the caller (``is_checkout_allowed``).
    """

    def __init__(
        self,
        logs: WorkLogRepository,
        *,
        proximity_gate: Optional[ProximityGate] = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._logs = logs
        self._gate = proximity_gate
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def get_logs(self) -> tuple[WorkLog, ...]:
        return tuple(self._logs.list_all())

    def active_job(self, username: str) -> Optional[WorkLog]:
        matches = [log for log in self._logs.list_all() if log.username == username and log.is_active]
        if len(matches) > 1:
            logger.warning(
                "Data integrity: %d active logs for %s (%s); using the first",
                len(matches),
                username,
                ", ".join(log.id for log in matches),
            )
        return matches[0] if matches else None

    def recent_logs(self, username: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[WorkLog]:
        own = [log for log in self._logs.list_all() if log.username == username]
        own.sort(key=lambda log: log.check_in_time, reverse=True)
        return own[: max(int(limit), 0)]

    def check_in(
        self,
        username: str,
        job_name: str,
        lat: Optional[float],
        lng: Optional[float],
        *,
        now: datetime | None = None,
    ) -> WorkLog:
        if self.active_job(username):
            raise SessionError("You already have an active job. Please check out first.", SessionErrorCode.ALREADY_ACTIVE)

        job_name = require_non_empty(job_name, "Job name", ValidationErrorCode.MISSING_JOB_NAME)
        lat, lng = require_coordinates(lat, lng)

        log = WorkLog(
            id=self._id_factory(),
            username=username,
            job_name=job_name,
            check_in_time=now or now_utc(),
            check_in_location=GeoPoint(lat, lng),
        )
        self._logs.append(log)
        logger.info("%s checked in to %r (log %s)", username, job_name, log.id)
        return log

    def check_out(
        self,
        log_id: str,
        lat: Optional[float],
        lng: Optional[float],
        ai_summary: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> WorkLog:
        log = next((item for item in self._logs.list_all() if item.id == log_id), None)
        if not log:
            raise SessionError("Work log not found", SessionErrorCode.NOT_FOUND)
        if not log.is_active:
            raise SessionError("This job is already checked out", SessionErrorCode.INVALID_STATE)

        lat, lng = require_coordinates(lat, lng)
        point = GeoPoint(lat, lng)

        if self._gate is not None:
            self._gate.require_within(log.check_in_location, point)

        now = now or now_utc()
        if now < log.check_in_time:
            raise SessionError("Check-out time is before check-in time", SessionErrorCode.INVALID_STATE)

        updated = log.checked_out(at=now, location=point, ai_summary=ai_summary)
        if not self._logs.replace(updated):
            raise SessionError("Work log not found", SessionErrorCode.NOT_FOUND)
        logger.info("%s checked out of %r (log %s)", updated.username, updated.job_name, updated.id)
        return updated
