from __future__ import annotations

from datetime import timedelta, tzinfo
from typing import Iterable, Optional

from ..common.validators import require_month
from ..core.enums import WorkLogStatus
from ..users.model import User
from ..worklogs.model import WorkLog
from .model import JobTotal, MonthlyReport


class MonthlyReportService:
    """Completed jobs of one calendar month, scoped by role.

    Month boundaries follow local wall-clock time in ``tz`` (system zone when None).
    """

    def __init__(self, *, tz: Optional[tzinfo] = None):
        self._tz = tz

    def visible_logs(self, user: User, all_logs: Iterable[WorkLog]) -> list[WorkLog]:
        if user.is_admin:
            return list(all_logs)
        return [log for log in all_logs if log.username == user.username]

    def monthly_report(self, user: User, all_logs: Iterable[WorkLog], year: int, month: int) -> MonthlyReport:
        year, month = require_month(year, month)

        entries = []
        for log in self.visible_logs(user, all_logs):
            if log.status != WorkLogStatus.CHECKED_OUT or log.check_out_time is None:
                continue
            local = log.check_in_time.astimezone(self._tz)
            if local.year == year and local.month == month:
                entries.append(log)
        entries.sort(key=lambda log: log.check_in_time, reverse=True)

        total = timedelta(0)
        per_job: dict[str, JobTotal] = {}
        for log in entries:
            duration = log.check_out_time - log.check_in_time
            total += duration
            bucket = per_job.get(log.job_name, JobTotal())
            per_job[log.job_name] = JobTotal(
                count=bucket.count + 1,
                total_duration=bucket.total_duration + duration,
            )

        return MonthlyReport(
            year=year,
            month=month,
            total_duration=total,
            per_job=per_job,
            entries=tuple(entries),
        )
