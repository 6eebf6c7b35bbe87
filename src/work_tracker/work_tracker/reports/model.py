from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from ..worklogs.model import WorkLog


@dataclass(frozen=True)
class JobTotal:
    count: int = 0
    total_duration: timedelta = timedelta(0)


@dataclass(frozen=True)
class MonthlyReport:
    """Read-model for the month view and CSV export."""

    year: int
    month: int
    total_duration: timedelta
    per_job: dict[str, JobTotal] = field(default_factory=dict)
    entries: tuple[WorkLog, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries
