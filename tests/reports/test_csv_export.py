from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta, timezone

import pytest

from src.work_tracker.work_tracker.core.enums import Role, ValidationErrorCode
from src.work_tracker.work_tracker.core.exceptions import ValidationError
from src.work_tracker.work_tracker.reports.csv_export import CSV_HEADERS, render_monthly_csv, report_filename
from src.work_tracker.work_tracker.reports.service import MonthlyReportService
from src.work_tracker.work_tracker.users.model import User
from src.work_tracker.work_tracker.worklogs.model import GeoPoint, WorkLog

BKK = timezone(timedelta(hours=7))
ADMIN = User(username="bamboo", device_id="d", role=Role.ADMIN)


def test_csv_rows_and_encoding():
    start = datetime(2025, 3, 3, 9, 0, tzinfo=BKK)
    item = WorkLog(
        id="1",
        username="alice",
        job_name='Fix "main" pump, level 2',
        check_in_time=start,
        check_in_location=GeoPoint(1, 2),
    ).checked_out(at=start + timedelta(minutes=95, seconds=30), location=GeoPoint(1, 2), ai_summary="Completed.")
    report = MonthlyReportService(tz=BKK).monthly_report(ADMIN, [item], 2025, 3)

    data = render_monthly_csv(report, tz=BKK)

    assert data.startswith(b"\xef\xbb\xbf")
    rows = list(csv.reader(io.StringIO(data.decode("utf-8-sig"))))
    assert rows[0] == CSV_HEADERS
    assert rows[1] == ["alice", 'Fix "main" pump, level 2', "03/03/2025", "09:00:00", "10:35:30", "95", "Completed."]
    assert report_filename(report) == "work_report_2025_3.csv"


def test_empty_report_cannot_be_exported():
    report = MonthlyReportService(tz=BKK).monthly_report(ADMIN, [], 2025, 3)

    with pytest.raises(ValidationError) as exc:
        render_monthly_csv(report)
    assert exc.value.code == ValidationErrorCode.EMPTY_REPORT
