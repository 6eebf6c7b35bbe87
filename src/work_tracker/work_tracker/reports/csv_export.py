from __future__ import annotations

import csv
import io
from datetime import tzinfo
from typing import Optional

from ..core.enums import ValidationErrorCode
from ..core.exceptions import ValidationError
from .model import MonthlyReport

CSV_HEADERS = ["Username", "Job Name", "Date", "Check In", "Check Out", "Duration (Min)", "AI Summary"]


def report_filename(report: MonthlyReport) -> str:
    return f"work_report_{report.year}_{report.month}.csv"


def render_monthly_csv(report: MonthlyReport, *, tz: Optional[tzinfo] = None) -> bytes:
    """Monthly report as CSV bytes.

    Encoded as UTF-8 with BOM so spreadsheet apps keep non-Latin job names.
    """
    if report.is_empty:
        raise ValidationError("No data to export for this month.", ValidationErrorCode.EMPTY_REPORT)

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for log in report.entries:
        check_in = log.check_in_time.astimezone(tz)
        check_out = log.check_out_time.astimezone(tz) if log.check_out_time else None
        duration_min = int(log.duration.total_seconds() // 60) if log.duration is not None else 0
        writer.writerow(
            [
                log.username,
                log.job_name,
                check_in.strftime("%d/%m/%Y"),
                check_in.strftime("%H:%M:%S"),
                check_out.strftime("%H:%M:%S") if check_out else "",
                duration_min,
                log.ai_summary or "",
            ]
        )

    return out.getvalue().encode("utf-8-sig")
