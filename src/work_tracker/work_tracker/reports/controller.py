from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_duration, shift_month
from ..common.http import error_response, login_required, session_user
from ..container import Container
from ..core.exceptions import DomainError, StorageCorruptionError
from .csv_export import render_monthly_csv, report_filename
from .model import MonthlyReport


def register(app: Flask, container: Container) -> None:
    def _selected_month() -> tuple[int, int]:
        today = datetime.now(container.timezone)
        return (
            request.args.get("year", today.year),
            request.args.get("month", today.month),
        )

    def _build() -> MonthlyReport:
        year, month = _selected_month()
        return container.report_service.monthly_report(
            session_user(),
            container.work_session_service.get_logs(),
            year,
            month,
        )

    def _to_json(report: MonthlyReport) -> dict:
        prev_year, prev_month = shift_month(report.year, report.month, -1)
        next_year, next_month = shift_month(report.year, report.month, 1)
        return {
            "year": report.year,
            "month": report.month,
            "previous": {"year": prev_year, "month": prev_month},
            "next": {"year": next_year, "month": next_month},
            "count": len(report.entries),
            "totalMinutes": int(report.total_duration.total_seconds() // 60),
            "total": format_duration(report.total_duration),
            "perJob": {
                name: {
                    "count": bucket.count,
                    "totalMinutes": int(bucket.total_duration.total_seconds() // 60),
                    "total": format_duration(bucket.total_duration),
                }
                for name, bucket in report.per_job.items()
            },
            "entries": [log.to_dict() for log in report.entries],
        }

    @app.route("/api/report", endpoint="report")
    @login_required
    def report():
        try:
            data = _build()
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)
        return jsonify({"success": True, "report": _to_json(data)})

    @app.route("/api/report.csv", endpoint="report_csv")
    @login_required
    def report_csv():
        try:
            data = _build()
            csv_bytes = render_monthly_csv(data, tz=container.timezone)
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)

        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={report_filename(data)}"},
        )
