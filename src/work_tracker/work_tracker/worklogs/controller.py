from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..common.http import error_response, json_body, login_required, optional_float, session_user
from ..common.validators import require_coordinates
from ..container import Container
from ..core.enums import SessionErrorCode
from ..core.exceptions import DomainError, SessionError, StorageCorruptionError
from ..enrichment.gemini_service import format_hours
from .model import GeoPoint


def register(app: Flask, container: Container) -> None:
    sessions = container.work_session_service
    gate = container.proximity_gate

    def _active_or_fail(username: str):
        job = sessions.active_job(username)
        if not job:
            raise SessionError("No active job found", SessionErrorCode.NOT_FOUND)
        return job

    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        user = session_user()
        try:
            active = sessions.active_job(user.username)
            recent = sessions.recent_logs(user.username)
        except StorageCorruptionError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "user": user.to_dict(),
                "activeJob": active.to_dict() if active else None,
                "recentLogs": [log.to_dict() for log in recent],
            }
        )

    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        user = session_user()
        data = json_body()
        lat, lng = optional_float(data.get("lat")), optional_float(data.get("lng"))
        try:
            log = sessions.check_in(user.username, data.get("jobName", ""), lat, lng)
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)

        location_name = container.enrichment_service.get_location_name(log.check_in_location.lat, log.check_in_location.lng)
        return jsonify({"success": True, "message": "Checked in", "log": log.to_dict(), "locationName": location_name}), 201

    @app.route("/api/checkout/preview", endpoint="checkout_preview")
    @login_required
    def checkout_preview():
        """Distance from the active job's check-in point, before committing."""
        user = session_user()
        try:
            job = _active_or_fail(user.username)
            lat, lng = require_coordinates(optional_float(request.args.get("lat")), optional_float(request.args.get("lng")))
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)

        point = GeoPoint(lat, lng)
        return jsonify(
            {
                "success": True,
                "activeJob": job.to_dict(),
                "distanceMeters": round(gate.distance(job.check_in_location, point), 1),
                "maxMeters": gate.max_meters,
                "allowed": gate.allows(job.check_in_location, point),
            }
        )

    @app.route("/api/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        user = session_user()
        data = json_body()
        try:
            job = _active_or_fail(user.username)
            lat, lng = require_coordinates(optional_float(data.get("lat")), optional_float(data.get("lng")))
            point = GeoPoint(lat, lng)
            gate.require_within(job.check_in_location, point)

            hours = format_hours((now_utc() - job.check_in_time).total_seconds())
            summary = container.enrichment_service.generate_work_summary(job.job_name, hours)
            log = sessions.check_out(job.id, lat, lng, summary)
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)

        return jsonify({"success": True, "message": "Checked out", "log": log.to_dict()})

    @app.route("/api/logs", endpoint="logs")
    @login_required
    def logs():
        user = session_user()
        try:
            visible = container.report_service.visible_logs(user, sessions.get_logs())
        except StorageCorruptionError as e:
            return error_response(e)
        visible.sort(key=lambda log: log.check_in_time, reverse=True)
        return jsonify({"success": True, "logs": [log.to_dict() for log in visible]})

    @app.route("/api/location-name", endpoint="location_name")
    @login_required
    def location_name():
        try:
            lat, lng = require_coordinates(optional_float(request.args.get("lat")), optional_float(request.args.get("lng")))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "name": container.enrichment_service.get_location_name(lat, lng)})
