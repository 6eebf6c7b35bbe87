from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import error_response, json_body, login_required, session_user
from ..container import Container
from ..core.exceptions import DomainError, StorageCorruptionError
from .model import User


def register(app: Flask, container: Container) -> None:
    def _start_session(user: User) -> None:
        session.clear()
        session["username"] = user.username
        session["role"] = user.role.value
        session["device_id"] = user.device_id

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_user():
        try:
            user = container.identity_service.register(json_body().get("username", ""))
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)
        _start_session(user)
        return jsonify({"success": True, "message": "Registration successful", "user": user.to_dict()}), 201

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        username = json_body().get("username", "")
        try:
            user = container.identity_service.login(username)
        except (DomainError, StorageCorruptionError) as e:
            return error_response(e)

        _start_session(user)
        message = "Welcome Administrator" if user.is_admin else "Login successful"
        return jsonify({"success": True, "message": message, "user": user.to_dict()})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "user": session_user().to_dict()})
