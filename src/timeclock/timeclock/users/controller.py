from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(
                str(payload.get("email", "")),
                str(payload.get("password", "")),
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"message": str(e)}), 401

        session.clear()
        session.permanent = True
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["is_admin"] = s_user.is_admin
        return jsonify(s_user.to_dict()), 200

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True}), 200

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    def me():
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        try:
            s_user = container.auth_service.session_user(int(session["user_id"]))
        except AuthenticationError as e:
            session.clear()
            return jsonify({"message": str(e)}), 401
        return jsonify(s_user.to_dict()), 200

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"ok": True}), 200
