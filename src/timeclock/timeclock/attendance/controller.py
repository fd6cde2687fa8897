from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.exceptions import DomainError
from .query import build_filter

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"message": "Authentication required"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _punch(action, failure_message: str):
        try:
            view = action(int(session["user_id"]))
        except DomainError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception(failure_message)
            return jsonify({"message": failure_message}), 500
        return jsonify(view.to_dict()), 200

    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    @login_required
    def punch_in():
        return _punch(container.attendance_service.punch_in, "Failed to punch in")

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    @login_required
    def punch_out():
        return _punch(container.attendance_service.punch_out, "Failed to punch out")

    @app.route("/api/attendance/list", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        try:
            flt = build_filter(request.args)
            views = container.query_service.list_records(
                flt,
                page=request.args.get("page"),
                limit=request.args.get("limit"),
            )
        except DomainError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load attendance")
            return jsonify({"message": "Failed to load attendance"}), 500
        return jsonify({"data": [v.to_dict() for v in views]}), 200

    @app.route("/api/attendance/analytics", methods=["GET"], endpoint="attendance_analytics")
    @login_required
    def attendance_analytics():
        try:
            data = container.query_service.analytics()
        except Exception:
            logger.exception("Failed to load analytics")
            return jsonify({"message": "Failed to load analytics"}), 500
        return jsonify(data.to_dict()), 200
