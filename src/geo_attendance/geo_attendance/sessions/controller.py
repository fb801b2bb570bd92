from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_datetime
from ..common.http import error_response, identity_required
from ..common.logging import get_logger
from ..core.exceptions import DomainError, ValidationError
from ..geometry.model import Coordinate
from ..container import Container
from .countdown import countdown

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.session_service

    @app.route("/api/sessions", methods=["POST"], endpoint="sessions_create")
    @identity_required
    def sessions_create(operator_id: str):
        data = request.get_json(silent=True)
        try:
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ValidationError("Request body must be a JSON object")
            anchor_raw = data.get("anchor") or data.get("location")
            if not isinstance(anchor_raw, dict):
                raise ValidationError("Anchor location is required")
            start_raw = data.get("start_time")
            if not start_raw:
                raise ValidationError("Start time is required")

            end_raw = data.get("end_time")
            time_limit = data.get("time_limit_minutes")
            if end_raw is None and time_limit is None:
                time_limit = app.config["DEFAULT_TIME_LIMIT_MINUTES"]

            session = service.create_session(
                operator_id=operator_id,
                anchor=Coordinate.from_dict(anchor_raw),
                radius_meters=data.get("radius_meters", app.config["DEFAULT_RADIUS_METERS"]),
                start_time=parse_iso_datetime(start_raw),
                end_time=parse_iso_datetime(end_raw) if end_raw else None,
                time_limit_minutes=time_limit,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "session": session.to_dict()}), 201

    @app.route("/api/sessions", methods=["GET"], endpoint="sessions_list")
    @identity_required
    def sessions_list(_identity: str):
        return jsonify({"success": True, "sessions": [s.to_dict() for s in service.list_sessions()]})

    @app.route("/api/sessions/current", methods=["GET"], endpoint="sessions_current")
    @identity_required
    def sessions_current(_identity: str):
        session = service.get_current_session(now=now_local())
        return jsonify({"success": True, "session": session.to_dict() if session else None})

    @app.route("/api/sessions/<session_id>", methods=["GET"], endpoint="sessions_get")
    @identity_required
    def sessions_get(_identity: str, session_id: str):
        try:
            session = service.get_session(session_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "session": session.to_dict()})

    @app.route("/api/sessions/<session_id>/countdown", methods=["GET"], endpoint="sessions_countdown")
    @identity_required
    def sessions_countdown(_identity: str, session_id: str):
        try:
            session = service.get_session(session_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "countdown": countdown(now_local(), session.start_time, session.end_time).to_dict()})

    @app.route("/api/sessions/<session_id>/start", methods=["POST"], endpoint="sessions_start")
    @identity_required
    def sessions_start(operator_id: str, session_id: str):
        try:
            session = service.start(session_id)
        except DomainError as e:
            return error_response(e)
        logger.info("operator %s started session %s", operator_id, session_id)
        return jsonify({"success": True, "session": session.to_dict()})

    @app.route("/api/sessions/<session_id>/end", methods=["POST"], endpoint="sessions_end")
    @identity_required
    def sessions_end(operator_id: str, session_id: str):
        try:
            result = service.end(session_id, now=now_local())
        except DomainError as e:
            return error_response(e)
        logger.info("operator %s ended session %s", operator_id, session_id)
        return jsonify({"success": True, "marked_absent": result.count})

    @app.route("/api/sessions/<session_id>", methods=["DELETE"], endpoint="sessions_delete")
    @identity_required
    def sessions_delete(operator_id: str, session_id: str):
        try:
            service.delete(session_id)
        except DomainError as e:
            return error_response(e)
        logger.info("operator %s deleted session %s", operator_id, session_id)
        return jsonify({"success": True})
