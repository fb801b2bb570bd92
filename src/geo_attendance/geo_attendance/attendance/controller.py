from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import error_response, identity_required
from ..core.exceptions import DomainError, ValidationError
from ..geometry.model import Coordinate
from ..container import Container


def _location_from_request() -> Coordinate:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Location is required")
    raw = data.get("location")
    if not isinstance(raw, dict):
        raise ValidationError("Location is required")
    return Coordinate.from_dict(raw)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/sessions/<session_id>/attendance", methods=["POST"], endpoint="attendance_submit")
    @identity_required
    def attendance_submit(claimant_id: str, session_id: str):
        try:
            record = service.submit(session_id, claimant_id, _location_from_request(), now_local())
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "record": record.to_dict()}), 201

    @app.route("/api/sessions/<session_id>/attendance/me", methods=["GET"], endpoint="attendance_me")
    @identity_required
    def attendance_me(claimant_id: str, session_id: str):
        return jsonify({"success": True, "submitted": service.has_submitted(session_id, claimant_id)})

    @app.route("/api/sessions/<session_id>/attendance/preview", methods=["POST"], endpoint="attendance_preview")
    @identity_required
    def attendance_preview(_identity: str, session_id: str):
        try:
            check = service.preview(session_id, _location_from_request())
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "check": check.to_dict()})

    @app.route("/api/sessions/<session_id>/attendance", methods=["GET"], endpoint="attendance_list")
    @identity_required
    def attendance_list(_identity: str, session_id: str):
        try:
            rows = service.get_history_ui(session_id, search=request.args.get("q"))
            summary = service.summarize(session_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "records": rows, "summary": summary.to_dict()})
