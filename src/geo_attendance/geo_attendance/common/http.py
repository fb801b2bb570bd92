from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    DomainError,
    DuplicateSubmission,
    InvalidTransition,
    LocationUnavailable,
    SessionNotActive,
    SessionNotFound,
    SweepFailure,
    ValidationError,
)
from .logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (SessionNotFound, 404),
    (InvalidTransition, 409),
    (SessionNotActive, 409),
    (DuplicateSubmission, 409),
    (LocationUnavailable, 422),
    (SweepFailure, 503),
)


def error_response(e: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            break
    else:
        status = 400
    return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status


def current_identity() -> str | None:
    """Opaque id of the signed-in user, put in the Flask session by the auth system."""
    user_id = session.get("user_id")
    return str(user_id) if user_id not in (None, "") else None


def identity_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        identity = current_identity()
        if identity is None:
            return jsonify({"success": False, "error": "Unauthorized", "message": "Please sign in first"}), 401
        return view(identity, *args, **kwargs)

    return wrapper
