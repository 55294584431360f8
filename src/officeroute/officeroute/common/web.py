"""Shared helpers for the JSON controllers."""

from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AttendanceError,
    InvalidState,
    LocationUnavailable,
    OutOfRange,
    PolicyDenied,
    ValidationError,
)

HTTP_STATUS = {
    PolicyDenied: 403,
    LocationUnavailable: 422,
    OutOfRange: 422,
    InvalidState: 409,
}


def error_response(exc: Exception):
    if isinstance(exc, ValidationError):
        return jsonify({"success": False, "error": "VALIDATION_ERROR", "message": str(exc)}), 400
    if isinstance(exc, AttendanceError):
        status = HTTP_STATUS.get(type(exc), 500)
        return jsonify({"success": False, "error": exc.code, "message": str(exc)}), status
    return jsonify({"success": False, "error": "UNEXPECTED", "message": "Internal error"}), 500


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper
