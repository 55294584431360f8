from __future__ import annotations

import uuid
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import optional_str, require_float
from ..common.web import admin_required, error_response, ok
from ..container import Container
from ..core.constants import DEFAULT_OFFICE_RADIUS_METERS, EMPLOYEE_EMAIL_DOMAIN
from ..core.enums import Role, WorkMode
from ..core.exceptions import DomainError, ValidationError
from ..database.bootstrap import PUNE_OFFICE
from ..geofence.geo import validate_coordinates
from .model import LocationConfig, User


def public_user(user: User) -> dict[str, Any]:
    data = user.to_dict()
    data.pop("passwordHash", None)
    data.pop("password", None)
    return data


def _text(payload: dict[str, Any], key: str) -> str:
    return (optional_str(payload.get(key), key) or "").strip()


def locations_from_payload(payload: dict[str, Any]) -> tuple[LocationConfig, ...]:
    """OFFICE entry from the form (Pune office when left empty), HOME when WFH is allowed."""
    lat, lng = payload.get("officeLatitude"), payload.get("officeLongitude")
    if lat not in (None, "") and lng not in (None, ""):
        office = validate_coordinates(require_float(lat, "officeLatitude"), require_float(lng, "officeLongitude"))
        radius = require_float(payload.get("officeRadiusMeters", DEFAULT_OFFICE_RADIUS_METERS), "officeRadiusMeters")
        if radius < 0:
            raise ValidationError("officeRadiusMeters must not be negative")
        locations = [LocationConfig(WorkMode.OFFICE, office.latitude, office.longitude, radius)]
    else:
        locations = [PUNE_OFFICE]

    if payload.get("wfhAllowed"):
        locations.append(LocationConfig(WorkMode.HOME, 0, 0, 0))
    return tuple(locations)


def user_from_payload(payload: dict[str, Any], *, existing: Optional[User] = None) -> User:
    email = _text(payload, "email")
    if not email.endswith(EMPLOYEE_EMAIL_DOMAIN):
        raise ValidationError(f"Email must end with {EMPLOYEE_EMAIL_DOMAIN}")

    try:
        role = Role(_text(payload, "role").upper() or Role.USER.value)
    except ValueError:
        raise ValidationError("role must be ADMIN or USER") from None

    extra = dict(existing.extra) if existing else {}
    password = optional_str(payload.get("password"), "password")
    if password:
        password_hash = generate_password_hash(password)
        extra.pop("password", None)
    elif existing is not None:
        password_hash = existing.password_hash
    else:
        raise ValidationError("password is required")

    return User(
        id=existing.id if existing else uuid.uuid4().hex,
        employee_id=_text(payload, "employeeId"),
        name=_text(payload, "name"),
        role=role,
        email=email,
        department=_text(payload, "department"),
        position=_text(payload, "position"),
        gender=_text(payload, "gender"),
        joined_date=existing.joined_date if existing else now_local().date().isoformat(),
        allowed_locations=locations_from_payload(payload),
        password_hash=password_hash,
        extra=extra,
    )


def register(app: Flask, container: Container) -> None:
    svc = container.user_service

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def list_users():
        return ok([public_user(u) for u in svc.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="users_add")
    @admin_required
    def add_user():
        payload = request.get_json(silent=True) or {}
        try:
            user = svc.add_user(user_from_payload(payload))
        except DomainError as e:
            return error_response(e)
        return ok(public_user(user), 201)

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    def update_user(user_id: str):
        existing = svc.get_user(user_id)
        if existing is None:
            return jsonify({"success": False, "error": "NOT_FOUND", "message": f"User {user_id} does not exist"}), 404

        payload = request.get_json(silent=True) or {}
        try:
            user = svc.update_user(user_from_payload(payload, existing=existing))
        except DomainError as e:
            return error_response(e)
        return ok(public_user(user))
