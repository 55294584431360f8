from __future__ import annotations

from typing import Any

from flask import Flask, request, session

from ..common.datetime_utils import now_local
from ..common.validators import require_float
from ..common.web import admin_required, error_response, login_required, ok
from ..core.constants import DEFAULT_HISTORY_LIMIT, RECENT_ACTIVITY_LIMIT
from ..core.enums import WorkMode
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from ..geofence.geo import validate_coordinates
from ..geofence.position_source import ReportedPosition


def positions_from_payload(payload: dict[str, Any]) -> ReportedPosition:
    """Build the position source from what the device sent.

    No coordinates means the device could not get a fix; ``positionError``
    carries its reason when present.
    """
    lat, lng = payload.get("latitude"), payload.get("longitude")
    if lat is None or lng is None:
        return ReportedPosition(error=payload.get("positionError"))
    return ReportedPosition(
        position=validate_coordinates(require_float(lat, "latitude"), require_float(lng, "longitude"))
    )


def _work_mode(payload: dict[str, Any]) -> WorkMode:
    try:
        return WorkMode(str(payload.get("workMode", WorkMode.OFFICE.value)).upper())
    except ValueError:
        raise ValidationError("workMode must be OFFICE or HOME") from None


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        user_id = str(session["user_id"])
        work_date = now_local().date()
        record = svc.get_today_record(user_id, work_date)
        return ok(
            {
                "state": svc.attendance_state(user_id, work_date).value,
                "record": record.to_dict() if record else None,
                "positionOptions": container.position_options.to_dict(),
            }
        )

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def check_in():
        payload = request.get_json(silent=True) or {}
        try:
            record = svc.check_in(str(session["user_id"]), _work_mode(payload), positions_from_payload(payload))
        except DomainError as e:
            return error_response(e)
        return ok(record.to_dict(), 201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def check_out():
        payload = request.get_json(silent=True) or {}
        try:
            record = svc.check_out(str(session["user_id"]), positions_from_payload(payload))
        except DomainError as e:
            return error_response(e)
        return ok(record.to_dict())

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history():
        try:
            rows = svc.history_for_user(
                str(session["user_id"]),
                limit=request.args.get("limit", default=DEFAULT_HISTORY_LIMIT),
            )
        except DomainError as e:
            return error_response(e)
        return ok([r.to_dict() for r in rows])

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def stats():
        return ok(svc.monthly_stats(str(session["user_id"]), now_local().date()).to_dict())

    @app.route("/api/attendance/records", methods=["GET"], endpoint="attendance_records")
    @admin_required
    def records():
        try:
            rows = svc.recent_records(limit=request.args.get("limit", default=RECENT_ACTIVITY_LIMIT))
        except DomainError as e:
            return error_response(e)
        return ok([r.to_dict() for r in rows])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @admin_required
    def summary():
        s = svc.today_summary(now_local().date())
        return ok(
            {
                "totalEmployees": s.total_employees,
                "present": s.present,
                "late": s.late,
                "absent": s.absent,
                "remote": s.on_remote,
            }
        )
