from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/insights", methods=["POST"], endpoint="insights")
    @admin_required
    def insights():
        payload = request.get_json(silent=True) or {}
        text = container.insight_service.analyze(
            container.attendance_repo.list_all(),
            container.user_service.attendance_eligible_users(),
            payload.get("query"),
        )
        return ok({"text": text})
