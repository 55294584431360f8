from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_str
from ..common.web import admin_required, error_response, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sync/settings", methods=["GET"], endpoint="sync_settings")
    @admin_required
    def get_settings():
        return ok({"cloudUrl": container.sync_settings_repo.get_cloud_url()})

    @app.route("/api/sync/settings", methods=["PUT"], endpoint="sync_settings_update")
    @admin_required
    def update_settings():
        payload = request.get_json(silent=True) or {}
        try:
            url = optional_str(payload.get("cloudUrl"), "cloudUrl") or ""
        except ValidationError as e:
            return error_response(e)
        container.sync_settings_repo.set_cloud_url(url)
        return ok({"cloudUrl": container.sync_settings_repo.get_cloud_url()})

    @app.route("/api/sync", methods=["POST"], endpoint="sync_now")
    @admin_required
    def sync_now():
        payload = request.get_json(silent=True) or {}
        try:
            endpoint = optional_str(payload.get("cloudUrl"), "cloudUrl")
        except ValidationError as e:
            return error_response(e)
        result = container.sync_reconciler.sync(endpoint)
        return jsonify(result.to_dict()), 200 if result.success else 502
