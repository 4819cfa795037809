from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import require_capability
from ..common.http import json_body
from ..container import Container
from ..core.enums import Capability


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    def get_settings():
        return jsonify({"success": True, "settings": container.settings_service.get().to_dict()})

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    @require_capability(Capability.ADMIN)
    def update_settings():
        data = json_body()
        settings = container.settings_service.set(
            school_start_time=data.get("school_start_time"),
            school_end_time=data.get("school_end_time"),
        )
        return jsonify({"success": True, "message": "Settings saved", "settings": settings.to_dict()})
