from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import require_capability
from ..common.http import json_body
from ..container import Container
from ..core.enums import Capability


def register(app: Flask, container: Container) -> None:
    service = container.academic_year_service

    @app.route("/api/academic-years", methods=["GET"], endpoint="list_academic_years")
    def list_academic_years():
        return jsonify({"success": True, "academic_years": [y.to_dict() for y in service.list_years()]})

    @app.route("/api/academic-years", methods=["POST"], endpoint="create_academic_year")
    @require_capability(Capability.ADMIN)
    def create_academic_year():
        data = json_body()
        year = service.create_year(
            name=data.get("name"),
            start_year=data.get("start_year"),
            end_year=data.get("end_year"),
            status=data.get("status"),
        )
        return jsonify({"success": True, "academic_year": year.to_dict()}), 201

    @app.route("/api/academic-years/<int:year_id>", methods=["PUT"], endpoint="update_academic_year")
    @require_capability(Capability.ADMIN)
    def update_academic_year(year_id: int):
        data = json_body()
        year = service.update_year(
            year_id,
            name=data.get("name"),
            start_year=data.get("start_year"),
            end_year=data.get("end_year"),
            status=data.get("status"),
        )
        return jsonify({"success": True, "academic_year": year.to_dict()})

    @app.route("/api/academic-years/<int:year_id>", methods=["DELETE"], endpoint="delete_academic_year")
    @require_capability(Capability.ADMIN)
    def delete_academic_year(year_id: int):
        service.delete_year(year_id)
        return jsonify({"success": True, "message": "Academic year deleted"})
