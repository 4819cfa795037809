from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import require_capability
from ..common.http import json_body
from ..container import Container
from ..core.enums import Capability


def register(app: Flask, container: Container) -> None:
    service = container.class_service

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    def list_classes():
        return jsonify({"success": True, "classes": [c.to_dict() for c in service.list_classes()]})

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @require_capability(Capability.ADMIN)
    def create_class():
        data = json_body()
        item = service.create_class(name=data.get("name"), code=data.get("code"))
        return jsonify({"success": True, "class": item.to_dict()}), 201

    @app.route("/api/classes/<int:class_id>", methods=["PUT"], endpoint="update_class")
    @require_capability(Capability.ADMIN)
    def update_class(class_id: int):
        data = json_body()
        item = service.update_class(class_id, name=data.get("name"), code=data.get("code"))
        return jsonify({"success": True, "class": item.to_dict()})

    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="delete_class")
    @require_capability(Capability.ADMIN)
    def delete_class(class_id: int):
        service.delete_class(class_id)
        return jsonify({"success": True, "message": "Class deleted"})
