from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..auth.guards import require_capability
from ..common.http import json_body
from ..container import Container
from ..core.enums import Capability
from .qr import make_qr_png
from .service import UNCHANGED


def register(app: Flask, container: Container) -> None:
    def _png(code: str, filename: str):
        return send_file(io.BytesIO(make_qr_png(code)), mimetype="image/png", download_name=filename)

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        year_id = container.academic_year_service.resolve_scope(request.args.get("academic_year_id"))
        students = container.student_service.list_students(academic_year_id=year_id)
        return jsonify({"success": True, "students": [s.to_dict() for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @require_capability(Capability.ADMIN)
    def create_student():
        data = json_body()
        student = container.student_service.register_student(
            name=data.get("name"),
            class_name=data.get("class"),
            parent_phone=data.get("parent_phone"),
            photo=data.get("photo"),
            academic_year_id=container.academic_year_service.resolve_scope(data.get("academic_year_id")),
        )
        return jsonify({"success": True, "student": student.to_dict()}), 201

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    def get_student(student_id: int):
        student = container.student_service.get_student(student_id)
        return jsonify({"success": True, "student": student.to_dict()})

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="update_student")
    @require_capability(Capability.ADMIN)
    def update_student(student_id: int):
        data = json_body()
        student = container.student_service.update_student(
            student_id,
            name=data.get("name"),
            class_name=data.get("class"),
            parent_phone=data.get("parent_phone"),
            photo=data.get("photo") if "photo" in data else UNCHANGED,
        )
        return jsonify({"success": True, "student": student.to_dict()})

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @require_capability(Capability.ADMIN)
    def delete_student(student_id: int):
        container.student_service.delete_student(student_id)
        return jsonify({"success": True, "message": "Student deleted"})

    @app.route("/api/students/<int:student_id>/qr.png", methods=["GET"], endpoint="student_qr_image")
    def student_qr_image(student_id: int):
        student = container.student_service.get_student(student_id)
        return _png(student.student_code, f"{student.student_code}.png")

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    def list_teachers():
        teachers = container.teacher_service.list_teachers()
        return jsonify({"success": True, "teachers": [t.to_dict() for t in teachers]})

    @app.route("/api/teachers", methods=["POST"], endpoint="create_teacher")
    @require_capability(Capability.ADMIN)
    def create_teacher():
        data = json_body()
        teacher = container.teacher_service.register_teacher(
            name=data.get("name"),
            id_card_number=data.get("id_card_number"),
            phone=data.get("phone"),
            sex=data.get("sex"),
            photo=data.get("photo"),
        )
        return jsonify({"success": True, "teacher": teacher.to_dict()}), 201

    @app.route("/api/teachers/<int:teacher_id>", methods=["GET"], endpoint="get_teacher")
    def get_teacher(teacher_id: int):
        teacher = container.teacher_service.get_teacher(teacher_id)
        return jsonify({"success": True, "teacher": teacher.to_dict()})

    @app.route("/api/teachers/<int:teacher_id>", methods=["PUT"], endpoint="update_teacher")
    @require_capability(Capability.ADMIN)
    def update_teacher(teacher_id: int):
        data = json_body()
        teacher = container.teacher_service.update_teacher(
            teacher_id,
            name=data.get("name"),
            id_card_number=data.get("id_card_number"),
            phone=data.get("phone"),
            sex=data.get("sex"),
            photo=data.get("photo") if "photo" in data else UNCHANGED,
        )
        return jsonify({"success": True, "teacher": teacher.to_dict()})

    @app.route("/api/teachers/<int:teacher_id>", methods=["DELETE"], endpoint="delete_teacher")
    @require_capability(Capability.ADMIN)
    def delete_teacher(teacher_id: int):
        container.teacher_service.delete_teacher(teacher_id)
        return jsonify({"success": True, "message": "Teacher deleted"})

    @app.route("/api/teachers/<int:teacher_id>/qr.png", methods=["GET"], endpoint="teacher_qr_image")
    def teacher_qr_image(teacher_id: int):
        teacher = container.teacher_service.get_teacher(teacher_id)
        return _png(teacher.teacher_code, f"{teacher.teacher_code}.png")
