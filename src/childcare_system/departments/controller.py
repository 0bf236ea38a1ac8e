from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.decorators import admin_required, current_role, json_errors, login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    @login_required
    @json_errors
    def list_departments():
        return jsonify(
            {"success": True, "departments": [d.to_dict() for d in container.department_service.list_all()]}
        )

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    @admin_required
    @json_errors
    def create_department():
        data = request.get_json(silent=True) or {}
        dept_id = container.department_service.create(current_role=current_role(), name=data.get("name", ""))
        return jsonify({"success": True, "id": dept_id}), 201

    @app.route("/api/departments/<dept_id>", methods=["GET"], endpoint="get_department")
    @login_required
    @json_errors
    def get_department(dept_id: str):
        return jsonify({"success": True, "department": container.department_service.get(dept_id).to_dict()})

    @app.route("/api/departments/<dept_id>", methods=["PATCH"], endpoint="rename_department")
    @admin_required
    @json_errors
    def rename_department(dept_id: str):
        data = request.get_json(silent=True) or {}
        container.department_service.rename(current_role=current_role(), dept_id=dept_id, name=data.get("name", ""))
        return jsonify({"success": True})

    @app.route("/api/departments/<dept_id>", methods=["DELETE"], endpoint="delete_department")
    @admin_required
    @json_errors
    def delete_department(dept_id: str):
        container.department_service.delete(current_role=current_role(), dept_id=dept_id)
        return jsonify({"success": True})
