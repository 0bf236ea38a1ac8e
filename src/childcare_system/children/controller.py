from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import Role
from ..core.error_messages import get_error_message
from ..web.access import visible_child
from ..web.decorators import current_role, current_uid, fail, json_errors, login_required, staff_required


def register(app: Flask, container: Container) -> None:
    def _with_image_url(child) -> dict:
        row = child.to_dict()
        row["image_url"] = container.image_service.download_url(child.image_uri)
        return row

    @app.route("/api/children", methods=["GET"], endpoint="list_children")
    @login_required
    @json_errors
    def list_children():
        role = current_role()
        if role == Role.GUARDIAN:
            children = container.child_service.list_for_guardian(current_uid())
        elif role not in {Role.STAFF, Role.ADMIN}:
            return fail(get_error_message("auth", "ROLE_MISSING"), 403)
        elif request.args.get("department"):
            children = container.child_service.list_for_department(request.args["department"])
        else:
            children = container.child_service.list_all()
        return jsonify({"success": True, "children": [_with_image_url(c) for c in children]})

    @app.route("/api/children", methods=["POST"], endpoint="create_child")
    @staff_required
    @json_errors
    def create_child():
        data = request.get_json(silent=True) or {}
        child_id = container.child_service.create_child(
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            date_of_birth=data.get("date_of_birth", ""),
            department=data.get("department", ""),
            guardians=data.get("guardians") or (),
            allergies=data.get("allergies") or (),
        )
        return jsonify({"success": True, "id": child_id}), 201

    @app.route("/api/children/<child_id>", methods=["GET"], endpoint="get_child")
    @login_required
    @json_errors
    def get_child(child_id: str):
        return jsonify({"success": True, "child": _with_image_url(visible_child(container.child_service, child_id))})

    @app.route("/api/children/<child_id>", methods=["PATCH"], endpoint="update_child")
    @staff_required
    @json_errors
    def update_child(child_id: str):
        container.child_service.update_child(child_id, request.get_json(silent=True) or {})
        return jsonify({"success": True})

    @app.route("/api/children/<child_id>/allergies", methods=["PUT"], endpoint="update_allergies")
    @login_required
    @json_errors
    def update_allergies(child_id: str):
        visible_child(container.child_service, child_id)
        data = request.get_json(silent=True) or {}
        allergies = container.child_service.update_allergies(child_id, data.get("allergies") or [])
        return jsonify({"success": True, "allergies": allergies})

    @app.route("/api/children/<child_id>", methods=["DELETE"], endpoint="delete_child")
    @staff_required
    @json_errors
    def delete_child(child_id: str):
        container.child_service.delete_child(child_id)
        return jsonify({"success": True})

    @app.route("/api/children/<child_id>/image", methods=["POST"], endpoint="upload_child_image")
    @login_required
    @json_errors
    def upload_child_image(child_id: str):
        visible_child(container.child_service, child_id)
        upload = request.files.get("image")
        if upload is None:
            return fail(get_error_message("image", "UPLOAD_FAILED"), 400)

        path = container.child_service.update_profile_image(child_id, upload.read(), upload.filename or "")
        if not path:
            return fail(get_error_message("image", "UPLOAD_FAILED"), 500)
        return jsonify({"success": True, "image_uri": path, "image_url": container.image_service.download_url(path)})

    @app.route("/api/children/<child_id>/absences", methods=["GET"], endpoint="child_absences")
    @login_required
    @json_errors
    def child_absences(child_id: str):
        visible_child(container.child_service, child_id)
        history = container.child_service.absence_history(child_id)
        return jsonify({"success": True, "absences": [e.to_dict() for e in history]})
