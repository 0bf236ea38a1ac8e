from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..container import Container
from ..web.access import visible_child
from ..web.decorators import current_uid, json_errors, login_required, staff_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/children/<child_id>/comments", methods=["GET"], endpoint="list_comments")
    @login_required
    @json_errors
    def list_comments(child_id: str):
        visible_child(container.child_service, child_id)
        comments = container.comment_service.list_for_child(child_id)
        return jsonify({"success": True, "comments": [c.to_dict() for c in comments]})

    @app.route("/api/children/<child_id>/comments", methods=["POST"], endpoint="add_comment")
    @login_required
    @json_errors
    def add_comment(child_id: str):
        visible_child(container.child_service, child_id)
        data = request.get_json(silent=True) or {}
        comment_id = container.comment_service.add_comment(
            child_id,
            author_id=current_uid(),
            author_name=session.get("name", ""),
            text=data.get("text", ""),
        )
        return jsonify({"success": True, "id": comment_id}), 201

    @app.route("/api/comments/<comment_id>", methods=["DELETE"], endpoint="delete_comment")
    @staff_required
    @json_errors
    def delete_comment(comment_id: str):
        container.comment_service.delete_comment(comment_id)
        return jsonify({"success": True})
