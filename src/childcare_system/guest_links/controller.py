from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.access import visible_child
from ..web.decorators import current_uid, json_errors, login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/children/<child_id>/guest-links", methods=["POST"], endpoint="send_guest_link")
    @login_required
    @json_errors
    def send_guest_link(child_id: str):
        visible_child(container.child_service, child_id)
        data = request.get_json(silent=True) or {}
        link_id = container.guest_link_service.send_guest_link(
            child_id,
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            requester_uid=current_uid(),
        )
        return jsonify({"success": True, "id": link_id}), 201

    @app.route("/api/children/<child_id>/guest-links", methods=["GET"], endpoint="list_guest_links")
    @login_required
    @json_errors
    def list_guest_links(child_id: str):
        visible_child(container.child_service, child_id)
        links = container.guest_link_service.list_for_child(child_id)
        return jsonify({"success": True, "guest_links": [g.to_dict() for g in links]})
