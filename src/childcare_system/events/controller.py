from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.error_messages import get_error_message
from ..core.exceptions import StoreError
from ..events.projection import CalendarState
from ..web.decorators import current_role, fail, json_errors, login_required, staff_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="list_events")
    @login_required
    @json_errors
    def list_events():
        department = request.args.get("department")
        if department:
            events = container.event_service.list_for_department(department)
        else:
            events = container.event_service.list_all()
        return jsonify({"success": True, "events": [e.to_dict() for e in events]})

    @app.route("/api/events", methods=["POST"], endpoint="create_event")
    @staff_required
    @json_errors
    def create_event():
        data = request.get_json(silent=True) or {}
        event_id = container.event_service.create_event(
            current_role=current_role(),
            title=data.get("title", ""),
            date_value=data.get("date", ""),
            department=data.get("department", ""),
            description=data.get("description", ""),
        )
        return jsonify({"success": True, "id": event_id}), 201

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="get_event")
    @login_required
    @json_errors
    def get_event(event_id: str):
        return jsonify({"success": True, "event": container.event_service.get_event(event_id).to_dict()})

    @app.route("/api/events/<event_id>", methods=["PATCH"], endpoint="update_event")
    @staff_required
    @json_errors
    def update_event(event_id: str):
        container.event_service.update_event(
            current_role=current_role(), event_id=event_id, data=request.get_json(silent=True) or {}
        )
        return jsonify({"success": True})

    @app.route("/api/events/<event_id>", methods=["DELETE"], endpoint="delete_event")
    @staff_required
    @json_errors
    def delete_event(event_id: str):
        container.event_service.delete_event(current_role=current_role(), event_id=event_id)
        return jsonify({"success": True})

    @app.route("/api/calendar", methods=["GET"], endpoint="calendar")
    @login_required
    @json_errors
    def calendar():
        department = request.args.get("department")
        try:
            if department:
                events = container.event_service.list_for_department(department)
            else:
                events = container.event_service.list_all()
        except StoreError:
            logger.exception("Calendar events could not be loaded")
            return fail(get_error_message("calendar", "LOAD_FAILED"), 500)

        state = CalendarState(events=list(events))
        selected = request.args.get("date")
        if selected:
            state.open_for_date(selected)
        else:
            state.open()
        return jsonify({"success": True, "calendar": state.to_dict()})
