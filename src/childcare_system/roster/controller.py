from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request, session

from ..container import Container
from ..roster.result import TransitionResult
from ..roster.scope import RosterScope
from ..roster.session import RosterSession, scope_for_identity
from ..web.decorators import current_uid, json_errors, login_required


def register(app: Flask, container: Container) -> None:
    def _scope(department: Optional[str]) -> RosterScope:
        identity = container.auth_service.resolve_identity(current_uid())
        return scope_for_identity(identity, department=department)

    def _open(scope: RosterScope) -> RosterSession:
        container.roster_sessions.close(session.get("roster_token"))
        token, roster = container.roster_sessions.open(scope)
        session["roster_token"] = token
        roster.load()
        return roster

    def _current() -> RosterSession:
        roster = container.roster_sessions.get(session.get("roster_token"))
        if roster is None:
            # Server restarted or first visit: start a fresh roster for the viewer.
            roster = _open(_scope(None))
        return roster

    def _respond(roster: RosterSession, result: Optional[TransitionResult] = None):
        body = {"success": True, "roster": roster.snapshot()}
        if result is not None:
            body["result"] = result.to_dict()
        return jsonify(body)

    @app.route("/api/roster", methods=["GET"], endpoint="roster")
    @login_required
    @json_errors
    def roster_view():
        scope = _scope(request.args.get("department") or None)
        roster = container.roster_sessions.get(session.get("roster_token"))
        if roster is None or roster.scope != scope:
            roster = _open(scope)
        return _respond(roster)

    @app.route("/api/roster/refresh", methods=["POST"], endpoint="roster_refresh")
    @login_required
    @json_errors
    def roster_refresh():
        roster = _current()
        roster.refresh()
        return _respond(roster)

    @app.route("/api/roster/children/<child_id>/toggle-select", methods=["POST"], endpoint="roster_toggle_select")
    @login_required
    @json_errors
    def roster_toggle_select(child_id: str):
        roster = _current()
        roster.store.toggle_select(child_id)
        return _respond(roster)

    @app.route("/api/roster/check-in-out", methods=["POST"], endpoint="roster_check_in_out")
    @login_required
    @json_errors
    def roster_check_in_out():
        roster = _current()
        result = roster.attendance.apply_bulk_transition()
        return _respond(roster, result)

    @app.route("/api/roster/children/<child_id>/toggle-check-in", methods=["POST"], endpoint="roster_toggle_check_in")
    @login_required
    @json_errors
    def roster_toggle_check_in(child_id: str):
        roster = _current()
        result = roster.attendance.toggle_single(child_id)
        return _respond(roster, result)

    @app.route("/api/roster/absence-editor", methods=["POST"], endpoint="roster_open_absence_editor")
    @login_required
    @json_errors
    def roster_open_absence_editor():
        roster = _current()
        roster.absence.open_absence_editor()
        return _respond(roster)

    @app.route("/api/roster/absence-editor", methods=["DELETE"], endpoint="roster_close_absence_editor")
    @login_required
    @json_errors
    def roster_close_absence_editor():
        roster = _current()
        roster.absence.close_absence_editor()
        return _respond(roster)

    @app.route("/api/roster/vacation-settings", methods=["PUT"], endpoint="roster_vacation_settings")
    @login_required
    @json_errors
    def roster_vacation_settings():
        roster = _current()
        data = request.get_json(silent=True) or {}
        if "days" in data:
            try:
                roster.absence.vacation_days = int(data["days"])
            except (TypeError, ValueError):
                return jsonify({"success": False, "message": "Days must be a number"}), 400
        if "start_date" in data:
            roster.absence.set_vacation_start_date(data["start_date"])
        return _respond(roster)

    @app.route("/api/roster/sickness", methods=["POST"], endpoint="roster_sickness")
    @login_required
    @json_errors
    def roster_sickness():
        roster = _current()
        result = roster.absence.register_sickness_for_selected()
        return _respond(roster, result)

    @app.route("/api/roster/vacation", methods=["POST"], endpoint="roster_vacation")
    @login_required
    @json_errors
    def roster_vacation():
        roster = _current()
        result = roster.absence.register_vacation_for_selected()
        return _respond(roster, result)

    @app.route("/api/roster/error", methods=["DELETE"], endpoint="roster_clear_error")
    @login_required
    @json_errors
    def roster_clear_error():
        roster = _current()
        roster.clear_errors()
        return _respond(roster)
