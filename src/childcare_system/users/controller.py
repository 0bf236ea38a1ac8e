from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.enums import Role
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthorizationError
from ..users.model import UnresolvedIdentity
from ..web.decorators import admin_required, current_role, current_uid, json_errors, login_required, staff_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.sign_in(data.get("email", ""), data.get("password", ""))

        container.roster_sessions.close(session.get("roster_token"))
        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.uid
        session["name"] = s_user.display_name
        session["role"] = s_user.role.value if s_user.role else None

        return jsonify({"success": True, "user": {"uid": s_user.uid, "name": s_user.display_name, "role": session["role"]}})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.roster_sessions.close(session.get("roster_token"))
        container.auth_service.sign_out(session)
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required
    @json_errors
    def me():
        identity = container.auth_service.resolve_identity(current_uid())
        if isinstance(identity, UnresolvedIdentity):
            raise AuthorizationError(get_error_message("auth", "ROLE_MISSING"))

        return jsonify(
            {
                "success": True,
                "uid": identity.uid,
                "role": identity.role.value,
                "profile": identity.profile.to_dict(),
            }
        )

    @app.route("/api/pin", methods=["GET"], endpoint="pin_status")
    @login_required
    @json_errors
    def pin_status():
        return jsonify({"success": True, "has_pin": container.pin_service.has_pin(current_uid())})

    @app.route("/api/pin", methods=["PUT"], endpoint="set_pin")
    @login_required
    @json_errors
    def set_pin():
        data = request.get_json(silent=True) or {}
        container.pin_service.set_pin(current_uid(), str(data.get("pin", "")), confirm=data.get("confirm"))
        return jsonify({"success": True})

    @app.route("/api/pin/verify", methods=["POST"], endpoint="verify_pin")
    @login_required
    @json_errors
    def verify_pin():
        data = request.get_json(silent=True) or {}
        ok = container.pin_service.verify_pin(current_uid(), str(data.get("pin", "")))
        return jsonify({"success": ok})

    @app.route("/api/admin/users", methods=["POST"], endpoint="admin_create_user")
    @admin_required
    @json_errors
    def admin_create_user():
        data = request.get_json(silent=True) or {}
        uid = container.provisioning_service.admin_create_user(
            requester_uid=current_uid(),
            email=data.get("email", ""),
            password=data.get("password", ""),
            display_name=data.get("display_name", ""),
            role=data.get("role", ""),
            additional_fields=data.get("additional_fields") or {},
        )
        return jsonify({"success": True, "uid": uid}), 201

    @app.route("/api/guardians", endpoint="list_guardians")
    @staff_required
    @json_errors
    def list_guardians():
        return jsonify({"success": True, "guardians": [g.to_dict() for g in container.profile_service.list_guardians()]})

    @app.route("/api/guardians/<uid>", methods=["GET"], endpoint="get_guardian")
    @login_required
    @json_errors
    def get_guardian(uid: str):
        if current_role() is None or (current_role() == Role.GUARDIAN and current_uid() != uid):
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))
        return jsonify({"success": True, "guardian": container.profile_service.get_guardian(uid).to_dict()})

    @app.route("/api/guardians/<uid>", methods=["PATCH"], endpoint="update_guardian")
    @login_required
    @json_errors
    def update_guardian(uid: str):
        # Guardians edit their own profile; staff may edit anyone's.
        if current_role() is None or (current_role() == Role.GUARDIAN and current_uid() != uid):
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))
        container.profile_service.update_guardian(uid, request.get_json(silent=True) or {})
        return jsonify({"success": True})

    @app.route("/api/guardians/<uid>", methods=["DELETE"], endpoint="delete_guardian")
    @admin_required
    @json_errors
    def delete_guardian(uid: str):
        container.profile_service.delete_guardian(current_role=current_role(), uid=uid)
        return jsonify({"success": True})

    @app.route("/api/staff", endpoint="list_staff")
    @staff_required
    @json_errors
    def list_staff():
        return jsonify({"success": True, "staff": [s.to_dict() for s in container.profile_service.list_staff()]})

    @app.route("/api/staff/<uid>", methods=["PATCH"], endpoint="update_staff")
    @staff_required
    @json_errors
    def update_staff(uid: str):
        if current_role() != Role.ADMIN and current_uid() != uid:
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))
        container.profile_service.update_staff(
            current_role=current_role(), uid=uid, data=request.get_json(silent=True) or {}
        )
        return jsonify({"success": True})

    @app.route("/api/staff/<uid>", methods=["DELETE"], endpoint="delete_staff")
    @admin_required
    @json_errors
    def delete_staff(uid: str):
        container.profile_service.delete_staff(current_role=current_role(), uid=uid)
        return jsonify({"success": True})
