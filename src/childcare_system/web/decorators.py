"""Request guards and error translation shared by the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.error_messages import get_error_message
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STAFF_ROLES = {Role.STAFF.value, Role.ADMIN.value}


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_uid() -> Optional[str]:
    return session.get("user_id")


def current_role() -> Optional[Role]:
    role = session.get("role")
    return Role(role) if role else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail(get_error_message("auth", "SESSION_EXPIRED"), 401)
        return view(*args, **kwargs)

    return wrapper


def staff_required(view):
    """Staff and admins."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail(get_error_message("auth", "SESSION_EXPIRED"), 401)

        if session.get("role") not in STAFF_ROLES:
            return fail(get_error_message("auth", "FORBIDDEN"), 403)

        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail(get_error_message("auth", "SESSION_EXPIRED"), 401)

        if session.get("role") != Role.ADMIN.value:
            return fail(get_error_message("auth", "FORBIDDEN"), 403)

        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Translate domain exceptions into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except NotFoundError as e:
            return fail(str(e), 404)
        except OperationFailedError as e:
            return fail(str(e), 500)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail(get_error_message("general", "SERVER"), 500)

    return wrapper
