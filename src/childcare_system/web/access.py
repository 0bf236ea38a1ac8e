from __future__ import annotations

from ..children.model import ChildRecord
from ..children.service import ChildService
from ..core.enums import Role
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthorizationError
from .decorators import current_role, current_uid


def visible_child(children: ChildService, child_id: str) -> ChildRecord:
    """Load a child, refusing guardians who are not linked to it."""

    role = current_role()
    if role not in {Role.GUARDIAN, Role.STAFF, Role.ADMIN}:
        raise AuthorizationError(get_error_message("auth", "ROLE_MISSING"))

    child = children.get_child(child_id)
    if role == Role.GUARDIAN and current_uid() not in child.guardians:
        raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))
    return child
