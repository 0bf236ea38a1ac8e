from __future__ import annotations

import logging
from typing import Any, Optional

from werkzeug.security import generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import AccountRole, StaffRole
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthorizationError, ValidationError
from ..store.model import new_document_id
from .model import StaffIdentity
from .repository import AccountRepository, GuardianRepository, StaffRepository
from .service import AuthService

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {"first_name", "last_name", "phone", "image_uri", "department"}


class AccountProvisioningService:
    """Privileged operation: create an identity and its profile in one atomic write.

    This is the only multi-document write in the system that is all-or-nothing.
    """

    def __init__(
        self,
        accounts: AccountRepository,
        guardians: GuardianRepository,
        staff: StaffRepository,
        auth: AuthService,
    ):
        self._accounts = accounts
        self._guardians = guardians
        self._staff = staff
        self._auth = auth

    def admin_create_user(
        self,
        *,
        requester_uid: Optional[str],
        email: str,
        password: str,
        display_name: str,
        role: AccountRole | str,
        additional_fields: Optional[dict[str, Any]] = None,
    ) -> str:
        if not requester_uid:
            raise AuthorizationError(get_error_message("auth", "SESSION_EXPIRED"))

        requester = self._auth.resolve_identity(requester_uid)
        if not isinstance(requester, StaffIdentity) or not requester.profile.is_admin:
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))

        try:
            role = AccountRole(role)
        except ValueError:
            raise ValidationError("Invalid account role")

        email = require_non_empty(email, "E-mail").lower()
        if "@" not in email:
            raise ValidationError("Invalid e-mail address")
        require_min_length(password, "Password", 6)
        display_name = require_non_empty(display_name, "Display name")

        if self._accounts.get_by_email(email):
            raise ValidationError("An account with this e-mail already exists")

        extra = {k: v for k, v in (additional_fields or {}).items() if k in PROFILE_FIELDS}
        profile_data: dict[str, Any] = {"first_name": "", "last_name": "", **extra, "email": email}

        uid = new_document_id()
        if role == AccountRole.PARENT:
            profile_write = self._guardians.profile_write(uid, profile_data)
        else:
            staff_role = StaffRole.ADMIN if role == AccountRole.ADMIN else StaffRole.EMPLOYEE
            profile_write = self._staff.profile_write(uid, {**profile_data, "role": staff_role.value})

        account_write = self._accounts.account_write(
            uid,
            email=email,
            password_hash=generate_password_hash(password),
            display_name=display_name,
        )
        self._accounts.commit([account_write, profile_write])

        logger.info("Admin %s created %s account %s", requester_uid, role.value, uid)
        return uid
