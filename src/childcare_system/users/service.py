from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, MutableMapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.constants import PIN_LENGTH
from ..core.enums import Role, StaffRole
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import GuardianIdentity, GuardianProfile, Identity, StaffIdentity, StaffProfile, UnresolvedIdentity
from .repository import AccountRepository, GuardianRepository, PinRepository, StaffRepository

logger = logging.getLogger(__name__)

GUARDIAN_FIELDS = {"first_name", "last_name", "phone", "image_uri"}
STAFF_FIELDS = {"first_name", "last_name", "phone", "image_uri", "department", "role"}


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    uid: str
    display_name: str
    role: Optional[Role]


class AuthService:
    """Use case: sign in and resolve who the signed-in identity is."""

    def __init__(self, accounts: AccountRepository, guardians: GuardianRepository, staff: StaffRepository):
        self._accounts = accounts
        self._guardians = guardians
        self._staff = staff

    def sign_in(self, email: str, password: str) -> SessionUser:
        account = self._accounts.get_by_email(email or "")
        if not account:
            raise AuthenticationError(get_error_message("auth", "INVALID_CREDENTIALS"))

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except Exception:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError(get_error_message("auth", "INVALID_CREDENTIALS"))

        identity = self.resolve_identity(account.uid)
        return SessionUser(uid=account.uid, display_name=account.display_name, role=identity.role)

    def sign_out(self, session: MutableMapping[str, Any]) -> None:
        uid = session.get("user_id")
        session.clear()
        if uid:
            logger.info("Signed out %s", uid)

    def resolve_identity(self, uid: str) -> Identity:
        staff = self._staff.get_by_id(uid)
        if staff:
            return StaffIdentity(staff)

        guardian = self._guardians.get_by_id(uid)
        if guardian:
            return GuardianIdentity(guardian)

        logger.warning("Signed-in uid %s has no staff or guardian profile", uid)
        return UnresolvedIdentity(uid=uid)


def _pick(data: dict[str, Any], allowed: set[str]) -> dict[str, Any]:
    unknown = set(data) - allowed
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    out = dict(data)
    for key in ("first_name", "last_name"):
        if key in out:
            out[key] = require_non_empty(out[key], key.replace("_", " ").capitalize())
    return out


class ProfileService:
    """Use case: manage guardian and staff profiles (admin)."""

    def __init__(self, guardians: GuardianRepository, staff: StaffRepository):
        self._guardians = guardians
        self._staff = staff

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))

    def get_guardian(self, uid: str) -> GuardianProfile:
        guardian = self._guardians.get_by_id(uid)
        if not guardian:
            raise NotFoundError(get_error_message("parents", "LOAD_FAILED"))
        return guardian

    def list_guardians(self) -> Sequence[GuardianProfile]:
        return self._guardians.list_all()

    def update_guardian(self, uid: str, data: dict[str, Any]) -> None:
        self.get_guardian(uid)
        cleaned = _pick(data, GUARDIAN_FIELDS)
        if cleaned:
            self._guardians.update(uid, cleaned)

    def delete_guardian(self, *, current_role: Optional[Role], uid: str) -> None:
        self._require_admin(current_role)
        if not self._guardians.delete(uid):
            raise NotFoundError(get_error_message("parents", "LOAD_FAILED"))

    def add_child_to_guardian(self, guardian_id: str, child_id: str) -> None:
        logger.info("Linking child %s to guardian %s", child_id, guardian_id)
        self._guardians.add_child(guardian_id, child_id)

    def get_staff(self, uid: str) -> StaffProfile:
        member = self._staff.get_by_id(uid)
        if not member:
            raise NotFoundError("Staff member not found")
        return member

    def list_staff(self) -> Sequence[StaffProfile]:
        return self._staff.list_all()

    def update_staff(self, *, current_role: Optional[Role], uid: str, data: dict[str, Any]) -> None:
        self.get_staff(uid)
        cleaned = _pick(data, STAFF_FIELDS)
        if "role" in cleaned:
            self._require_admin(current_role)
            try:
                cleaned["role"] = StaffRole(cleaned["role"]).value
            except ValueError:
                raise ValidationError("Invalid staff role")
        if cleaned:
            self._staff.update(uid, cleaned)

    def delete_staff(self, *, current_role: Optional[Role], uid: str) -> None:
        self._require_admin(current_role)
        if not self._staff.delete(uid):
            raise NotFoundError("Staff member not found")


class PinService:
    """Use case: the 4-digit PIN that guards sensitive screens."""

    _PIN_RE = re.compile(rf"^\d{{{PIN_LENGTH}}}$")

    def __init__(self, pins: PinRepository):
        self._pins = pins

    def has_pin(self, uid: str) -> bool:
        exists, pin_hash = self._pins.get_pin_hash(uid)
        if not exists:
            raise NotFoundError("User not found")
        return bool(pin_hash)

    def set_pin(self, uid: str, pin: str, *, confirm: Optional[str] = None) -> None:
        if not self._PIN_RE.match(pin or ""):
            raise ValidationError(f"The PIN must be {PIN_LENGTH} digits")
        if confirm is not None and pin != confirm:
            raise ValidationError("The PINs do not match")

        if not self._pins.set_pin_hash(uid, generate_password_hash(pin)):
            raise NotFoundError("User not found")

    def verify_pin(self, uid: str, pin: str) -> bool:
        exists, pin_hash = self._pins.get_pin_hash(uid)
        if not exists:
            raise NotFoundError("User not found")
        if not pin_hash:
            return False
        return check_password_hash(pin_hash, pin or "")
