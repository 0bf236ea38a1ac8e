from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..core.enums import Role, StaffRole
from ..store.model import Document


@dataclass(frozen=True)
class GuardianProfile:
    """Domain entity: guardian profile. Document id equals the auth uid."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    image_uri: str = ""
    children: tuple[str, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_document(cls, doc: Document) -> "GuardianProfile":
        d = doc.data
        return cls(
            id=doc.id,
            first_name=str(d.get("first_name", "")),
            last_name=str(d.get("last_name", "")),
            email=str(d.get("email", "")),
            phone=str(d.get("phone") or ""),
            image_uri=str(d.get("image_uri") or ""),
            children=tuple(d.get("children") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "image_uri": self.image_uri,
            "children": list(self.children),
        }


@dataclass(frozen=True)
class StaffProfile:
    """Domain entity: staff member profile. Document id equals the auth uid."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    image_uri: str = ""
    department: str = ""
    role: StaffRole = StaffRole.EMPLOYEE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == StaffRole.ADMIN

    @classmethod
    def from_document(cls, doc: Document) -> "StaffProfile":
        d = doc.data
        try:
            role = StaffRole(d.get("role") or StaffRole.EMPLOYEE.value)
        except ValueError:
            role = StaffRole.EMPLOYEE
        return cls(
            id=doc.id,
            first_name=str(d.get("first_name", "")),
            last_name=str(d.get("last_name", "")),
            email=str(d.get("email", "")),
            phone=str(d.get("phone") or ""),
            image_uri=str(d.get("image_uri") or ""),
            department=str(d.get("department") or ""),
            role=role,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "image_uri": self.image_uri,
            "department": self.department,
            "role": self.role.value,
        }


@dataclass(frozen=True)
class Account:
    """Identity record: what the sign-in checks against."""

    uid: str
    email: str
    password_hash: str
    display_name: str = ""

    @classmethod
    def from_document(cls, doc: Document) -> "Account":
        d = doc.data
        return cls(
            uid=doc.id,
            email=str(d.get("email", "")),
            password_hash=str(d.get("password_hash", "")),
            display_name=str(d.get("display_name") or ""),
        )


@dataclass(frozen=True)
class GuardianIdentity:
    profile: GuardianProfile

    @property
    def uid(self) -> str:
        return self.profile.id

    @property
    def role(self) -> Role:
        return Role.GUARDIAN


@dataclass(frozen=True)
class StaffIdentity:
    profile: StaffProfile

    @property
    def uid(self) -> str:
        return self.profile.id

    @property
    def role(self) -> Role:
        return Role.ADMIN if self.profile.is_admin else Role.STAFF


@dataclass(frozen=True)
class UnresolvedIdentity:
    """Signed in, but neither a staff member nor a guardian."""

    uid: str
    role: Optional[Role] = None


Identity = Union[GuardianIdentity, StaffIdentity, UnresolvedIdentity]
