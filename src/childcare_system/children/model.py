from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_timestamp
from ..core.enums import AbsenceType
from ..store.model import Document


@dataclass(frozen=True)
class ChildRecord:
    """Domain entity: a child as persisted in the ``children`` collection.

    ``guardians`` holds guardian uids. A well-formed record has at least one,
    but this is not enforced on write.
    """

    id: str
    first_name: str
    last_name: str
    date_of_birth: str
    allergies: tuple[str, ...] = ()
    image_uri: str = ""
    guardians: tuple[str, ...] = ()
    department: str = ""
    checked_in: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_document(cls, doc: Document) -> "ChildRecord":
        d = doc.data
        return cls(
            id=doc.id,
            first_name=str(d.get("first_name", "")),
            last_name=str(d.get("last_name", "")),
            date_of_birth=str(d.get("date_of_birth", "")),
            allergies=tuple(d.get("allergies") or ()),
            image_uri=str(d.get("image_uri") or ""),
            guardians=tuple(d.get("guardians") or ()),
            department=str(d.get("department") or ""),
            checked_in=bool(d.get("checked_in", False)),
        )

    def to_document_data(self) -> dict[str, Any]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth,
            "allergies": list(self.allergies),
            "image_uri": self.image_uri,
            "guardians": list(self.guardians),
            "department": self.department,
            "checked_in": self.checked_in,
        }

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.to_document_data()}


@dataclass(frozen=True)
class AbsenceWindow:
    type: AbsenceType
    from_date: str
    to_date: str


@dataclass(frozen=True)
class AbsenceEntry:
    """One append-only row of a child's absence history."""

    entry_id: str
    child_id: str
    type: AbsenceType
    from_date: str
    to_date: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, child_id: str, doc: Document) -> "AbsenceEntry":
        d = doc.data
        return cls(
            entry_id=doc.id,
            child_id=child_id,
            type=AbsenceType(d["type"]),
            from_date=str(d["from_date"]),
            to_date=str(d["to_date"]),
            created_at=parse_timestamp(d.get("created_at")),
        )

    @property
    def window(self) -> AbsenceWindow:
        return AbsenceWindow(type=self.type, from_date=self.from_date, to_date=self.to_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.entry_id,
            "child_id": self.child_id,
            "type": self.type.value,
            "from_date": self.from_date,
            "to_date": self.to_date,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class UIChildRecord:
    """Roster row: a ChildRecord plus transient UI state.

    Created fresh on every fetch and mutated in place by roster transitions.
    The selection and absence fields are never written back to the child
    document.
    """

    id: str
    first_name: str
    last_name: str
    date_of_birth: str
    allergies: list[str] = field(default_factory=list)
    image_uri: str = ""
    guardians: list[str] = field(default_factory=list)
    department: str = ""
    checked_in: bool = False
    selected: bool = False
    absence_type: Optional[AbsenceType] = None
    absence_from: Optional[str] = None
    absence_to: Optional[str] = None

    @classmethod
    def from_record(cls, record: ChildRecord, *, absence: Optional[AbsenceWindow] = None) -> "UIChildRecord":
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            date_of_birth=record.date_of_birth,
            allergies=list(record.allergies),
            image_uri=record.image_uri,
            guardians=list(record.guardians),
            department=record.department,
            checked_in=record.checked_in,
            selected=False,
            absence_type=absence.type if absence else None,
            absence_from=absence.from_date if absence else None,
            absence_to=absence.to_date if absence else None,
        )

    def set_absence(self, absence_type: AbsenceType, from_date: str, to_date: str) -> None:
        self.absence_type = absence_type
        self.absence_from = from_date
        self.absence_to = to_date

    def clear_absence(self) -> None:
        self.absence_type = None
        self.absence_from = None
        self.absence_to = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth,
            "allergies": list(self.allergies),
            "image_uri": self.image_uri,
            "guardians": list(self.guardians),
            "department": self.department,
            "checked_in": self.checked_in,
            "selected": self.selected,
            "absence_type": self.absence_type.value if self.absence_type else None,
            "absence_from": self.absence_from,
            "absence_to": self.absence_to,
        }
