from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.datetime_utils import to_local_date_str
from ..store.model import Document


@dataclass(frozen=True)
class EventEntry:
    """Calendar event. ``date`` is an ISO date string (one calendar day)."""

    id: str
    title: str
    department: str
    description: str
    date: str

    @classmethod
    def from_document(cls, doc: Document) -> "EventEntry":
        d = doc.data
        return cls(
            id=doc.id,
            title=str(d.get("title", "")),
            department=str(d.get("department") or ""),
            description=str(d.get("description") or ""),
            date=to_local_date_str(d["date"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "department": self.department,
            "description": self.description,
            "date": self.date,
        }
