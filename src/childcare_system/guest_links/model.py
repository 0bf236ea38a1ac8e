from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_timestamp
from ..store.model import Document


@dataclass(frozen=True)
class GuestLink:
    """Someone a guardian authorized to pick up a child."""

    id: str
    child_id: str
    name: str
    phone: str
    sent_at: Optional[datetime]
    parent_id: Optional[str]

    @classmethod
    def from_document(cls, child_id: str, doc: Document) -> "GuestLink":
        d = doc.data
        return cls(
            id=doc.id,
            child_id=child_id,
            name=str(d.get("name", "")),
            phone=str(d.get("phone", "")),
            sent_at=parse_timestamp(d.get("sent_at")),
            parent_id=d.get("parent_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "child_id": self.child_id,
            "name": self.name,
            "phone": self.phone,
            "sent_at": self.sent_at.isoformat() if self.sent_at else None,
            "parent_id": self.parent_id,
        }
