from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_timestamp
from ..store.model import Document


@dataclass(frozen=True)
class CommentEntry:
    id: str
    child_id: str
    text: str
    created_by_id: str
    created_by_name: str
    created_at: Optional[datetime]

    @classmethod
    def from_document(cls, doc: Document) -> "CommentEntry":
        d = doc.data
        return cls(
            id=doc.id,
            child_id=str(d.get("child_id", "")),
            text=str(d.get("text", "")),
            created_by_id=str(d.get("created_by_id") or ""),
            created_by_name=str(d.get("created_by_name") or ""),
            created_at=parse_timestamp(d.get("created_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "child_id": self.child_id,
            "text": self.text,
            "created_by_id": self.created_by_id,
            "created_by_name": self.created_by_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
