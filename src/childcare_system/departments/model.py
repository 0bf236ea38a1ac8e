from __future__ import annotations

from dataclasses import dataclass

from ..store.model import Document


@dataclass(frozen=True)
class Department:
    id: str
    name: str

    @classmethod
    def from_document(cls, doc: Document) -> "Department":
        return cls(id=doc.id, name=str(doc.data.get("name", "")))

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name}
