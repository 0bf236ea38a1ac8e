from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core import constants
from ..core.enums import AbsenceType
from ..store.model import SERVER_TIMESTAMP, subcollection
from ..store.repository import DocumentStore
from .model import AbsenceEntry, ChildRecord
from .repository import AbsenceLogRepository, ChildRepository


class DocumentChildRepository(ChildRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, child_id: str) -> Optional[ChildRecord]:
        doc = self._store.get(constants.CHILDREN, child_id)
        return ChildRecord.from_document(doc) if doc else None

    def list_all(self) -> Sequence[ChildRecord]:
        return [ChildRecord.from_document(d) for d in self._store.query(constants.CHILDREN)]

    def list_for_guardian(self, guardian_id: str) -> Sequence[ChildRecord]:
        docs = self._store.query(constants.CHILDREN, field="guardians", op="array-contains", value=guardian_id)
        return [ChildRecord.from_document(d) for d in docs]

    def list_for_department(self, department: str) -> Sequence[ChildRecord]:
        docs = self._store.query(constants.CHILDREN, field="department", op="==", value=department)
        return [ChildRecord.from_document(d) for d in docs]

    def create(self, data: dict[str, Any]) -> str:
        return self._store.add(constants.CHILDREN, data)

    def update(self, child_id: str, data: dict[str, Any]) -> None:
        self._store.update(constants.CHILDREN, child_id, data)

    def delete(self, child_id: str) -> bool:
        return self._store.delete(constants.CHILDREN, child_id)

    def set_checked_in(self, child_id: str, checked_in: bool) -> None:
        self._store.update(constants.CHILDREN, child_id, {"checked_in": bool(checked_in)})


class DocumentAbsenceLogRepository(AbsenceLogRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def append(self, child_id: str, *, absence_type: AbsenceType, from_date: str, to_date: str) -> str:
        return self._store.add(
            subcollection(constants.CHILDREN, child_id, constants.ABSENCES),
            {
                "type": absence_type.value,
                "from_date": from_date,
                "to_date": to_date,
                "created_at": SERVER_TIMESTAMP,
            },
        )

    def list_for_child(self, child_id: str) -> Sequence[AbsenceEntry]:
        docs = self._store.query(
            subcollection(constants.CHILDREN, child_id, constants.ABSENCES),
            order_by="created_at",
        )
        return [AbsenceEntry.from_document(child_id, d) for d in docs]
