from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core import constants
from ..store.repository import DocumentStore
from .model import EventEntry
from .repository import EventRepository


class DocumentEventRepository(EventRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, event_id: str) -> Optional[EventEntry]:
        doc = self._store.get(constants.EVENTS, event_id)
        return EventEntry.from_document(doc) if doc else None

    def list_all(self) -> Sequence[EventEntry]:
        return [EventEntry.from_document(d) for d in self._store.query(constants.EVENTS, order_by="date")]

    def list_for_department(self, department: str) -> Sequence[EventEntry]:
        docs = self._store.query(constants.EVENTS, field="department", op="==", value=department, order_by="date")
        return [EventEntry.from_document(d) for d in docs]

    def create(self, data: dict[str, Any]) -> str:
        return self._store.add(constants.EVENTS, data)

    def update(self, event_id: str, data: dict[str, Any]) -> None:
        self._store.update(constants.EVENTS, event_id, data)

    def delete(self, event_id: str) -> bool:
        return self._store.delete(constants.EVENTS, event_id)
