from __future__ import annotations

from typing import Optional, Sequence

from ..core import constants
from ..store.model import SERVER_TIMESTAMP, subcollection
from ..store.repository import DocumentStore
from .model import GuestLink
from .repository import GuestLinkRepository


class DocumentGuestLinkRepository(GuestLinkRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def _collection(self, child_id: str) -> str:
        return subcollection(constants.CHILDREN, child_id, constants.GUEST_LINKS)

    def create(self, child_id: str, *, name: str, phone: str, parent_id: Optional[str]) -> str:
        return self._store.add(
            self._collection(child_id),
            {"name": name, "phone": phone, "sent_at": SERVER_TIMESTAMP, "parent_id": parent_id},
        )

    def list_for_child(self, child_id: str) -> Sequence[GuestLink]:
        docs = self._store.query(self._collection(child_id), order_by="sent_at")
        return [GuestLink.from_document(child_id, d) for d in docs]
