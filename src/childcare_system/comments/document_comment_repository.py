from __future__ import annotations

from typing import Any, Sequence

from ..core import constants
from ..store.model import SERVER_TIMESTAMP
from ..store.repository import DocumentStore
from .model import CommentEntry
from .repository import CommentRepository


class DocumentCommentRepository(CommentRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def create(self, data: dict[str, Any]) -> str:
        # Store clock, not the caller's, orders the thread.
        return self._store.add(constants.COMMENTS, {**data, "created_at": SERVER_TIMESTAMP})

    def list_for_child(self, child_id: str) -> Sequence[CommentEntry]:
        docs = self._store.query(
            constants.COMMENTS, field="child_id", op="==", value=child_id, order_by="created_at"
        )
        return [CommentEntry.from_document(d) for d in docs]

    def delete(self, comment_id: str) -> bool:
        return self._store.delete(constants.COMMENTS, comment_id)
