from __future__ import annotations

import copy
import threading
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import DocumentNotFoundError, StoreError
from .model import Document, Write, new_document_id, resolve_server_timestamps
from .repository import DocumentStore


def _matches(data: dict[str, Any], field: Optional[str], op: str, value: Any) -> bool:
    if field is None:
        return True
    current = data.get(field)
    if op == "==":
        return current == value
    if op == "array-contains":
        return isinstance(current, list) and value in current
    raise StoreError(f"Unsupported query operator: {op!r}")


def _order_key(field: str):
    def key(doc: Document):
        v = doc.data.get(field)
        return (v is not None, v)

    return key


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store.

    Used by the development profile and tests. Documents are deep-copied on
    the way in and out so callers never share mutable state with the store.
    """

    def __init__(self, *, clock: Callable = now_local):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _col(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._col(collection).get(doc_id)
            if data is None:
                return None
            return Document(id=doc_id, data=copy.deepcopy(data))

    def query(
        self,
        collection: str,
        *,
        field: Optional[str] = None,
        op: str = "==",
        value: Any = None,
        order_by: Optional[str] = None,
    ) -> Sequence[Document]:
        with self._lock:
            docs = [
                Document(id=doc_id, data=copy.deepcopy(data))
                for doc_id, data in self._col(collection).items()
                if _matches(data, field, op, value)
            ]
        if order_by:
            docs.sort(key=_order_key(order_by))
        return docs

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = new_document_id()
        self.set(collection, doc_id, data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._col(collection)[doc_id] = copy.deepcopy(resolve_server_timestamps(data, self._clock()))

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            current = self._col(collection).get(doc_id)
            if current is None:
                raise DocumentNotFoundError(f"{collection}/{doc_id} does not exist")
            current.update(copy.deepcopy(resolve_server_timestamps(data, self._clock())))

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._col(collection).pop(doc_id, None) is not None

    def set_many(self, writes: Sequence[Write]) -> None:
        now = self._clock()
        with self._lock:
            for w in writes:
                self._col(w.collection)[w.doc_id] = copy.deepcopy(resolve_server_timestamps(w.data, now))
