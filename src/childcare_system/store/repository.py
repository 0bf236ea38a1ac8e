from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Document, Write


class DocumentStore(Protocol):
    """Remote document database contract.

    Every call is an independent point request. There are no cross-document
    transactions except ``set_many``, which exists for server-side account
    provisioning only.
    """

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def query(
        self,
        collection: str,
        *,
        field: Optional[str] = None,
        op: str = "==",
        value: Any = None,
        order_by: Optional[str] = None,
    ) -> Sequence[Document]:
        """Supported ops: ``==`` and ``array-contains``; no field returns the whole collection."""

        raise NotImplementedError

    def add(self, collection: str, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        raise NotImplementedError

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Merge ``data`` into an existing document; raises DocumentNotFoundError if absent."""

        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> bool:
        raise NotImplementedError

    def set_many(self, writes: Sequence[Write]) -> None:
        raise NotImplementedError
