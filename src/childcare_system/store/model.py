from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class _ServerTimestamp:
    """Sentinel replaced with the store's clock when a document is written."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class Document:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Write:
    """A full-document set used by atomic multi-document writes."""

    collection: str
    doc_id: str
    data: dict[str, Any]


def subcollection(parent_collection: str, parent_id: str, name: str) -> str:
    """Path of a child-scoped collection, e.g. ``children/<id>/absences``."""
    return f"{parent_collection}/{parent_id}/{name}"


def new_document_id() -> str:
    return uuid.uuid4().hex[:20]


def resolve_server_timestamps(data: dict[str, Any], now: datetime) -> dict[str, Any]:
    return {k: (now if v is SERVER_TIMESTAMP else v) for k, v in data.items()}
