from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import EventEntry


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[EventEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[EventEntry]:
        raise NotImplementedError

    def list_for_department(self, department: str) -> Sequence[EventEntry]:
        raise NotImplementedError

    def create(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def update(self, event_id: str, data: dict[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, event_id: str) -> bool:
        raise NotImplementedError
