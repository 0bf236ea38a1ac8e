from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import GuestLink


class GuestLinkRepository(Protocol):
    def create(self, child_id: str, *, name: str, phone: str, parent_id: Optional[str]) -> str:
        raise NotImplementedError

    def list_for_child(self, child_id: str) -> Sequence[GuestLink]:
        raise NotImplementedError
