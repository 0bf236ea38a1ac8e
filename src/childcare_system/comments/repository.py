from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import CommentEntry


class CommentRepository(Protocol):
    def create(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def list_for_child(self, child_id: str) -> Sequence[CommentEntry]:
        """Oldest first."""

        raise NotImplementedError

    def delete(self, comment_id: str) -> bool:
        raise NotImplementedError
