from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import CommentEntry
from .repository import CommentRepository

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, comments: CommentRepository):
        self._comments = comments

    def add_comment(self, child_id: str, *, author_id: str, author_name: str, text: str) -> str:
        comment_id = self._comments.create(
            {
                "child_id": require_non_empty(child_id, "Child"),
                "text": require_non_empty(text, "Comment"),
                "created_by_id": author_id,
                "created_by_name": (author_name or "").strip() or "Unknown user",
            }
        )
        logger.info("Comment %s added on child %s", comment_id, child_id)
        return comment_id

    def list_for_child(self, child_id: str) -> Sequence[CommentEntry]:
        return self._comments.list_for_child(child_id)

    def delete_comment(self, comment_id: str) -> None:
        if not self._comments.delete(comment_id):
            raise NotFoundError("Comment not found")
