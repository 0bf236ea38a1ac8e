from __future__ import annotations

import pytest

from childcare_system.comments.document_comment_repository import DocumentCommentRepository
from childcare_system.comments.service import CommentService
from childcare_system.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def comments(store):
    return CommentService(DocumentCommentRepository(store))


def test_comments_are_listed_oldest_first(comments):
    first = comments.add_comment("c1", author_id="s1", author_name="Sam", text="Slept well")
    second = comments.add_comment("c1", author_id="g1", author_name="", text=" Thanks! ")
    comments.add_comment("c2", author_id="s1", author_name="Sam", text="Other child")

    thread = comments.list_for_child("c1")

    assert [c.id for c in thread] == [first, second]
    assert thread[1].text == "Thanks!"
    assert thread[1].created_by_name == "Unknown user"
    assert thread[0].created_at < thread[1].created_at


def test_empty_comment_is_rejected(comments):
    with pytest.raises(ValidationError):
        comments.add_comment("c1", author_id="s1", author_name="Sam", text="   ")


def test_delete_comment(comments):
    comment_id = comments.add_comment("c1", author_id="s1", author_name="Sam", text="Hi")

    comments.delete_comment(comment_id)

    assert comments.list_for_child("c1") == []
    with pytest.raises(NotFoundError):
        comments.delete_comment(comment_id)
