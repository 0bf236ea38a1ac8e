from __future__ import annotations

from datetime import datetime

import pytest

from childcare_system.core.exceptions import DocumentNotFoundError
from childcare_system.store.memory_store import InMemoryDocumentStore
from childcare_system.store.model import SERVER_TIMESTAMP, Write, subcollection


def test_server_timestamp_is_resolved_on_write():
    store = InMemoryDocumentStore(clock=lambda: datetime(2026, 3, 10, 9, 0))

    doc_id = store.add("comments", {"text": "hi", "created_at": SERVER_TIMESTAMP})

    assert store.get("comments", doc_id).data["created_at"] == datetime(2026, 3, 10, 9, 0)


def test_update_merges_and_requires_existing_document(store):
    store.set("children", "c1", {"first_name": "A", "checked_in": False})

    store.update("children", "c1", {"checked_in": True})
    assert store.get("children", "c1").data == {"first_name": "A", "checked_in": True}

    with pytest.raises(DocumentNotFoundError):
        store.update("children", "missing", {"checked_in": True})


def test_queries(store):
    store.set("children", "c1", {"guardians": ["g1", "g2"], "department": "d1", "n": 2})
    store.set("children", "c2", {"guardians": ["g2"], "department": "d2", "n": 1})

    assert [d.id for d in store.query("children", field="guardians", op="array-contains", value="g1")] == ["c1"]
    assert [d.id for d in store.query("children", field="department", op="==", value="d2")] == ["c2"]
    assert [d.id for d in store.query("children", order_by="n")] == ["c2", "c1"]


def test_documents_are_copied_in_and_out(store):
    data = {"allergies": ["nuts"]}
    store.set("children", "c1", data)
    data["allergies"].append("milk")

    loaded = store.get("children", "c1")
    loaded.data["allergies"].append("eggs")

    assert store.get("children", "c1").data["allergies"] == ["nuts"]


def test_subcollections_are_separate_collections(store):
    path = subcollection("children", "c1", "absences")
    store.add(path, {"type": "sickness"})

    assert path == "children/c1/absences"
    assert len(store.query(path)) == 1
    assert store.query("children/c2/absences") == []


def test_set_many_and_delete(store):
    store.set_many([Write("accounts", "u1", {"email": "a@example.com"}), Write("parents", "u1", {"first_name": "A"})])

    assert store.get("accounts", "u1") is not None
    assert store.get("parents", "u1") is not None
    assert store.delete("parents", "u1") is True
    assert store.delete("parents", "u1") is False
