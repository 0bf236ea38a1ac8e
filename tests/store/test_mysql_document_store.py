from __future__ import annotations

import json

import mysql.connector
import pytest

from childcare_system.core.exceptions import DocumentNotFoundError, StoreError
from childcare_system.store.model import SERVER_TIMESTAMP
from childcare_system.store.mysql_document_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.fail:
            raise mysql.connector.Error("server has gone away")

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=(), fail=False):
        self.rows = list(rows)
        self.fail = fail
        self.executed = []
        self.committed = 0
        self.rolled_back = 0

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed += 1

    def rollback(self):
        self.rolled_back += 1

    def close(self):
        pass


class FakeFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self, *, with_database=True):
        return self.conn


def test_get_decodes_json_row():
    conn = FakeConnection(rows=[{"doc_id": "c1", "data": json.dumps({"first_name": "Ada"})}])

    doc = MySQLDocumentStore(FakeFactory(conn)).get("children", "c1")

    assert doc.id == "c1"
    assert doc.data == {"first_name": "Ada"}


def test_array_contains_query_uses_json_contains():
    conn = FakeConnection(rows=[{"doc_id": "c1", "data": {"guardians": ["g1"]}}])

    docs = MySQLDocumentStore(FakeFactory(conn)).query("children", field="guardians", op="array-contains", value="g1")

    sql, params = conn.executed[0]
    assert "JSON_CONTAINS(JSON_EXTRACT(data, %s), %s)" in sql
    assert params == ("children", "$.guardians", '"g1"')
    assert [d.id for d in docs] == ["c1"]


def test_query_rejects_unsafe_field_names():
    store = MySQLDocumentStore(FakeFactory(FakeConnection()))

    with pytest.raises(StoreError):
        store.query("children", field="x') OR 1=1 --", value="a")


def test_set_resolves_server_timestamp_before_serializing():
    conn = FakeConnection()

    MySQLDocumentStore(FakeFactory(conn)).set("comments", "k1", {"text": "hi", "created_at": SERVER_TIMESTAMP})

    _, params = conn.executed[0]
    stored = json.loads(params[2])
    assert stored["text"] == "hi"
    assert isinstance(stored["created_at"], str)
    assert conn.committed == 1


def test_update_of_missing_document_rolls_back():
    conn = FakeConnection(rows=[])

    with pytest.raises(DocumentNotFoundError):
        MySQLDocumentStore(FakeFactory(conn)).update("children", "missing", {"checked_in": True})
    assert conn.rolled_back == 1


def test_connector_errors_become_store_errors():
    store = MySQLDocumentStore(FakeFactory(FakeConnection(fail=True)))

    with pytest.raises(StoreError):
        store.get("children", "c1")
    with pytest.raises(StoreError):
        store.delete("children", "c1")
