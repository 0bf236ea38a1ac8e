from __future__ import annotations

import json
import re
from datetime import date, datetime
from typing import Any, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_local
from ..core.exceptions import DocumentNotFoundError, StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Document, Write, new_document_id, resolve_server_timestamps
from .repository import DocumentStore

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(data: dict[str, Any]) -> str:
    return json.dumps(data, default=_json_default)


def _loads(raw: Any) -> dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    return json.loads(raw) if isinstance(raw, str) else dict(raw or {})


def _json_path(field: str) -> str:
    if not _FIELD_RE.match(field):
        raise StoreError(f"Invalid field name: {field!r}")
    return f"$.{field}"


class MySQLDocumentStore(DocumentStore):
    """Document store backed by a single ``documents`` table with a JSON column.

    Timestamps are serialized as ISO strings; readers normalize them with
    ``parse_timestamp``. Connector errors are re-raised as StoreError.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_id, data FROM documents WHERE collection=%s AND doc_id=%s",
                    (collection, doc_id),
                )
                r = fetchone(cur)
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e
        if not r:
            return None
        return Document(id=r["doc_id"], data=_loads(r["data"]))

    def query(
        self,
        collection: str,
        *,
        field: Optional[str] = None,
        op: str = "==",
        value: Any = None,
        order_by: Optional[str] = None,
    ) -> Sequence[Document]:
        clauses = ["collection=%s"]
        params: list[object] = [collection]
        if field is not None:
            if op == "==":
                clauses.append("JSON_EXTRACT(data, %s) = CAST(%s AS JSON)")
            elif op == "array-contains":
                clauses.append("JSON_CONTAINS(JSON_EXTRACT(data, %s), %s)")
            else:
                raise StoreError(f"Unsupported query operator: {op!r}")
            params.extend([_json_path(field), json.dumps(value, default=_json_default)])

        where = " AND ".join(clauses)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT doc_id, data FROM documents WHERE {where} ORDER BY created_at ASC",
                    tuple(params),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e

        docs = [Document(id=r["doc_id"], data=_loads(r["data"])) for r in rows]
        if order_by:
            docs.sort(key=lambda d: (d.data.get(order_by) is not None, d.data.get(order_by)))
        return docs

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = new_document_id()
        self.set(collection, doc_id, data)
        return doc_id

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self.set_many([Write(collection=collection, doc_id=doc_id, data=data)])

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT data FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                r = fetchone(cur)
                if not r:
                    raise DocumentNotFoundError(f"{collection}/{doc_id} does not exist")

                merged = _loads(r["data"])
                merged.update(resolve_server_timestamps(data, now_local()))
                cur.execute(
                    "UPDATE documents SET data=%s WHERE collection=%s AND doc_id=%s",
                    (_dumps(merged), collection, doc_id),
                )
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e

    def delete(self, collection: str, doc_id: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e

    def set_many(self, writes: Sequence[Write]) -> None:
        now = now_local()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for w in writes:
                    cur.execute(
                        """
                        INSERT INTO documents(collection, doc_id, data)
                        VALUES(%s,%s,%s)
                        ON DUPLICATE KEY UPDATE data=VALUES(data)
                        """,
                        (w.collection, w.doc_id, _dumps(resolve_server_timestamps(w.data, now))),
                    )
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e
