from __future__ import annotations

from typing import Optional, Sequence

from ..core import constants
from ..store.repository import DocumentStore
from .model import Department
from .repository import DepartmentRepository


class DocumentDepartmentRepository(DepartmentRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, dept_id: str) -> Optional[Department]:
        doc = self._store.get(constants.DEPARTMENTS, dept_id)
        return Department.from_document(doc) if doc else None

    def list_all(self) -> Sequence[Department]:
        return [Department.from_document(d) for d in self._store.query(constants.DEPARTMENTS)]

    def create(self, name: str) -> str:
        return self._store.add(constants.DEPARTMENTS, {"name": name})

    def rename(self, dept_id: str, name: str) -> None:
        self._store.update(constants.DEPARTMENTS, dept_id, {"name": name})

    def delete(self, dept_id: str) -> bool:
        return self._store.delete(constants.DEPARTMENTS, dept_id)
