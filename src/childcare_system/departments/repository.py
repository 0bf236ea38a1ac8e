from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def get_by_id(self, dept_id: str) -> Optional[Department]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def create(self, name: str) -> str:
        raise NotImplementedError

    def rename(self, dept_id: str, name: str) -> None:
        raise NotImplementedError

    def delete(self, dept_id: str) -> bool:
        raise NotImplementedError
