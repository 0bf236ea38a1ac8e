from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import AbsenceType
from .model import AbsenceEntry, ChildRecord


class ChildRepository(Protocol):
    """Repository interface for child documents.

    Note (DIP): roster and services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, child_id: str) -> Optional[ChildRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ChildRecord]:
        raise NotImplementedError

    def list_for_guardian(self, guardian_id: str) -> Sequence[ChildRecord]:
        raise NotImplementedError

    def list_for_department(self, department: str) -> Sequence[ChildRecord]:
        raise NotImplementedError

    def create(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def update(self, child_id: str, data: dict[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, child_id: str) -> bool:
        raise NotImplementedError

    def set_checked_in(self, child_id: str, checked_in: bool) -> None:
        """Point write of the ``checked_in`` field only."""

        raise NotImplementedError


class AbsenceLogRepository(Protocol):
    """Append-only absence history stored under ``children/<id>/absences``."""

    def append(self, child_id: str, *, absence_type: AbsenceType, from_date: str, to_date: str) -> str:
        raise NotImplementedError

    def list_for_child(self, child_id: str) -> Sequence[AbsenceEntry]:
        raise NotImplementedError
