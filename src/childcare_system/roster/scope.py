from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..children.model import ChildRecord
from ..children.repository import ChildRepository


@dataclass(frozen=True)
class RosterScope:
    """Which children a roster session sees.

    At most one of ``guardian_id`` / ``department`` is set; neither means
    the whole facility (staff view).
    """

    guardian_id: Optional[str] = None
    department: Optional[str] = None

    @classmethod
    def everyone(cls) -> "RosterScope":
        return cls()

    @classmethod
    def for_guardian(cls, guardian_id: str) -> "RosterScope":
        return cls(guardian_id=guardian_id)

    @classmethod
    def for_department(cls, department: str) -> "RosterScope":
        return cls(department=department)

    def fetch(self, children: ChildRepository) -> Sequence[ChildRecord]:
        if self.guardian_id is not None:
            return children.list_for_guardian(self.guardian_id)
        if self.department is not None:
            return children.list_for_department(self.department)
        return children.list_all()

    def describe(self) -> str:
        if self.guardian_id is not None:
            return f"guardian:{self.guardian_id}"
        if self.department is not None:
            return f"department:{self.department}"
        return "all"
