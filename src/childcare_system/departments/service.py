from __future__ import annotations

from typing import Optional, Sequence

from ..children.repository import ChildRepository
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Department
from .repository import DepartmentRepository


class DepartmentService:
    """Use case: the groups (rooms) children and staff belong to. Writes are admin-only."""

    def __init__(self, departments: DepartmentRepository, children: ChildRepository):
        self._departments = departments
        self._children = children

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))

    def _ensure_unique(self, name: str, *, exclude_id: Optional[str] = None) -> None:
        for dept in self._departments.list_all():
            if dept.id != exclude_id and dept.name.lower() == name.lower():
                raise ValidationError("A department with this name already exists")

    def create(self, *, current_role: Optional[Role], name: str) -> str:
        self._require_admin(current_role)
        name = require_non_empty(name, "Department name")
        self._ensure_unique(name)
        return self._departments.create(name)

    def get(self, dept_id: str) -> Department:
        dept = self._departments.get_by_id(dept_id)
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def list_all(self) -> Sequence[Department]:
        return sorted(self._departments.list_all(), key=lambda d: d.name.lower())

    def rename(self, *, current_role: Optional[Role], dept_id: str, name: str) -> None:
        self._require_admin(current_role)
        self.get(dept_id)
        name = require_non_empty(name, "Department name")
        self._ensure_unique(name, exclude_id=dept_id)
        self._departments.rename(dept_id, name)

    def delete(self, *, current_role: Optional[Role], dept_id: str) -> None:
        self._require_admin(current_role)
        self.get(dept_id)
        if self._children.list_for_department(dept_id):
            raise ValidationError("Cannot delete a department that still has children")
        self._departments.delete(dept_id)
