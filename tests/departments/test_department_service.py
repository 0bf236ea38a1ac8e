from __future__ import annotations

import pytest

from childcare_system.core.enums import Role
from childcare_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from childcare_system.departments.document_department_repository import DocumentDepartmentRepository
from childcare_system.departments.service import DepartmentService


@pytest.fixture
def departments(store, children_repo):
    return DepartmentService(DocumentDepartmentRepository(store), children_repo)


def test_create_and_list_sorted(departments):
    departments.create(current_role=Role.ADMIN, name="owls")
    departments.create(current_role=Role.ADMIN, name="Bears")

    assert [d.name for d in departments.list_all()] == ["Bears", "owls"]

    with pytest.raises(ValidationError):
        departments.create(current_role=Role.ADMIN, name="OWLS")
    with pytest.raises(AuthorizationError):
        departments.create(current_role=Role.STAFF, name="Foxes")


def test_rename(departments):
    dept_id = departments.create(current_role=Role.ADMIN, name="Bears")

    departments.rename(current_role=Role.ADMIN, dept_id=dept_id, name="Brown bears")

    assert departments.get(dept_id).name == "Brown bears"
    with pytest.raises(NotFoundError):
        departments.rename(current_role=Role.ADMIN, dept_id="missing", name="X")


def test_delete_is_refused_while_children_are_assigned(departments, children_repo):
    dept_id = departments.create(current_role=Role.ADMIN, name="Bears")
    child_id = children_repo.create({"first_name": "A", "last_name": "B", "date_of_birth": "2021-01-01", "department": dept_id})

    with pytest.raises(ValidationError):
        departments.delete(current_role=Role.ADMIN, dept_id=dept_id)

    children_repo.delete(child_id)
    departments.delete(current_role=Role.ADMIN, dept_id=dept_id)
    with pytest.raises(NotFoundError):
        departments.get(dept_id)
