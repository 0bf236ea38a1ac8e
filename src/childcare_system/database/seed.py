from __future__ import annotations

import logging

from werkzeug.security import generate_password_hash

from ..container import Container
from ..core.enums import Role, StaffRole
from ..store.model import new_document_id

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo1234"


def _upsert_user(container: Container, *, email: str, display_name: str, first_name: str, last_name: str,
                 staff_role: StaffRole | None = None, department: str = "") -> str:
    existing = container.accounts_repo.get_by_email(email)
    if existing:
        return existing.uid

    uid = new_document_id()
    profile = {"first_name": first_name, "last_name": last_name, "email": email}
    if staff_role is None:
        profile_write = container.guardians_repo.profile_write(uid, profile)
    else:
        profile_write = container.staff_repo.profile_write(
            uid, {**profile, "role": staff_role.value, "department": department}
        )
    account_write = container.accounts_repo.account_write(
        uid, email=email, password_hash=generate_password_hash(DEMO_PASSWORD), display_name=display_name
    )
    container.accounts_repo.commit([account_write, profile_write])
    return uid


def ensure_demo_data(container: Container) -> None:
    """Idempotent: a demo admin, employee and guardian plus two groups of children."""

    if container.accounts_repo.get_by_email("admin@example.com"):
        return

    departments = {d.name: d.id for d in container.department_service.list_all()}
    for name in ("Bears", "Owls"):
        if name not in departments:
            departments[name] = container.department_service.create(current_role=Role.ADMIN, name=name)

    _upsert_user(container, email="admin@example.com", display_name="Admin Demo",
                 first_name="Admin", last_name="Demo", staff_role=StaffRole.ADMIN)
    _upsert_user(container, email="employee@example.com", display_name="Erin Employee",
                 first_name="Erin", last_name="Employee", staff_role=StaffRole.EMPLOYEE,
                 department=departments["Bears"])
    guardian_uid = _upsert_user(container, email="parent@example.com", display_name="Pat Parent",
                                first_name="Pat", last_name="Parent")

    for first_name, dob, dept in (
        ("Ada", "2021-03-14", "Bears"),
        ("Leo", "2020-11-02", "Bears"),
        ("Mia", "2021-07-21", "Owls"),
    ):
        container.child_service.create_child(
            first_name=first_name,
            last_name="Parent",
            date_of_birth=dob,
            department=departments[dept],
            guardians=[guardian_uid],
        )

    logger.info("Demo data ready (password for all demo accounts: %s)", DEMO_PASSWORD)
