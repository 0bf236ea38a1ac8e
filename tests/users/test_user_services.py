from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from childcare_system.core import constants
from childcare_system.core.enums import Role
from childcare_system.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from childcare_system.users.document_user_repository import (
    DocumentAccountRepository,
    DocumentGuardianRepository,
    DocumentPinRepository,
    DocumentStaffRepository,
)
from childcare_system.users.model import GuardianIdentity, StaffIdentity, UnresolvedIdentity
from childcare_system.users.provisioning import AccountProvisioningService
from childcare_system.users.service import AuthService, PinService, ProfileService


@pytest.fixture
def repos(store):
    store.set(constants.ACCOUNTS, "admin1", {"email": "admin@example.com", "password_hash": generate_password_hash("secret1"), "display_name": "Admin"})
    store.set(constants.STAFF, "admin1", {"first_name": "Ad", "last_name": "Min", "email": "admin@example.com", "role": "admin"})
    store.set(constants.ACCOUNTS, "emp1", {"email": "emp@example.com", "password_hash": generate_password_hash("secret2"), "display_name": "Emp"})
    store.set(constants.STAFF, "emp1", {"first_name": "Em", "last_name": "Ployee", "email": "emp@example.com", "role": "employee"})
    store.set(constants.ACCOUNTS, "g1", {"email": "parent@example.com", "password_hash": generate_password_hash("secret3"), "display_name": "Pat"})
    store.set(constants.GUARDIANS, "g1", {"first_name": "Pat", "last_name": "Parent", "email": "parent@example.com"})
    store.set(constants.ACCOUNTS, "ghost", {"email": "ghost@example.com", "password_hash": generate_password_hash("secret4"), "display_name": "Ghost"})
    return (
        DocumentAccountRepository(store),
        DocumentGuardianRepository(store),
        DocumentStaffRepository(store),
    )


@pytest.fixture
def auth(repos):
    accounts, guardians, staff = repos
    return AuthService(accounts, guardians, staff)


def test_sign_in_resolves_role(auth):
    assert auth.sign_in("Admin@Example.com", "secret1").role == Role.ADMIN
    assert auth.sign_in("emp@example.com", "secret2").role == Role.STAFF
    assert auth.sign_in("parent@example.com", "secret3").role == Role.GUARDIAN
    assert auth.sign_in("ghost@example.com", "secret4").role is None


def test_sign_in_rejects_bad_credentials(auth):
    with pytest.raises(AuthenticationError):
        auth.sign_in("emp@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        auth.sign_in("nobody@example.com", "secret2")


def test_sign_out_clears_session(auth):
    session = {"user_id": "emp1", "role": "staff", "roster_token": "t"}
    auth.sign_out(session)
    assert session == {}


def test_resolve_identity_variants(auth):
    assert isinstance(auth.resolve_identity("admin1"), StaffIdentity)
    assert isinstance(auth.resolve_identity("g1"), GuardianIdentity)
    assert auth.resolve_identity("ghost") == UnresolvedIdentity(uid="ghost")


def test_profile_service_permissions(repos):
    _, guardians, staff = repos
    profiles = ProfileService(guardians, staff)

    profiles.update_guardian("g1", {"phone": "+45 1234"})
    assert profiles.get_guardian("g1").phone == "+45 1234"

    with pytest.raises(ValidationError):
        profiles.update_guardian("g1", {"email": "x@example.com"})

    with pytest.raises(AuthorizationError):
        profiles.update_staff(current_role=Role.STAFF, uid="emp1", data={"role": "admin"})
    profiles.update_staff(current_role=Role.ADMIN, uid="emp1", data={"role": "admin"})
    assert profiles.get_staff("emp1").is_admin

    with pytest.raises(AuthorizationError):
        profiles.delete_guardian(current_role=Role.STAFF, uid="g1")
    profiles.delete_guardian(current_role=Role.ADMIN, uid="g1")
    with pytest.raises(NotFoundError):
        profiles.get_guardian("g1")


def test_pin_lifecycle(store, repos):
    pins = PinService(DocumentPinRepository(store))

    assert pins.has_pin("g1") is False
    with pytest.raises(ValidationError):
        pins.set_pin("g1", "12a4")
    with pytest.raises(ValidationError):
        pins.set_pin("g1", "1234", confirm="4321")

    pins.set_pin("g1", "1234", confirm="1234")
    assert pins.has_pin("g1") is True
    assert pins.verify_pin("g1", "1234") is True
    assert pins.verify_pin("g1", "0000") is False

    pins.set_pin("emp1", "5678")
    assert pins.verify_pin("emp1", "5678") is True

    with pytest.raises(NotFoundError):
        pins.set_pin("ghost", "1234")


def test_admin_creates_parent_account_atomically(store, repos, auth):
    accounts, guardians, staff = repos
    provisioning = AccountProvisioningService(accounts, guardians, staff, auth)

    uid = provisioning.admin_create_user(
        requester_uid="admin1",
        email="New.Parent@example.com",
        password="longenough",
        display_name="New Parent",
        role="parent",
        additional_fields={"first_name": "New", "last_name": "Parent", "is_admin": True},
    )

    assert accounts.get_by_id(uid).email == "new.parent@example.com"
    profile = guardians.get_by_id(uid)
    assert profile.full_name == "New Parent"
    assert store.get(constants.GUARDIANS, uid).data.get("is_admin") is None
    assert auth.sign_in("new.parent@example.com", "longenough").role == Role.GUARDIAN


def test_admin_creates_staff_account(repos, auth):
    accounts, guardians, staff = repos
    provisioning = AccountProvisioningService(accounts, guardians, staff, auth)

    uid = provisioning.admin_create_user(
        requester_uid="admin1", email="t@example.com", password="longenough", display_name="T", role="employee"
    )

    assert staff.get_by_id(uid).is_admin is False
    assert guardians.get_by_id(uid) is None


def test_provisioning_rules(repos, auth):
    accounts, guardians, staff = repos
    provisioning = AccountProvisioningService(accounts, guardians, staff, auth)
    base = dict(email="x@example.com", password="longenough", display_name="X", role="parent")

    with pytest.raises(AuthorizationError):
        provisioning.admin_create_user(requester_uid=None, **base)
    with pytest.raises(AuthorizationError):
        provisioning.admin_create_user(requester_uid="emp1", **base)
    with pytest.raises(AuthorizationError):
        provisioning.admin_create_user(requester_uid="g1", **base)
    with pytest.raises(ValidationError):
        provisioning.admin_create_user(requester_uid="admin1", **{**base, "role": "superuser"})
    with pytest.raises(ValidationError):
        provisioning.admin_create_user(requester_uid="admin1", **{**base, "email": "emp@example.com"})
    with pytest.raises(ValidationError):
        provisioning.admin_create_user(requester_uid="admin1", **{**base, "password": "123"})
