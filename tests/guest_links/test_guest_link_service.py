from __future__ import annotations

import pytest

from childcare_system.core import constants
from childcare_system.core.exceptions import OperationFailedError, StoreError, ValidationError
from childcare_system.guest_links.document_guest_link_repository import DocumentGuestLinkRepository
from childcare_system.guest_links.service import GuestLinkService
from childcare_system.users.document_user_repository import DocumentGuardianRepository


class BrokenLinks:
    def create(self, child_id, *, name, phone, parent_id):
        raise StoreError("permission denied")

    def list_for_child(self, child_id):
        return []


@pytest.fixture
def guardians(store):
    store.set(constants.GUARDIANS, "g1", {"first_name": "Gina", "last_name": "G", "email": "g@example.com"})
    return DocumentGuardianRepository(store)


@pytest.fixture
def links(store, guardians):
    return GuestLinkService(DocumentGuestLinkRepository(store), guardians)


def test_guest_link_is_attributed_to_the_guardian(links, store):
    link_id = links.send_guest_link("c1", name=" Grandma ", phone=" 555 ", requester_uid="g1")

    saved = links.list_for_child("c1")
    assert [link.id for link in saved] == [link_id]
    assert (saved[0].name, saved[0].phone, saved[0].parent_id) == ("Grandma", "555", "g1")
    assert saved[0].sent_at is not None
    assert store.get("children/c1/guestLinks", link_id) is not None


def test_staff_requester_leaves_link_unattributed(links):
    links.send_guest_link("c1", name="Uncle", phone="555", requester_uid="s1")

    assert links.list_for_child("c1")[0].parent_id is None


def test_validation_messages(links):
    with pytest.raises(ValidationError, match="No child selected"):
        links.send_guest_link(None, name="A", phone="1", requester_uid="g1")
    with pytest.raises(ValidationError, match="a name and a phone number"):
        links.send_guest_link("c1", name="A", phone="  ", requester_uid="g1")


def test_store_failure_becomes_create_failed(guardians):
    service = GuestLinkService(BrokenLinks(), guardians)

    with pytest.raises(OperationFailedError, match="Could not send the guest link"):
        service.send_guest_link("c1", name="A", phone="1", requester_uid="g1")
