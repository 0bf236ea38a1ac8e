from __future__ import annotations

import pytest

from childcare_system.children.service import ChildService, normalize_allergies
from childcare_system.core import constants
from childcare_system.core.enums import AbsenceType
from childcare_system.core.exceptions import NotFoundError, ValidationError
from childcare_system.images.service import ImageService
from childcare_system.images.storage import LocalObjectStorage
from childcare_system.users.document_user_repository import DocumentGuardianRepository, DocumentStaffRepository
from childcare_system.users.service import ProfileService


class BrokenStorage:
    def upload(self, path, data):
        raise OSError("disk full")

    def get_download_url(self, path):
        return f"/files/{path}"


@pytest.fixture
def guardians(store):
    store.set(constants.GUARDIANS, "g1", {"first_name": "Gina", "last_name": "G", "email": "g@example.com"})
    return ProfileService(DocumentGuardianRepository(store), DocumentStaffRepository(store))


@pytest.fixture
def service(children_repo, absences_repo, guardians, tmp_path):
    images = ImageService(LocalObjectStorage(tmp_path, base_url="/files"))
    return ChildService(children_repo, absences_repo, images=images, guardian_links=guardians)


def test_create_child_links_guardians(service, guardians):
    child_id = service.create_child(
        first_name=" Ada ",
        last_name="Lovelace",
        date_of_birth="2021-03-14",
        department="d1",
        guardians=["g1"],
        allergies=["Nuts", " nuts", ""],
    )

    child = service.get_child(child_id)
    assert child.full_name == "Ada Lovelace"
    assert child.checked_in is False
    assert child.allergies == ("Nuts",)
    assert guardians.get_guardian("g1").children == (child_id,)

    # Linking twice keeps one entry.
    guardians.add_child_to_guardian("g1", child_id)
    assert guardians.get_guardian("g1").children == (child_id,)


def test_create_child_validates(service):
    with pytest.raises(ValidationError):
        service.create_child(first_name="", last_name="X", date_of_birth="2021-01-01", department="d1")
    with pytest.raises(ValidationError):
        service.create_child(first_name="A", last_name="X", date_of_birth="14/03/2021", department="d1")


def test_update_child_is_partial(service, seeded_children):
    anna = seeded_children["anna"]

    service.update_child(anna, {"last_name": "Berg"})

    child = service.get_child(anna)
    assert child.last_name == "Berg"
    assert child.first_name == "Anna"

    with pytest.raises(ValidationError):
        service.update_child(anna, {"checked_in": True})
    with pytest.raises(NotFoundError):
        service.update_child("missing", {"last_name": "X"})


def test_update_allergies(service, seeded_children):
    assert service.update_allergies(seeded_children["anna"], ["Milk", "milk", " Eggs "]) == ["Milk", "Eggs"]
    assert service.get_child(seeded_children["anna"]).allergies == ("Milk", "Eggs")
    assert normalize_allergies([]) == []


def test_profile_image_stores_path_not_url(service, seeded_children, tmp_path, png_bytes):
    anna = seeded_children["anna"]

    path = service.update_profile_image(anna, png_bytes, "photo.PNG")

    assert path.startswith("images/") and path.endswith(".png")
    assert service.get_child(anna).image_uri == path
    assert (tmp_path / path).read_bytes() == png_bytes


def test_failed_upload_leaves_child_untouched(children_repo, absences_repo, seeded_children, jpeg_bytes):
    service = ChildService(children_repo, absences_repo, images=ImageService(BrokenStorage()))

    assert service.update_profile_image(seeded_children["anna"], jpeg_bytes, "photo.jpg") is None
    assert service.get_child(seeded_children["anna"]).image_uri == ""


def test_unsupported_image_type_is_rejected(service, seeded_children, png_bytes):
    with pytest.raises(ValidationError):
        service.update_profile_image(seeded_children["anna"], png_bytes, "notes.txt")


def test_image_content_must_match_an_image_type(service, seeded_children, tmp_path):
    anna = seeded_children["anna"]

    with pytest.raises(ValidationError):
        service.update_profile_image(anna, b"<?php echo 'hi'; ?>", "photo.png")
    with pytest.raises(ValidationError):
        service.update_profile_image(anna, b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n", "photo.jpg")

    assert service.get_child(anna).image_uri == ""
    assert not (tmp_path / "images").exists()


def test_absence_history_and_delete(service, absences_repo, seeded_children):
    anna = seeded_children["anna"]
    absences_repo.append(anna, absence_type=AbsenceType.SICKNESS, from_date="2026-03-02", to_date="2026-03-02")
    absences_repo.append(anna, absence_type=AbsenceType.VACATION, from_date="2026-03-09", to_date="2026-03-15")

    history = service.absence_history(anna)
    assert [e.type for e in history] == [AbsenceType.SICKNESS, AbsenceType.VACATION]

    service.delete_child(anna)
    with pytest.raises(NotFoundError):
        service.get_child(anna)
    with pytest.raises(NotFoundError):
        service.delete_child(anna)
