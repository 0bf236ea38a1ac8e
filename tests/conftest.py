from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from childcare_system.children.document_child_repository import DocumentAbsenceLogRepository, DocumentChildRepository
from childcare_system.core.exceptions import StoreError
from childcare_system.store.memory_store import InMemoryDocumentStore

TODAY = date(2026, 3, 10)

# 1x1 PNG header (signature + IHDR) and a JFIF header
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n"
    b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
)
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"


class TickingClock:
    """Store clock that advances one second per write so server timestamps are strictly ordered."""

    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class FlakyChildRepo:
    """Wraps a child repository; ``set_checked_in`` fails for the ids in ``fail_ids``."""

    def __init__(self, inner, fail_ids=()):
        self._inner = inner
        self.fail_ids = set(fail_ids)
        self.checked_in_writes: list[tuple[str, bool]] = []

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def set_checked_in(self, child_id, checked_in):
        self.checked_in_writes.append((child_id, checked_in))
        if child_id in self.fail_ids:
            raise StoreError("connection reset")
        self._inner.set_checked_in(child_id, checked_in)


class FlakyAbsenceRepo:
    def __init__(self, inner, fail_ids=(), fail_reads=False):
        self._inner = inner
        self.fail_ids = set(fail_ids)
        self.fail_reads = fail_reads
        self.appended: list[tuple[str, str, str, str]] = []

    def append(self, child_id, *, absence_type, from_date, to_date):
        if child_id in self.fail_ids:
            raise StoreError("write rejected")
        self.appended.append((child_id, absence_type.value, from_date, to_date))
        return self._inner.append(child_id, absence_type=absence_type, from_date=from_date, to_date=to_date)

    def list_for_child(self, child_id):
        if self.fail_reads:
            raise StoreError("read timed out")
        return self._inner.list_for_child(child_id)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(clock=TickingClock(datetime(2026, 3, 10, 7, 0, 0)))


@pytest.fixture
def children_repo(store):
    return DocumentChildRepository(store)


@pytest.fixture
def absences_repo(store):
    return DocumentAbsenceLogRepository(store)


@pytest.fixture
def seeded_children(children_repo):
    """Three children of guardian g1 in department d1 (Ben is already checked in) and one of g2 in d2."""

    def child(first_name, *, guardians, department, checked_in=False):
        return children_repo.create(
            {
                "first_name": first_name,
                "last_name": "Test",
                "date_of_birth": "2021-05-01",
                "allergies": [],
                "image_uri": "",
                "guardians": guardians,
                "department": department,
                "checked_in": checked_in,
            }
        )

    return {
        "anna": child("Anna", guardians=["g1"], department="d1"),
        "ben": child("Ben", guardians=["g1"], department="d1", checked_in=True),
        "cleo": child("Cleo", guardians=["g1", "g3"], department="d1"),
        "dan": child("Dan", guardians=["g2"], department="d2"),
    }


@pytest.fixture
def flaky_children(children_repo):
    return FlakyChildRepo(children_repo)


@pytest.fixture
def flaky_absences(absences_repo):
    return FlakyAbsenceRepo(absences_repo)
