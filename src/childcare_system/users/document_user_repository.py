from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core import constants
from ..core.exceptions import DocumentNotFoundError
from ..store.model import SERVER_TIMESTAMP, Write
from ..store.repository import DocumentStore
from .model import Account, GuardianProfile, StaffProfile
from .repository import AccountRepository, GuardianRepository, PinRepository, StaffRepository


class DocumentGuardianRepository(GuardianRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, uid: str) -> Optional[GuardianProfile]:
        doc = self._store.get(constants.GUARDIANS, uid)
        return GuardianProfile.from_document(doc) if doc else None

    def list_all(self) -> Sequence[GuardianProfile]:
        docs = self._store.query(constants.GUARDIANS)
        return sorted((GuardianProfile.from_document(d) for d in docs), key=lambda g: g.full_name.lower())

    def update(self, uid: str, data: dict[str, Any]) -> None:
        self._store.update(constants.GUARDIANS, uid, data)

    def delete(self, uid: str) -> bool:
        return self._store.delete(constants.GUARDIANS, uid)

    def add_child(self, uid: str, child_id: str) -> None:
        doc = self._store.get(constants.GUARDIANS, uid)
        if not doc:
            raise DocumentNotFoundError(f"{constants.GUARDIANS}/{uid} does not exist")

        children = list(doc.data.get("children") or [])
        if child_id in children:
            return
        children.append(child_id)
        self._store.update(constants.GUARDIANS, uid, {"children": children})

    def profile_write(self, uid: str, data: dict[str, Any]) -> Write:
        payload = {**data, "children": list(data.get("children") or []), "uid": uid, "created_at": SERVER_TIMESTAMP}
        return Write(collection=constants.GUARDIANS, doc_id=uid, data=payload)


class DocumentStaffRepository(StaffRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, uid: str) -> Optional[StaffProfile]:
        doc = self._store.get(constants.STAFF, uid)
        return StaffProfile.from_document(doc) if doc else None

    def list_all(self) -> Sequence[StaffProfile]:
        docs = self._store.query(constants.STAFF)
        return sorted((StaffProfile.from_document(d) for d in docs), key=lambda s: s.full_name.lower())

    def update(self, uid: str, data: dict[str, Any]) -> None:
        self._store.update(constants.STAFF, uid, data)

    def delete(self, uid: str) -> bool:
        return self._store.delete(constants.STAFF, uid)

    def profile_write(self, uid: str, data: dict[str, Any]) -> Write:
        return Write(collection=constants.STAFF, doc_id=uid, data={**data, "uid": uid, "created_at": SERVER_TIMESTAMP})


class DocumentAccountRepository(AccountRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, uid: str) -> Optional[Account]:
        doc = self._store.get(constants.ACCOUNTS, uid)
        return Account.from_document(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[Account]:
        docs = self._store.query(constants.ACCOUNTS, field="email", op="==", value=email.strip().lower())
        return Account.from_document(docs[0]) if docs else None

    def account_write(self, uid: str, *, email: str, password_hash: str, display_name: str) -> Write:
        return Write(
            collection=constants.ACCOUNTS,
            doc_id=uid,
            data={
                "email": email.strip().lower(),
                "password_hash": password_hash,
                "display_name": display_name,
                "created_at": SERVER_TIMESTAMP,
            },
        )

    def commit(self, writes: Sequence[Write]) -> None:
        self._store.set_many(writes)


class DocumentPinRepository(PinRepository):
    """PINs live on whichever profile document the uid has (guardian first, then staff)."""

    COLLECTIONS = (constants.GUARDIANS, constants.STAFF)

    def __init__(self, store: DocumentStore):
        self._store = store

    def get_pin_hash(self, uid: str) -> tuple[bool, Optional[str]]:
        for collection in self.COLLECTIONS:
            doc = self._store.get(collection, uid)
            if doc:
                return True, doc.data.get("pin_hash")
        return False, None

    def set_pin_hash(self, uid: str, pin_hash: str) -> bool:
        for collection in self.COLLECTIONS:
            if self._store.get(collection, uid):
                self._store.update(collection, uid, {"pin_hash": pin_hash})
                return True
        return False
