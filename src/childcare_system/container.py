from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .children.document_child_repository import DocumentAbsenceLogRepository, DocumentChildRepository
from .children.service import ChildService
from .comments.document_comment_repository import DocumentCommentRepository
from .comments.service import CommentService
from .core.constants import (
    DEFAULT_MAX_ROSTER_SESSIONS,
    DEFAULT_MAX_WRITE_WORKERS,
    DEFAULT_ROSTER_IDLE_SECONDS,
    DEFAULT_VACATION_DAYS,
)
from .database.connection import DatabaseConnection, db_config_from_dict
from .departments.document_department_repository import DocumentDepartmentRepository
from .departments.service import DepartmentService
from .events.document_event_repository import DocumentEventRepository
from .events.service import EventService
from .guest_links.document_guest_link_repository import DocumentGuestLinkRepository
from .guest_links.service import GuestLinkService
from .images.service import ImageService
from .images.storage import LocalObjectStorage, ObjectStorage
from .roster.scope import RosterScope
from .roster.session import RosterSession, RosterSessionRegistry
from .store.memory_store import InMemoryDocumentStore
from .store.mysql_document_store import MySQLDocumentStore
from .store.repository import DocumentStore
from .users.document_user_repository import (
    DocumentAccountRepository,
    DocumentGuardianRepository,
    DocumentPinRepository,
    DocumentStaffRepository,
)
from .users.provisioning import AccountProvisioningService
from .users.service import AuthService, PinService, ProfileService


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    storage: ObjectStorage
    conn: Optional[DatabaseConnection]

    children_repo: DocumentChildRepository
    absences_repo: DocumentAbsenceLogRepository
    guardians_repo: DocumentGuardianRepository
    staff_repo: DocumentStaffRepository
    accounts_repo: DocumentAccountRepository

    auth_service: AuthService
    profile_service: ProfileService
    pin_service: PinService
    provisioning_service: AccountProvisioningService
    child_service: ChildService
    image_service: ImageService
    department_service: DepartmentService
    event_service: EventService
    comment_service: CommentService
    guest_link_service: GuestLinkService
    roster_sessions: RosterSessionRegistry


def build_store(*, backend: str, db_config: Optional[dict] = None) -> tuple[DocumentStore, Optional[DatabaseConnection]]:
    if backend == "memory":
        return InMemoryDocumentStore(), None
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(db_config_from_dict(db_config or {}))
        return MySQLDocumentStore(conn), conn
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def build_container(
    *,
    store: DocumentStore,
    storage: Optional[ObjectStorage] = None,
    conn: Optional[DatabaseConnection] = None,
    storage_root: str = "var/storage",
    storage_base_url: str = "/files",
    max_write_workers: int = DEFAULT_MAX_WRITE_WORKERS,
    default_vacation_days: int = DEFAULT_VACATION_DAYS,
    roster_idle_seconds: float = DEFAULT_ROSTER_IDLE_SECONDS,
    max_roster_sessions: int = DEFAULT_MAX_ROSTER_SESSIONS,
) -> Container:
    if storage is None:
        storage = LocalObjectStorage(storage_root, base_url=storage_base_url)

    children_repo = DocumentChildRepository(store)
    absences_repo = DocumentAbsenceLogRepository(store)
    guardians_repo = DocumentGuardianRepository(store)
    staff_repo = DocumentStaffRepository(store)
    accounts_repo = DocumentAccountRepository(store)

    auth_service = AuthService(accounts_repo, guardians_repo, staff_repo)
    profile_service = ProfileService(guardians_repo, staff_repo)
    image_service = ImageService(storage)

    def new_roster_session(scope: RosterScope) -> RosterSession:
        return RosterSession.create(
            scope,
            children=children_repo,
            absences=absences_repo,
            max_workers=max_write_workers,
            default_vacation_days=default_vacation_days,
        )

    return Container(
        store=store,
        storage=storage,
        conn=conn,
        children_repo=children_repo,
        absences_repo=absences_repo,
        guardians_repo=guardians_repo,
        staff_repo=staff_repo,
        accounts_repo=accounts_repo,
        auth_service=auth_service,
        profile_service=profile_service,
        pin_service=PinService(DocumentPinRepository(store)),
        provisioning_service=AccountProvisioningService(accounts_repo, guardians_repo, staff_repo, auth_service),
        child_service=ChildService(
            children_repo, absences_repo, images=image_service, guardian_links=profile_service
        ),
        image_service=image_service,
        department_service=DepartmentService(DocumentDepartmentRepository(store), children_repo),
        event_service=EventService(DocumentEventRepository(store)),
        comment_service=CommentService(DocumentCommentRepository(store)),
        guest_link_service=GuestLinkService(DocumentGuestLinkRepository(store), guardians_repo),
        roster_sessions=RosterSessionRegistry(
            new_roster_session,
            max_idle_seconds=roster_idle_seconds,
            max_sessions=max_roster_sessions,
        ),
    )
