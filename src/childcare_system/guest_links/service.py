from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.error_messages import get_error_message
from ..core.exceptions import OperationFailedError, StoreError, ValidationError
from ..users.repository import GuardianRepository
from .model import GuestLink
from .repository import GuestLinkRepository

logger = logging.getLogger(__name__)


class GuestLinkService:
    def __init__(self, links: GuestLinkRepository, guardians: GuardianRepository):
        self._links = links
        self._guardians = guardians

    def send_guest_link(self, child_id: Optional[str], *, name: str, phone: str, requester_uid: Optional[str]) -> str:
        if not child_id:
            raise ValidationError(get_error_message("guestLink", "NO_CHILD"))

        name = (name or "").strip()
        phone = (phone or "").strip()
        if not name or not phone:
            raise ValidationError(get_error_message("guestLink", "MISSING_FIELDS"))

        try:
            # Staff requesters have no guardian profile; the link is then unattributed.
            guardian = self._guardians.get_by_id(requester_uid) if requester_uid else None
            link_id = self._links.create(
                child_id, name=name, phone=phone, parent_id=guardian.id if guardian else None
            )
        except StoreError:
            logger.exception("Failed to save guest link for child %s", child_id)
            raise OperationFailedError(get_error_message("guestLink", "CREATE_FAILED"))

        logger.info("Guest link %s created for child %s", link_id, child_id)
        return link_id

    def list_for_child(self, child_id: str) -> Sequence[GuestLink]:
        return self._links.list_for_child(child_id)
