from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_iso_date, require_non_empty
from ..core.error_messages import get_error_message
from ..core.exceptions import NotFoundError, ValidationError
from ..images.service import ImageService
from .model import AbsenceEntry, ChildRecord
from .repository import AbsenceLogRepository, ChildRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "first_name",
    "last_name",
    "date_of_birth",
    "allergies",
    "image_uri",
    "guardians",
    "department",
}


def normalize_allergies(allergies: Sequence[str]) -> list[str]:
    """Trim, drop blanks and de-duplicate (case-insensitive) keeping first spelling."""

    out: list[str] = []
    seen: set[str] = set()
    for a in allergies or []:
        v = str(a).strip()
        if v and v.lower() not in seen:
            seen.add(v.lower())
            out.append(v)
    return out


class ChildService:
    """Use case: manage child records (staff/admin)."""

    def __init__(
        self,
        children: ChildRepository,
        absences: AbsenceLogRepository,
        *,
        images: Optional[ImageService] = None,
        guardian_links=None,
    ):
        self._children = children
        self._absences = absences
        self._images = images
        self._guardian_links = guardian_links

    def _clean(self, data: dict[str, Any]) -> dict[str, Any]:
        unknown = set(data) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        out = dict(data)
        if "first_name" in out:
            out["first_name"] = require_non_empty(out["first_name"], "First name")
        if "last_name" in out:
            out["last_name"] = require_non_empty(out["last_name"], "Last name")
        if "date_of_birth" in out:
            require_iso_date(out["date_of_birth"], "Date of birth")
            out["date_of_birth"] = out["date_of_birth"].strip()
        if "allergies" in out:
            out["allergies"] = normalize_allergies(out["allergies"])
        if "guardians" in out:
            out["guardians"] = [str(g) for g in out["guardians"] or []]
        return out

    def create_child(
        self,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: str,
        department: str,
        guardians: Sequence[str] = (),
        allergies: Sequence[str] = (),
        image_uri: str = "",
    ) -> str:
        data = self._clean(
            {
                "first_name": first_name,
                "last_name": last_name,
                "date_of_birth": date_of_birth,
                "department": department or "",
                "guardians": list(guardians),
                "allergies": list(allergies),
                "image_uri": image_uri or "",
            }
        )
        data["checked_in"] = False
        if not data["guardians"]:
            logger.warning("Creating child %s %s without guardians", data["first_name"], data["last_name"])

        child_id = self._children.create(data)

        if self._guardian_links is not None:
            for guardian_id in data["guardians"]:
                self._guardian_links.add_child_to_guardian(guardian_id, child_id)
        return child_id

    def get_child(self, child_id: str) -> ChildRecord:
        child = self._children.get_by_id(child_id)
        if not child:
            raise NotFoundError(get_error_message("children", "NOT_FOUND"))
        return child

    def list_all(self) -> Sequence[ChildRecord]:
        return self._children.list_all()

    def list_for_guardian(self, guardian_id: str) -> Sequence[ChildRecord]:
        return self._children.list_for_guardian(guardian_id)

    def list_for_department(self, department: str) -> Sequence[ChildRecord]:
        return self._children.list_for_department(department)

    def update_child(self, child_id: str, data: dict[str, Any]) -> None:
        self.get_child(child_id)
        cleaned = self._clean(data)
        if cleaned:
            self._children.update(child_id, cleaned)

    def update_allergies(self, child_id: str, allergies: Sequence[str]) -> list[str]:
        cleaned = normalize_allergies(allergies)
        self.update_child(child_id, {"allergies": cleaned})
        return cleaned

    def delete_child(self, child_id: str) -> None:
        if not self._children.delete(child_id):
            raise NotFoundError(get_error_message("children", "NOT_FOUND"))

    def update_profile_image(self, child_id: str, data: bytes, filename: str) -> Optional[str]:
        """Upload first, then store the path so a failed upload never leaves a dangling reference."""

        if self._images is None:
            raise ValidationError(get_error_message("image", "UPLOAD_FAILED"))

        self.get_child(child_id)
        path = self._images.upload_image(data, filename)
        if not path:
            return None
        self._children.update(child_id, {"image_uri": path})
        return path

    def absence_history(self, child_id: str) -> Sequence[AbsenceEntry]:
        self.get_child(child_id)
        return self._absences.list_for_child(child_id)
