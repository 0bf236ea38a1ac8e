from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_local_date_str
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import EventEntry
from .repository import EventRepository

EDITABLE_FIELDS = {"title", "department", "description", "date"}


def _normalize_date(value: date | datetime | str) -> str:
    try:
        return to_local_date_str(value)
    except (TypeError, ValueError):
        raise ValidationError("Event date must be a date (YYYY-MM-DD)")


class EventService:
    """Use case: calendar events. Writes are staff-only."""

    def __init__(self, events: EventRepository):
        self._events = events

    @staticmethod
    def _require_staff(current_role: Optional[Role]) -> None:
        if current_role not in {Role.STAFF, Role.ADMIN}:
            raise AuthorizationError(get_error_message("auth", "FORBIDDEN"))

    def create_event(
        self,
        *,
        current_role: Optional[Role],
        title: str,
        date_value: date | datetime | str,
        department: str = "",
        description: str = "",
    ) -> str:
        self._require_staff(current_role)
        return self._events.create(
            {
                "title": require_non_empty(title, "Title"),
                "department": (department or "").strip(),
                "description": (description or "").strip(),
                "date": _normalize_date(date_value),
            }
        )

    def get_event(self, event_id: str) -> EventEntry:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    def list_all(self) -> Sequence[EventEntry]:
        return self._events.list_all()

    def list_for_department(self, department: str) -> Sequence[EventEntry]:
        return self._events.list_for_department(department)

    def update_event(self, *, current_role: Optional[Role], event_id: str, data: dict[str, Any]) -> None:
        self._require_staff(current_role)
        unknown = set(data) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        self.get_event(event_id)
        cleaned = dict(data)
        if "title" in cleaned:
            cleaned["title"] = require_non_empty(cleaned["title"], "Title")
        if "date" in cleaned:
            # Dates are re-normalized on every write.
            cleaned["date"] = _normalize_date(cleaned["date"])
        if cleaned:
            self._events.update(event_id, cleaned)

    def delete_event(self, *, current_role: Optional[Role], event_id: str) -> None:
        self._require_staff(current_role)
        if not self._events.delete(event_id):
            raise NotFoundError("Event not found")
