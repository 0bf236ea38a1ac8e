from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..children.model import AbsenceEntry, AbsenceWindow, ChildRecord, UIChildRecord
from ..children.repository import AbsenceLogRepository, ChildRepository
from ..common.datetime_utils import today_str
from ..core.constants import DEFAULT_MAX_WRITE_WORKERS
from ..core.error_messages import get_error_message
from .fanout import fan_out
from .scope import RosterScope

logger = logging.getLogger(__name__)


def current_absence(record: ChildRecord, entries: Sequence[AbsenceEntry], today: str) -> Optional[AbsenceWindow]:
    """Rebuild a child's absence annotation from its history.

    The most recently registered entry that has not ended yet wins. A child who
    is checked in has no active absence.
    """

    if record.checked_in:
        return None

    active = [e for e in entries if e.to_date >= today]
    if not active:
        return None

    latest = max(active, key=lambda e: e.created_at or datetime.min)
    return latest.window


class RosterStore:
    """Owns the in-memory roster of one session.

    ``load``/``refresh`` replace the list wholesale. Selection and any
    optimistic change not yet confirmed remotely are discarded; there is no
    sequencing token, so when two loads race the last one to finish wins.
    """

    def __init__(
        self,
        children: ChildRepository,
        absences: AbsenceLogRepository,
        *,
        max_workers: int = DEFAULT_MAX_WRITE_WORKERS,
    ):
        self._children_repo = children
        self._absences = absences
        self._max_workers = max_workers
        self.children: list[UIChildRecord] = []
        self.loading = False
        self.error_message: Optional[str] = None

    def load(self, scope: RosterScope, *, today: date | None = None) -> list[UIChildRecord]:
        self.loading = True
        try:
            records = list(scope.fetch(self._children_repo))
            absences = self._load_absences(records, today_str(today))
            roster = [UIChildRecord.from_record(r, absence=absences.get(r.id)) for r in records]
        except Exception:
            logger.exception("Failed to load roster for scope %s", scope.describe())
            self.children = []
            self.error_message = get_error_message("children", "LOAD_FAILED")
            return self.children
        finally:
            self.loading = False

        self.children = roster
        self.error_message = None
        return roster

    def refresh(self, scope: RosterScope, *, today: date | None = None) -> list[UIChildRecord]:
        self.error_message = None
        return self.load(scope, today=today)

    def _load_absences(self, records: Sequence[ChildRecord], today: str) -> dict[str, AbsenceWindow]:
        found: dict[str, AbsenceWindow] = {}
        candidates = {r.id: r for r in records if not r.checked_in}

        def fetch(child_id: str) -> None:
            window = current_absence(candidates[child_id], self._absences.list_for_child(child_id), today)
            if window:
                found[child_id] = window

        # A child whose history cannot be read is shown without an absence.
        fan_out(list(candidates), fetch, max_workers=self._max_workers)
        return found

    def toggle_select(self, child_id: str) -> None:
        for child in self.children:
            if child.id == child_id:
                child.selected = not child.selected
                return

    def get(self, child_id: str) -> Optional[UIChildRecord]:
        for child in self.children:
            if child.id == child_id:
                return child
        return None

    def selected(self) -> list[UIChildRecord]:
        return [c for c in self.children if c.selected]

    @property
    def any_selected(self) -> bool:
        return any(c.selected for c in self.children)

    def clear_error(self) -> None:
        self.error_message = None
