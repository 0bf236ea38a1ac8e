from __future__ import annotations

import logging
from typing import Optional

from ..children.repository import ChildRepository
from ..core.constants import DEFAULT_MAX_WRITE_WORKERS
from ..core.error_messages import get_error_message
from .fanout import fan_out
from .result import TransitionResult
from .store import RosterStore

logger = logging.getLogger(__name__)

LABEL_SELECT_CHILDREN = "Select children"
LABEL_CHECK_IN = "Check in"
LABEL_CHECK_OUT = "Check out"
LABEL_UPDATE_STATUS = "Update status"


class AttendanceTransition:
    """Bulk and single check-in/out over a session's roster.

    Local state is updated before any remote write starts. Only the
    ``checked_in`` field is written remotely; clearing the absence annotation
    on check-in is local, the history log stays untouched.
    """

    def __init__(
        self,
        roster: RosterStore,
        children: ChildRepository,
        *,
        max_workers: int = DEFAULT_MAX_WRITE_WORKERS,
    ):
        self._roster = roster
        self._children = children
        self._max_workers = max_workers
        self.error_message: Optional[str] = None

    @property
    def any_selected(self) -> bool:
        return self._roster.any_selected

    def button_label(self) -> str:
        selected = self._roster.selected()
        if not selected:
            return LABEL_SELECT_CHILDREN

        if all(c.checked_in for c in selected):
            return LABEL_CHECK_OUT
        if all(not c.checked_in for c in selected):
            return LABEL_CHECK_IN

        # Mixed selection: no guessing at majority intent.
        return LABEL_UPDATE_STATUS

    def apply_bulk_transition(self) -> TransitionResult:
        selected = self._roster.selected()
        if not selected:
            return TransitionResult.nothing_to_do()

        # All in -> check everyone out; otherwise (all out or mixed) -> check everyone in.
        new_checked_in = not all(c.checked_in for c in selected)

        for child in selected:
            child.checked_in = new_checked_in
            child.selected = False
            if new_checked_in:
                child.clear_absence()

        return self._persist([c.id for c in selected], new_checked_in)

    def toggle_single(self, child_id: Optional[str]) -> TransitionResult:
        if not child_id:
            return TransitionResult.nothing_to_do()

        child = self._roster.get(child_id)
        if not child:
            return TransitionResult.nothing_to_do()

        child.checked_in = not child.checked_in
        if child.checked_in:
            child.clear_absence()

        return self._persist([child.id], child.checked_in)

    def _persist(self, child_ids: list[str], checked_in: bool) -> TransitionResult:
        applied, failures = fan_out(
            child_ids,
            lambda child_id: self._children.set_checked_in(child_id, checked_in),
            max_workers=self._max_workers,
        )
        result = TransitionResult.from_outcomes(applied, failures)
        if failures:
            logger.error(
                "Check-in/out update failed for %d of %d children: %s",
                len(failures),
                len(child_ids),
                ", ".join(result.failed_ids),
            )
            self.error_message = get_error_message("general", "SERVER")
        return result

    def clear_error(self) -> None:
        self.error_message = None
