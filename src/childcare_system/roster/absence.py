from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..children.model import UIChildRecord
from ..children.repository import AbsenceLogRepository, ChildRepository
from ..common.datetime_utils import add_days, format_date_short, today_str
from ..common.validators import require_iso_date
from ..core.constants import DEFAULT_MAX_WRITE_WORKERS, DEFAULT_VACATION_DAYS, MAX_VACATION_DAYS, MIN_VACATION_DAYS
from ..core.enums import AbsenceType
from ..core.error_messages import get_error_message
from .fanout import fan_out
from .result import TransitionResult
from .store import RosterStore

logger = logging.getLogger(__name__)


def clamp_vacation_days(days: int) -> int:
    return max(MIN_VACATION_DAYS, min(MAX_VACATION_DAYS, int(days)))


def vacation_range(start_date: str, days: int) -> tuple[str, str]:
    """Inclusive range: 1 day spans only the start date, 7 days spans a week."""

    return start_date, add_days(start_date, clamp_vacation_days(days) - 1)


def absence_label(child: UIChildRecord) -> Optional[str]:
    if not child.absence_type or not child.absence_from or not child.absence_to:
        return None

    from_s = format_date_short(child.absence_from)
    to_s = format_date_short(child.absence_to)

    if child.absence_from == child.absence_to:
        if child.absence_type == AbsenceType.SICKNESS:
            return f"Sick today ({from_s})"
        return f"Vacation ({from_s})"

    if child.absence_type == AbsenceType.SICKNESS:
        return f"Sick {from_s}–{to_s}"
    return f"Vacation {from_s}–{to_s}"


class AbsenceTransition:
    """Registers sickness / vacation for the selected children.

    Per child two independent remote writes are issued: an append to the
    absence history and a ``checked_in = False`` point update. The editor is
    closed afterwards whatever the outcome.
    """

    def __init__(
        self,
        roster: RosterStore,
        children: ChildRepository,
        absences: AbsenceLogRepository,
        *,
        default_vacation_days: int = DEFAULT_VACATION_DAYS,
        max_workers: int = DEFAULT_MAX_WRITE_WORKERS,
    ):
        self._roster = roster
        self._children = children
        self._absences = absences
        self._max_workers = max_workers
        self._vacation_days = clamp_vacation_days(default_vacation_days)
        self._vacation_start_date: Optional[str] = None
        self.editor_open = False
        self.error_message: Optional[str] = None

    @property
    def vacation_days(self) -> int:
        return self._vacation_days

    @vacation_days.setter
    def vacation_days(self, days: int) -> None:
        self._vacation_days = clamp_vacation_days(days)

    def vacation_start_date(self, *, today: date | None = None) -> str:
        """Configured start date, or today when none was chosen."""
        return self._vacation_start_date or today_str(today)

    def set_vacation_start_date(self, value: Optional[str]) -> None:
        if value:
            require_iso_date(value, "Start date")
            self._vacation_start_date = value.strip()
        else:
            self._vacation_start_date = None

    def open_absence_editor(self) -> bool:
        if not self._roster.any_selected and not self.editor_open:
            return False
        self.editor_open = True
        return True

    def close_absence_editor(self) -> None:
        self.editor_open = False

    def absence_label(self, child: UIChildRecord) -> Optional[str]:
        return absence_label(child)

    def register_sickness_for_selected(self, *, today: date | None = None) -> TransitionResult:
        day = today_str(today)
        return self._register(AbsenceType.SICKNESS, day, day)

    def register_vacation_for_selected(self, *, today: date | None = None) -> TransitionResult:
        start, end = vacation_range(self.vacation_start_date(today=today), self._vacation_days)
        return self._register(AbsenceType.VACATION, start, end)

    def _register(self, absence_type: AbsenceType, from_date: str, to_date: str) -> TransitionResult:
        selected = self._roster.selected()
        if not selected:
            return TransitionResult.nothing_to_do()

        for child in selected:
            child.set_absence(absence_type, from_date, to_date)
            child.checked_in = False
            child.selected = False

        def write(child_id: str) -> None:
            self._absences.append(child_id, absence_type=absence_type, from_date=from_date, to_date=to_date)
            self._children.set_checked_in(child_id, False)

        try:
            applied, failures = fan_out([c.id for c in selected], write, max_workers=self._max_workers)
        finally:
            self.close_absence_editor()

        result = TransitionResult.from_outcomes(applied, failures)
        if failures:
            logger.error(
                "Registering %s failed for %d of %d children: %s",
                absence_type.value,
                len(failures),
                len(selected),
                ", ".join(result.failed_ids),
            )
            self.error_message = get_error_message("absence", "CREATE_FAILED")
        return result

    def clear_error(self) -> None:
        self.error_message = None
