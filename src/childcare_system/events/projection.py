"""Read-only calendar views derived from a list of events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import today_str
from .model import EventEntry


def marked_dates(events: Sequence[EventEntry], selected_date: Optional[str] = None) -> dict[str, dict[str, Any]]:
    """Marking map keyed by ISO date: which days have events, how many, and which day is selected."""

    counts: dict[str, int] = {}
    for ev in events:
        counts[ev.date] = counts.get(ev.date, 0) + 1

    marks: dict[str, dict[str, Any]] = {d: {"marked": True, "event_count": n} for d, n in counts.items()}

    if selected_date:
        marks[selected_date] = {**marks.get(selected_date, {}), "selected": True}
    return marks


def next_event(events: Sequence[EventEntry], *, today: date | None = None) -> Optional[EventEntry]:
    """Earliest event dated today or later."""

    today_s = today_str(today)
    upcoming = [ev for ev in events if ev.date >= today_s]
    if not upcoming:
        return None
    return min(upcoming, key=lambda ev: ev.date)


def events_for_date(events: Sequence[EventEntry], selected_date: Optional[str]) -> list[EventEntry]:
    if not selected_date:
        return []
    return [ev for ev in events if ev.date == selected_date]


@dataclass
class CalendarState:
    """Selected day and visibility of the calendar view over a fixed event list."""

    events: Sequence[EventEntry] = field(default_factory=list)
    selected_date: Optional[str] = None
    visible: bool = False

    def open(self, *, today: date | None = None) -> None:
        self.visible = True
        upcoming = next_event(self.events, today=today)
        if upcoming:
            self.selected_date = upcoming.date

    def open_for_date(self, date_str: str) -> None:
        self.selected_date = date_str
        self.visible = True

    def select(self, date_str: str) -> None:
        self.selected_date = date_str

    def close(self) -> None:
        self.visible = False

    def marked_dates(self) -> dict[str, dict[str, Any]]:
        return marked_dates(self.events, self.selected_date)

    def events_for_selected_date(self) -> list[EventEntry]:
        return events_for_date(self.events, self.selected_date)

    def to_dict(self, *, today: date | None = None) -> dict[str, Any]:
        upcoming = next_event(self.events, today=today)
        return {
            "visible": self.visible,
            "selected_date": self.selected_date,
            "marked_dates": self.marked_dates(),
            "next_event": upcoming.to_dict() if upcoming else None,
            "events_for_selected_date": [ev.to_dict() for ev in self.events_for_selected_date()],
        }
