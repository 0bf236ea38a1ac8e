"""Calendar-day helpers.

All arithmetic works on naive local dates. ISO ``YYYY-MM-DD`` strings are
the canonical form stored in documents and held in roster state.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

DateInput = Union[date, datetime, str]


def _from_iso(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date_str(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_str(today: date | None = None) -> str:
    return to_date_str(today or now_local().date())


def add_days(date_str: str, days: int) -> str:
    return to_date_str(parse_iso_date(date_str) + timedelta(days=days))


def format_date_short(date_str: str) -> str:
    """Render an ISO date as ``DD.MM``."""
    return parse_iso_date(date_str).strftime("%d.%m")


def to_local_date_str(value: DateInput) -> str:
    """Normalize a stored date value into an ISO date string.

    Aware datetimes are converted to local time before the date is taken so
    that an event stored at local midnight does not land on the previous day.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return to_date_str(value.date())
    if isinstance(value, date):
        return to_date_str(value)
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return to_date_str(parse_iso_date(text))
        return to_local_date_str(_from_iso(text))
    raise TypeError(f"Unsupported date value type: {type(value)!r}")


def parse_timestamp(value) -> datetime | None:
    """Accept datetimes as returned by the in-memory store or ISO strings from JSON rows."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return _from_iso(value)
    raise TypeError(f"Unsupported timestamp value type: {type(value)!r}")
