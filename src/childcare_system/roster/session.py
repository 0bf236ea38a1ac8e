from __future__ import annotations

import logging
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..children.repository import AbsenceLogRepository, ChildRepository
from ..core.constants import (
    DEFAULT_MAX_ROSTER_SESSIONS,
    DEFAULT_MAX_WRITE_WORKERS,
    DEFAULT_ROSTER_IDLE_SECONDS,
    DEFAULT_VACATION_DAYS,
)
from ..core.error_messages import get_error_message
from ..core.exceptions import AuthorizationError
from ..users.model import GuardianIdentity, Identity, StaffIdentity
from .absence import AbsenceTransition, absence_label
from .attendance import AttendanceTransition
from .scope import RosterScope
from .store import RosterStore

logger = logging.getLogger(__name__)


def scope_for_identity(identity: Identity, *, department: Optional[str] = None) -> RosterScope:
    """Guardians see their own children; staff see everyone or one department."""

    if isinstance(identity, GuardianIdentity):
        return RosterScope.for_guardian(identity.uid)
    if isinstance(identity, StaffIdentity):
        return RosterScope.for_department(department) if department else RosterScope.everyone()
    raise AuthorizationError(get_error_message("auth", "ROLE_MISSING"))


@dataclass
class RosterSession:
    """Roster state owned by exactly one viewer session."""

    scope: RosterScope
    store: RosterStore
    attendance: AttendanceTransition
    absence: AbsenceTransition

    @classmethod
    def create(
        cls,
        scope: RosterScope,
        *,
        children: ChildRepository,
        absences: AbsenceLogRepository,
        max_workers: int = DEFAULT_MAX_WRITE_WORKERS,
        default_vacation_days: int = DEFAULT_VACATION_DAYS,
    ) -> "RosterSession":
        store = RosterStore(children, absences, max_workers=max_workers)
        return cls(
            scope=scope,
            store=store,
            attendance=AttendanceTransition(store, children, max_workers=max_workers),
            absence=AbsenceTransition(
                store,
                children,
                absences,
                default_vacation_days=default_vacation_days,
                max_workers=max_workers,
            ),
        )

    def load(self) -> None:
        self.store.load(self.scope)

    def refresh(self) -> None:
        self.store.refresh(self.scope)

    def error_message(self) -> Optional[str]:
        # Only one message is shown at a time.
        return self.attendance.error_message or self.absence.error_message or self.store.error_message

    def clear_errors(self) -> None:
        self.store.clear_error()
        self.attendance.clear_error()
        self.absence.clear_error()

    def snapshot(self) -> dict:
        children = []
        for c in self.store.children:
            row = c.to_dict()
            row["absence_label"] = absence_label(c)
            children.append(row)

        return {
            "scope": self.scope.describe(),
            "children": children,
            "any_selected": self.store.any_selected,
            "button_label": self.attendance.button_label(),
            "absence_editor_open": self.absence.editor_open,
            "vacation_days": self.absence.vacation_days,
            "vacation_start_date": self.absence.vacation_start_date(),
            "error": self.error_message(),
        }


@dataclass
class RosterSessionRegistry:
    """Maps opaque tokens (kept in the HTTP session) to RosterSessions.

    Sessions idle for longer than ``max_idle_seconds`` are dropped, and the
    least recently used one is evicted once ``max_sessions`` is reached.
    """

    factory: Callable[[RosterScope], RosterSession]
    max_idle_seconds: float = DEFAULT_ROSTER_IDLE_SECONDS
    max_sessions: int = DEFAULT_MAX_ROSTER_SESSIONS
    clock: Callable[[], float] = time.monotonic
    _sessions: OrderedDict[str, tuple[RosterSession, float]] = field(default_factory=OrderedDict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def open(self, scope: RosterScope) -> tuple[str, RosterSession]:
        session = self.factory(scope)
        token = secrets.token_urlsafe(16)
        with self._lock:
            now = self.clock()
            self._purge_expired(now)
            while self._sessions and len(self._sessions) >= max(1, self.max_sessions):
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted roster session %s (limit %d)", evicted[:6], self.max_sessions)
            self._sessions[token] = (session, now)
        return token, session

    def get(self, token: Optional[str]) -> Optional[RosterSession]:
        if not token:
            return None
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            session, last_seen = entry
            now = self.clock()
            if now - last_seen > self.max_idle_seconds:
                del self._sessions[token]
                return None
            self._sessions[token] = (session, now)
            self._sessions.move_to_end(token)
            return session

    def close(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge_expired(self, now: float) -> None:
        # Entries are kept in last-used order, so the stale ones sit at the front.
        while self._sessions:
            token, (_, last_seen) = next(iter(self._sessions.items()))
            if now - last_seen <= self.max_idle_seconds:
                break
            del self._sessions[token]
