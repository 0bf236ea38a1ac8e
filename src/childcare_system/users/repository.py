from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..store.model import Write
from .model import Account, GuardianProfile, StaffProfile


class GuardianRepository(Protocol):
    def get_by_id(self, uid: str) -> Optional[GuardianProfile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[GuardianProfile]:
        raise NotImplementedError

    def update(self, uid: str, data: dict[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, uid: str) -> bool:
        raise NotImplementedError

    def add_child(self, uid: str, child_id: str) -> None:
        """Set-union: adding an already linked child is a no-op."""

        raise NotImplementedError

    def profile_write(self, uid: str, data: dict[str, Any]) -> Write:
        raise NotImplementedError


class StaffRepository(Protocol):
    def get_by_id(self, uid: str) -> Optional[StaffProfile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[StaffProfile]:
        raise NotImplementedError

    def update(self, uid: str, data: dict[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, uid: str) -> bool:
        raise NotImplementedError

    def profile_write(self, uid: str, data: dict[str, Any]) -> Write:
        raise NotImplementedError


class AccountRepository(Protocol):
    def get_by_id(self, uid: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def account_write(self, uid: str, *, email: str, password_hash: str, display_name: str) -> Write:
        raise NotImplementedError

    def commit(self, writes: Sequence[Write]) -> None:
        """Apply account + profile writes atomically."""

        raise NotImplementedError


class PinRepository(Protocol):
    def get_pin_hash(self, uid: str) -> tuple[bool, Optional[str]]:
        """Return (user exists, stored pin hash)."""

        raise NotImplementedError

    def set_pin_hash(self, uid: str, pin_hash: str) -> bool:
        raise NotImplementedError
