from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Resolved viewer role used for access control."""

    ADMIN = "admin"
    STAFF = "staff"
    GUARDIAN = "guardian"


class StaffRole(str, Enum):
    """Role stored on a staff profile document."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AccountRole(str, Enum):
    """Roles accepted by admin account provisioning."""

    PARENT = "parent"
    EMPLOYEE = "employee"
    ADMIN = "admin"


class AbsenceType(str, Enum):
    SICKNESS = "sickness"
    VACATION = "vacation"


class TransitionStatus(str, Enum):
    """Outcome of an optimistic transition once all remote writes settled."""

    FULLY_APPLIED = "FULLY_APPLIED"
    PARTIALLY_APPLIED = "PARTIALLY_APPLIED"
    FULLY_FAILED = "FULLY_FAILED"
    NOTHING_TO_DO = "NOTHING_TO_DO"
