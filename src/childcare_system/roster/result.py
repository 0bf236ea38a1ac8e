from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.enums import TransitionStatus


@dataclass(frozen=True)
class WriteFailure:
    child_id: str
    reason: str


@dataclass(frozen=True)
class TransitionResult:
    """Reconciliation outcome of one optimistic transition.

    The local roster already shows the intended state for every id in
    ``applied`` and ``failures``; ``failures`` lists the children whose
    remote write did not go through.
    """

    status: TransitionStatus
    applied: tuple[str, ...] = ()
    failures: tuple[WriteFailure, ...] = ()

    @classmethod
    def nothing_to_do(cls) -> "TransitionResult":
        return cls(status=TransitionStatus.NOTHING_TO_DO)

    @classmethod
    def from_outcomes(cls, applied: Sequence[str], failures: Sequence[WriteFailure]) -> "TransitionResult":
        if not applied and not failures:
            status = TransitionStatus.NOTHING_TO_DO
        elif not failures:
            status = TransitionStatus.FULLY_APPLIED
        elif not applied:
            status = TransitionStatus.FULLY_FAILED
        else:
            status = TransitionStatus.PARTIALLY_APPLIED
        return cls(status=status, applied=tuple(applied), failures=tuple(failures))

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_ids(self) -> list[str]:
        return [f.child_id for f in self.failures]

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "applied": list(self.applied),
            "failures": [{"child_id": f.child_id, "reason": f.reason} for f in self.failures],
        }
