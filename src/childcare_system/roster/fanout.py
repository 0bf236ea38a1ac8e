from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence

from .result import WriteFailure

logger = logging.getLogger(__name__)


def fan_out(
    child_ids: Sequence[str],
    write: Callable[[str], None],
    *,
    max_workers: int,
) -> tuple[list[str], list[WriteFailure]]:
    """Run one remote call per child with bounded parallelism and join on all of them.

    Returns (applied ids, failures), both in input order. A failing call never
    cancels or rolls back the others.
    """

    if not child_ids:
        return [], []

    workers = max(1, min(int(max_workers), len(child_ids)))
    applied: list[str] = []
    failures: list[WriteFailure] = []

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="roster-io") as pool:
        futures = [(child_id, pool.submit(write, child_id)) for child_id in child_ids]
        for child_id, fut in futures:
            try:
                fut.result()
                applied.append(child_id)
            except Exception as e:
                logger.warning("Remote call failed for child %s: %s", child_id, e)
                failures.append(WriteFailure(child_id=child_id, reason=str(e) or type(e).__name__))

    return applied, failures
