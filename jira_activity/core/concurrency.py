"""Sequential-or-parallel batch runner used by activity extraction."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from .config import ACTIVITY_MAX_WORKERS, ACTIVITY_MIN_PARALLEL

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def default_max_workers() -> int:
    return ACTIVITY_MAX_WORKERS or os.cpu_count() or 1


def run_batch(
    items: Sequence[T],
    worker: Callable[[T], R],
    *,
    min_parallel: int = ACTIVITY_MIN_PARALLEL,
    max_workers: int | None = None,
) -> list[R]:
    """Apply ``worker`` to every item and collect the results.

    Batches smaller than ``min_parallel`` run inline and keep input order.
    Larger batches fan out over a bounded thread pool and come back in
    completion order, so callers needing order must sort afterwards.
    A worker exception cancels pending work and propagates.
    """
    if len(items) < min_parallel:
        return [worker(item) for item in items]

    workers = min(len(items), max_workers or default_max_workers())
    logger.debug("Fanning out %s item(s) over %s worker(s)", len(items), workers)
    results: list[R] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(worker, item) for item in items]
        try:
            for fut in as_completed(futures):
                results.append(fut.result())
        except BaseException:
            for fut in futures:
                fut.cancel()
            raise
    return results
