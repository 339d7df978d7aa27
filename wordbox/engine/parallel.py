"""Concurrent fan-out of independent per-seed frontier searches."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import SearchCancelled, SearchTimeout
from ..core.models import WordBox
from ..data.lexicon import Lexicon
from ..utils.logger import get_logger
from .search import CancellationToken, SearchStats, frontier_search


LOGGER = get_logger(__name__)


def solve_in_parallel(
    seeds: Iterable[WordBox],
    lexicon: Lexicon,
    *,
    max_workers: Optional[int] = None,
    token: Optional[CancellationToken] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[WordBox]:
    """Search every seed on a worker pool and return the first success.

    Each worker owns its frontier and counters; the lexicon is shared
    read-only. Once a box is found the remaining workers are stopped through
    a child token and queued seeds are dropped.
    """

    stats = stats if stats is not None else SearchStats()
    parent = token or CancellationToken()
    stop = parent.child()
    winner: Optional[WordBox] = None
    failure: Optional[SearchCancelled] = None
    worker_stats: List[Tuple[Future, SearchStats]] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures: Dict[Future, WordBox] = {}
        for seed in seeds:
            seed_stats = SearchStats()
            future = executor.submit(frontier_search, [seed], lexicon, token=stop, stats=seed_stats)
            futures[future] = seed
            worker_stats.append((future, seed_stats))
        LOGGER.info("Dispatched %d seeds to %s workers", len(futures), max_workers or "default")

        try:
            for future in as_completed(futures):
                if future.cancelled():
                    continue
                try:
                    box = future.result()
                except SearchCancelled as exc:
                    if winner is None and failure is None and (
                        isinstance(exc, SearchTimeout) or parent.cancelled
                    ):
                        failure = exc
                        _stop_all(stop, futures)
                    else:
                        LOGGER.debug("Worker for %s stopped early", list(futures[future].rows))
                    continue
                if box is not None and winner is None and failure is None:
                    winner = box
                    _stop_all(stop, futures)
        finally:
            # also reached when a worker raises
            _stop_all(stop, futures)

    for future, seed_stats in worker_stats:
        if not future.cancelled():
            seed_stats.seeds_tried = 1
        stats.merge(seed_stats)
    if failure is not None:
        raise failure
    return winner


def _stop_all(stop: CancellationToken, futures: Iterable[Future]) -> None:
    stop.cancel()
    for pending in futures:
        pending.cancel()
