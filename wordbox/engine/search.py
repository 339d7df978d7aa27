"""Backtracking search over word boxes, driven by a prefix oracle."""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, Iterator, List, Optional

from ..core.exceptions import SearchCancelled, SearchTimeout
from ..core.models import WordBox
from ..data.lexicon import Lexicon
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Observer = Callable[[WordBox], None]


class CancellationToken:
    """Cooperative stop signal with an optional wall-clock deadline.

    Searches call :meth:`check` once per visited node. A child token has its
    own cancel flag but also stops when its parent does, which lets a fan-out
    driver stop its workers without cancelling the caller's token.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        parent: Optional["CancellationToken"] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._event = threading.Event()
        self._parent = parent
        self._clock = clock
        self._deadline = clock() + timeout if timeout is not None else None

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self, clock=self._clock)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def expired(self) -> bool:
        if self._deadline is not None and self._clock() >= self._deadline:
            return True
        return self._parent is not None and self._parent.expired

    def check(self) -> None:
        if self.expired:
            raise SearchTimeout("Search deadline exceeded")
        if self.cancelled:
            raise SearchCancelled("Search cancelled")


@dataclass
class SearchStats:
    nodes_visited: int = 0
    dead_ends: int = 0
    seeds_tried: int = 0

    def merge(self, other: "SearchStats") -> None:
        self.nodes_visited += other.nodes_visited
        self.dead_ends += other.dead_ends
        self.seeds_tried += other.seeds_tried


# ----------------------------------------------------------------------
# Move generation
# ----------------------------------------------------------------------
def iter_candidate_rows(box: WordBox, lexicon: Lexicon) -> Iterator[str]:
    """Yield, in lexicon order, every word that can become the next row."""

    pool = lexicon.words_with_prefix(box.next_row_prefix(), box.col_dim)
    return (word for word in pool if box.is_valid_move(word, lexicon))


def iter_children(box: WordBox, lexicon: Lexicon) -> Iterator[WordBox]:
    return (box.add_word(word) for word in iter_candidate_rows(box, lexicon))


def seed_boxes(
    lexicon: Lexicon,
    row_dim: int,
    col_dim: int,
    symmetric: bool = False,
) -> List[WordBox]:
    """One single-row box per dictionary word that is a legal first row."""

    return list(iter_children(WordBox.empty(row_dim, col_dim, symmetric=symmetric), lexicon))


def _visit(
    box: WordBox,
    observer: Optional[Observer],
    token: Optional[CancellationToken],
    stats: SearchStats,
) -> None:
    if token is not None:
        token.check()
    stats.nodes_visited += 1
    if observer is not None:
        observer(box)


# ----------------------------------------------------------------------
# Depth-first
# ----------------------------------------------------------------------
def iter_solutions(
    box: WordBox,
    lexicon: Lexicon,
    *,
    observer: Optional[Observer] = None,
    token: Optional[CancellationToken] = None,
    stats: Optional[SearchStats] = None,
) -> Iterator[WordBox]:
    """Yield every completion of ``box`` in depth-first, lexicon order.

    The stack holds lazy child iterators, so nodes are visited in the same
    order as the recursive formulation without its recursion limit, and
    sibling validity checks are skipped once a branch succeeds.
    """

    stats = stats if stats is not None else SearchStats()
    stack: List[Iterator[WordBox]] = [iter((box,))]
    while stack:
        current = next(stack[-1], None)
        if current is None:
            stack.pop()
            continue
        _visit(current, observer, token, stats)
        if current.is_done():
            yield current
            continue
        stack.append(_counting_dead_ends(iter_children(current, lexicon), stats))


def _counting_dead_ends(children: Iterator[WordBox], stats: SearchStats) -> Iterator[WordBox]:
    produced = False
    for child in children:
        produced = True
        yield child
    if not produced:
        stats.dead_ends += 1


def depth_first_search(
    box: WordBox,
    lexicon: Lexicon,
    *,
    observer: Optional[Observer] = None,
    token: Optional[CancellationToken] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[WordBox]:
    """Return the first completion of ``box`` or ``None`` when none exists."""

    solutions = iter_solutions(box, lexicon, observer=observer, token=token, stats=stats)
    return next(solutions, None)


# ----------------------------------------------------------------------
# Frontier
# ----------------------------------------------------------------------
def frontier_search(
    seeds: Iterable[WordBox],
    lexicon: Lexicon,
    *,
    observer: Optional[Observer] = None,
    token: Optional[CancellationToken] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[WordBox]:
    """Search from ``seeds`` with an explicit deque frontier.

    States are popped from the front and children are pushed back onto the
    front, so the most recently discovered child is explored first. The
    first complete box popped ends the search.
    """

    stats = stats if stats is not None else SearchStats()
    frontier: Deque[WordBox] = deque(seeds)
    while frontier:
        current = frontier.popleft()
        _visit(current, observer, token, stats)
        if current.is_done():
            return current
        before = len(frontier)
        for child in iter_children(current, lexicon):
            frontier.appendleft(child)
        if len(frontier) == before:
            stats.dead_ends += 1
    return None


def search_each_start(
    seeds: Iterable[WordBox],
    lexicon: Lexicon,
    *,
    observer: Optional[Observer] = None,
    token: Optional[CancellationToken] = None,
    stats: Optional[SearchStats] = None,
) -> Optional[WordBox]:
    """Run an independent frontier search per seed; the first success wins."""

    stats = stats if stats is not None else SearchStats()
    for seed in seeds:
        stats.seeds_tried += 1
        result = frontier_search([seed], lexicon, observer=observer, token=token, stats=stats)
        if result is not None:
            return result
        LOGGER.debug("No word box extends %s", list(seed.rows))
    return None


__all__ = [
    "CancellationToken",
    "Observer",
    "SearchStats",
    "depth_first_search",
    "frontier_search",
    "iter_candidate_rows",
    "iter_children",
    "iter_solutions",
    "search_each_start",
    "seed_boxes",
]
