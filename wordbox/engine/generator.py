"""High-level word box generation: dictionary, lexicon, search, validation."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Set

from ..core.constants import LexiconKind, SearchStatus, SearchStrategy
from ..core.exceptions import SearchCancelled, SearchTimeout, ValidationError
from ..core.models import WordBox
from ..data.dictionary import DictionaryConfig, WordDictionary
from ..data.lexicon import Lexicon
from ..utils.logger import get_logger
from .parallel import solve_in_parallel
from .search import (
    CancellationToken,
    Observer,
    SearchStats,
    depth_first_search,
    iter_solutions,
    search_each_start,
    seed_boxes,
)
from .validator import BoxValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    row_dim: int
    col_dim: int
    dictionary_path: Path | str = ""
    symmetric: bool = False
    strategy: SearchStrategy = SearchStrategy.DEPTH_FIRST
    lexicon: LexiconKind = LexiconKind.HASHED
    timeout_seconds: Optional[float] = None
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.row_dim <= 0 or self.col_dim <= 0:
            raise ValueError("Box dimensions must be positive")
        if self.symmetric and self.row_dim != self.col_dim:
            raise ValueError("Symmetric boxes must be square")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.strategy = SearchStrategy(self.strategy)
        self.lexicon = LexiconKind(self.lexicon)

    def lengths(self) -> Set[int]:
        return {self.row_dim, self.col_dim}

    def to_dictionary_config(self) -> DictionaryConfig:
        return DictionaryConfig(path=self.dictionary_path)


@dataclass
class WordBoxResult:
    box: Optional[WordBox]
    status: SearchStatus
    stats: SearchStats = field(default_factory=SearchStats)
    elapsed_seconds: float = 0.0
    messages: List[str] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status == SearchStatus.SOLVED


class WordBoxGenerator:
    """Builds the prefix oracle once and runs the configured search."""

    def __init__(
        self,
        config: GeneratorConfig,
        dictionary: Optional[WordDictionary] = None,
        renderer: Optional[Observer] = None,
    ) -> None:
        self.config = config
        if dictionary is None:
            dictionary = WordDictionary(config.to_dictionary_config())
        self.dictionary = dictionary
        self.lexicon: Lexicon = self.dictionary.build_lexicon(config.lengths(), config.lexicon)
        self.validator = BoxValidator(self.lexicon)
        self.renderer = renderer
        if renderer is not None and config.max_workers > 1:
            LOGGER.warning("Rendering is disabled for parallel searches")
            self.renderer = None

    def empty_box(self) -> WordBox:
        return WordBox.empty(self.config.row_dim, self.config.col_dim, symmetric=self.config.symmetric)

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self, token: Optional[CancellationToken] = None) -> WordBoxResult:
        config = self.config
        if token is None:
            token = CancellationToken(timeout=config.timeout_seconds)
        stats = SearchStats()
        LOGGER.info(
            "Searching for a %s%dx%d box (%s)",
            "symmetric " if config.symmetric else "",
            config.row_dim,
            config.col_dim,
            config.strategy.value.lower(),
        )
        started = time.perf_counter()
        try:
            box = self._run_strategy(token, stats)
        except SearchTimeout:
            LOGGER.warning("Search timed out after %d nodes", stats.nodes_visited)
            return self._result(None, SearchStatus.TIMED_OUT, stats, started)
        except SearchCancelled:
            LOGGER.info("Search cancelled after %d nodes", stats.nodes_visited)
            return self._result(None, SearchStatus.CANCELLED, stats, started)

        if box is None:
            LOGGER.info("Search exhausted after %d nodes", stats.nodes_visited)
            return self._result(None, SearchStatus.EXHAUSTED, stats, started)

        validation = self.validator.validate(box)
        if not validation.ok:
            raise ValidationError(f"Word box validation failed: {validation.messages}")
        LOGGER.info("Word box found after %d nodes", stats.nodes_visited)
        result = self._result(box, SearchStatus.SOLVED, stats, started)
        result.messages = validation.messages
        return result

    def iter_boxes(self, limit: Optional[int] = None) -> Iterator[WordBox]:
        """Yield distinct completed boxes in depth-first order."""

        if limit is not None and limit <= 0:
            return
        token = CancellationToken(timeout=self.config.timeout_seconds)
        solutions = iter_solutions(self.empty_box(), self.lexicon, observer=self.renderer, token=token)
        for count, box in enumerate(solutions, start=1):
            yield box
            if limit is not None and count >= limit:
                return

    # ------------------------------------------------------------------
    # Strategy dispatch
    # ------------------------------------------------------------------
    def _run_strategy(self, token: CancellationToken, stats: SearchStats) -> Optional[WordBox]:
        config = self.config
        if config.strategy == SearchStrategy.DEPTH_FIRST:
            return depth_first_search(
                self.empty_box(), self.lexicon, observer=self.renderer, token=token, stats=stats
            )
        if config.strategy == SearchStrategy.BREADTH_FIRST:
            seeds = seed_boxes(self.lexicon, config.row_dim, config.col_dim, config.symmetric)
            LOGGER.info("%d starting words can open the box", len(seeds))
            if config.max_workers > 1:
                return solve_in_parallel(
                    seeds, self.lexicon, max_workers=config.max_workers, token=token, stats=stats
                )
            return search_each_start(
                seeds, self.lexicon, observer=self.renderer, token=token, stats=stats
            )
        return self._run_cpsat(token)

    def _run_cpsat(self, token: CancellationToken) -> Optional[WordBox]:
        from .solver import solve_with_cpsat

        token.check()
        timeout = self.config.timeout_seconds if self.config.timeout_seconds is not None else 30.0
        rows = solve_with_cpsat(
            self.dictionary.words,
            self.config.row_dim,
            self.config.col_dim,
            symmetric=self.config.symmetric,
            timeout=timeout,
        )
        if rows is None:
            return None
        return WordBox(
            row_dim=self.config.row_dim,
            col_dim=self.config.col_dim,
            rows=rows,
            symmetric=self.config.symmetric,
        )

    @staticmethod
    def _result(
        box: Optional[WordBox],
        status: SearchStatus,
        stats: SearchStats,
        started: float,
    ) -> WordBoxResult:
        return WordBoxResult(
            box=box,
            status=status,
            stats=stats,
            elapsed_seconds=time.perf_counter() - started,
        )
