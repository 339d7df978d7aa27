"""Data models supporting the word box search."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, List, Sequence, Tuple

from .constants import BLANK_CELL
from .exceptions import BoxInvariantError

if TYPE_CHECKING:
    from ..data.lexicon import Lexicon


@dataclass(frozen=True)
class WordBox:
    """A partially filled grid of row words.

    Boxes are persistent values: ``add_word`` returns a new box and never
    touches the receiver, so sibling branches of a search can share a parent.
    For symmetric boxes ``cols`` mirrors ``rows`` (cell ``(i, j)`` equals
    cell ``(j, i)``) and is extended in lock-step.
    """

    row_dim: int
    col_dim: int
    rows: Tuple[str, ...] = ()
    symmetric: bool = False
    cols: Tuple[str, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if self.row_dim <= 0 or self.col_dim <= 0:
            raise ValueError(
                f"Box dimensions must be positive, got {self.row_dim}x{self.col_dim}"
            )
        if self.symmetric and self.row_dim != self.col_dim:
            raise ValueError("Symmetric boxes must be square")
        if len(self.rows) > self.row_dim:
            raise ValueError(
                f"Box holds {len(self.rows)} rows but only has room for {self.row_dim}"
            )
        # Accept lists from callers but store immutable tuples.
        rows = tuple(self.rows)
        cols = tuple(self.cols)
        if self.symmetric:
            cols = cols or rows
            if cols != rows:
                raise ValueError("Symmetric box columns must mirror its rows")
        elif cols:
            raise ValueError("Only symmetric boxes track column words")
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "cols", cols)

    @classmethod
    def empty(cls, row_dim: int, col_dim: int, symmetric: bool = False) -> "WordBox":
        return cls(row_dim=row_dim, col_dim=col_dim, symmetric=symmetric)

    @classmethod
    def seeded(cls, word: str, symmetric: bool = True) -> "WordBox":
        """Return a square box whose first row (and column) is ``word``."""

        size = len(word)
        return cls.empty(size, size, symmetric=symmetric).add_word(word)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    def is_done(self) -> bool:
        return len(self.rows) == self.row_dim

    @staticmethod
    def take_ith_characters(words: Sequence[str], i: int) -> str:
        """Project the ``i``-th character of each word, in order."""

        try:
            return "".join(word[i] for word in words)
        except IndexError as exc:
            short = [word for word in words if len(word) <= i]
            raise BoxInvariantError(
                f"Position {i} is out of range for {short!r}"
            ) from exc

    def column_prefix(self, i: int) -> str:
        return self.take_ith_characters(self.rows, i)

    def column_prefixes(self) -> List[str]:
        return [self.column_prefix(i) for i in range(self.col_dim)]

    def next_row_prefix(self) -> str:
        """Characters the next row is forced to start with.

        Plain boxes leave the next row unconstrained. In a symmetric box
        the next row equals the next column, whose leading characters are
        already fixed by the rows placed so far.
        """

        if not self.symmetric or self.is_done():
            return ""
        return self.take_ith_characters(self.cols, len(self.rows))

    def is_valid_move(self, candidate: str, lexicon: "Lexicon") -> bool:
        """Check whether every column stays completable with ``candidate`` appended."""

        if len(candidate) != self.col_dim:
            raise BoxInvariantError(
                f"Row '{candidate}' does not span {self.col_dim} columns"
            )
        rows = self.rows + (candidate,)
        for i in range(self.col_dim):
            prefix = self.take_ith_characters(rows, i)
            if not lexicon.has_words_with_prefix(prefix, self.row_dim):
                return False
        return True

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def add_word(self, candidate: str) -> "WordBox":
        rows = self.rows + (candidate,)
        cols = self.cols + (candidate,) if self.symmetric else self.cols
        return replace(self, rows=rows, cols=cols)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def grid(self) -> List[List[str]]:
        cells = [[BLANK_CELL] * self.col_dim for _ in range(self.row_dim)]
        for r, word in enumerate(self.rows):
            for c, char in enumerate(word[: self.col_dim]):
                cells[r][c] = char
        return cells

    def __str__(self) -> str:
        return "\n".join("".join(row) for row in self.grid())
