"""Shared constants and enumerations for the word box generator."""

from __future__ import annotations

from enum import Enum


class SearchStrategy(str, Enum):
    """Search procedures available to the generator."""

    DEPTH_FIRST = "DEPTH_FIRST"
    BREADTH_FIRST = "BREADTH_FIRST"
    CPSAT = "CPSAT"


class LexiconKind(str, Enum):
    """Prefix oracle implementations."""

    VECTOR = "VECTOR"
    HASHED = "HASHED"


class SearchStatus(str, Enum):
    """Terminal outcome of a generation run."""

    SOLVED = "SOLVED"
    EXHAUSTED = "EXHAUSTED"
    TIMED_OUT = "TIMED_OUT"
    CANCELLED = "CANCELLED"


BLANK_CELL = "_"
