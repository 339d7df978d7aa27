"""Word list filtering helpers."""

from __future__ import annotations

from typing import Iterable, List


def is_plain_word(text: str) -> bool:
    """Return ``True`` for non-empty, lowercase, purely alphabetic entries.

    Entries are never normalized: ``"Cat"``, ``"dog "`` and ``"bird!"`` are
    rejected outright rather than lowered or stripped.
    """

    return bool(text) and text.isalpha() and text.islower()


def filter_words(lines: Iterable[str]) -> List[str]:
    """Keep the plain words from ``lines`` in input order, without duplicates."""

    return list(dict.fromkeys(line for line in lines if is_plain_word(line)))


__all__ = ["filter_words", "is_plain_word"]
