"""Prefix oracles answering "which words of length L start with P"."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Protocol, Tuple, Type

from ..core.constants import LexiconKind


class Lexicon(Protocol):
    """Read-only prefix oracle shared by every search branch."""

    lengths: FrozenSet[int]

    def words_with_prefix(self, prefix: str, word_len: int) -> Tuple[str, ...]:
        ...

    def has_words_with_prefix(self, prefix: str, word_len: int) -> bool:
        ...

    def contains(self, word: str) -> bool:
        ...


def _retain(words: Iterable[str], lengths: FrozenSet[int]) -> List[str]:
    return [word for word in dict.fromkeys(words) if len(word) in lengths]


class VectorLexicon:
    """Linear scan over the retained words; trivial to build, O(N) per query."""

    def __init__(self, words: Iterable[str], lengths: Iterable[int]) -> None:
        self.lengths = frozenset(lengths)
        self._words: Tuple[str, ...] = tuple(_retain(words, self.lengths))

    @classmethod
    def from_words(cls, words: Iterable[str], lengths: Iterable[int]) -> "VectorLexicon":
        return cls(words, lengths)

    def words_with_prefix(self, prefix: str, word_len: int) -> Tuple[str, ...]:
        return tuple(
            word for word in self._words if len(word) == word_len and word.startswith(prefix)
        )

    def has_words_with_prefix(self, prefix: str, word_len: int) -> bool:
        return any(len(word) == word_len and word.startswith(prefix) for word in self._words)

    def contains(self, word: str) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __str__(self) -> str:
        return ", ".join(self._words)


class HashedLexicon:
    """Every retained word filed under each of its prefixes.

    Building costs O(N * L); a query is a single dictionary lookup keyed by
    ``(word_len, prefix)``. Buckets keep dictionary insertion order.
    """

    def __init__(self, words: Iterable[str], lengths: Iterable[int]) -> None:
        self.lengths = frozenset(lengths)
        buckets: Dict[Tuple[int, str], List[str]] = defaultdict(list)
        count = 0
        for word in _retain(words, self.lengths):
            count += 1
            for i in range(len(word) + 1):
                buckets[(len(word), word[:i])].append(word)
        self._index: Dict[Tuple[int, str], Tuple[str, ...]] = {
            key: tuple(bucket) for key, bucket in buckets.items()
        }
        self._size = count

    @classmethod
    def from_words(cls, words: Iterable[str], lengths: Iterable[int]) -> "HashedLexicon":
        return cls(words, lengths)

    def words_with_prefix(self, prefix: str, word_len: int) -> Tuple[str, ...]:
        return self._index.get((word_len, prefix), ())

    def has_words_with_prefix(self, prefix: str, word_len: int) -> bool:
        return (word_len, prefix) in self._index

    def contains(self, word: str) -> bool:
        return (len(word), word) in self._index

    def __len__(self) -> int:
        return self._size


LEXICON_TYPES: Dict[LexiconKind, Type] = {
    LexiconKind.VECTOR: VectorLexicon,
    LexiconKind.HASHED: HashedLexicon,
}


def build_lexicon(
    kind: LexiconKind | str,
    words: Iterable[str],
    lengths: Iterable[int],
) -> Lexicon:
    """Construct the lexicon implementation named by ``kind``."""

    lexicon_type = LEXICON_TYPES[LexiconKind(kind)]
    return lexicon_type.from_words(words, lengths)


__all__ = ["Lexicon", "VectorLexicon", "HashedLexicon", "build_lexicon", "LEXICON_TYPES"]
