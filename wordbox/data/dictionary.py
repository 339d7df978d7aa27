"""Word list loading and lexicon construction."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..core.constants import LexiconKind
from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .lexicon import Lexicon, build_lexicon
from .normalization import filter_words


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading."""

    path: Path | str
    encoding: str = "utf-8"


class WordDictionary:
    """Loads a newline-delimited word list and keeps only plain lowercase words."""

    def __init__(self, config: Optional[DictionaryConfig] = None, words: Optional[Iterable[str]] = None) -> None:
        self.config = config
        if words is None:
            if config is None:
                raise ValueError("WordDictionary needs either a config or a word iterable")
            words = self._read_lines(config)
        self._words: Tuple[str, ...] = tuple(filter_words(words))
        self._word_set = frozenset(self._words)
        LOGGER.info("Dictionary ready with %d words", len(self._words))

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WordDictionary":
        return cls(words=words)

    @staticmethod
    def _read_lines(config: DictionaryConfig) -> Iterable[str]:
        source = Path(config.path)
        try:
            text = source.read_text(encoding=config.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(f"Cannot read word list {source}: {exc}") from exc
        return text.splitlines()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        return word in self._word_set

    def iter_length(self, length: int) -> Iterable[str]:
        return (word for word in self._words if len(word) == length)

    def build_lexicon(
        self,
        lengths: Iterable[int],
        kind: LexiconKind | str = LexiconKind.HASHED,
    ) -> Lexicon:
        lengths = sorted(set(lengths))
        lexicon = build_lexicon(kind, self._words, lengths)
        LOGGER.info(
            "Built %s lexicon for lengths %s (%d words)",
            LexiconKind(kind).value.lower(),
            lengths,
            len(lexicon),
        )
        return lexicon
