"""Word box generator: square letter grids whose rows and columns are all words.

This package exposes the public API surface via:

- ``wordbox.engine.generator.WordBoxGenerator``: orchestrates a search run.
- ``wordbox.data.dictionary.WordDictionary``: loads and filters the word list.
- ``wordbox.data.lexicon``: the prefix oracles consulted by every search.
- ``wordbox.core.models.WordBox``: the persistent grid state.
"""

from .core.models import WordBox
from .data.dictionary import DictionaryConfig, WordDictionary
from .data.lexicon import HashedLexicon, VectorLexicon, build_lexicon
from .engine.generator import GeneratorConfig, WordBoxGenerator, WordBoxResult

__all__ = [
    "DictionaryConfig",
    "GeneratorConfig",
    "HashedLexicon",
    "VectorLexicon",
    "WordBox",
    "WordBoxGenerator",
    "WordBoxResult",
    "WordDictionary",
    "build_lexicon",
]

__version__ = "0.1.0"
