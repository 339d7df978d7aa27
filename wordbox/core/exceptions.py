"""Custom exception hierarchy for word box generation."""


class WordBoxError(Exception):
    """Base exception for generator failures."""


class DictionaryLoadError(WordBoxError):
    """Raised when the word list cannot be opened or decoded."""


class BoxInvariantError(WordBoxError, IndexError):
    """Raised when a box is asked for a character a row does not have."""


class ValidationError(WordBoxError):
    """Raised when a completed word box fails the integrity checks."""


class SearchCancelled(WordBoxError):
    """Raised inside a search when its cancellation token fires."""


class SearchTimeout(SearchCancelled):
    """Raised when a search runs past its wall-clock deadline."""
