# wordbrowser/core/domain/exceptions.py
"""
Domain error kinds.

None of these are fatal to the running process. Each one is caught at a
well-known seam and degrades to an empty collection, a logged warning or a
fallback glyph:

- DataLoadFailure / DataFormatInvalid  -> LoadDataset use case
- PersistenceFailure                   -> WordStore mutation methods
- IconResolutionFailure                -> IconResolver
"""

from typing import List, Optional


class WordBrowserError(Exception):
    """Base class for all word browser errors."""
    pass


class DataLoadFailure(WordBrowserError):
    """Every dataset candidate failed or answered with a non-success status."""

    def __init__(self, message: str, attempts: Optional[List[str]] = None):
        super().__init__(message)
        self.attempts = attempts or []


class DataFormatInvalid(WordBrowserError):
    """The dataset payload is not a JSON array."""
    pass


class PersistenceFailure(WordBrowserError):
    """The storage backend rejected a write (quota, disabled, I/O error)."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Could not persist '{key}': {reason}")
        self.key = key
        self.reason = reason


class IconResolutionFailure(WordBrowserError):
    """A single entry's icon could not be fetched."""
    pass


__all__ = [
    "WordBrowserError",
    "DataLoadFailure",
    "DataFormatInvalid",
    "PersistenceFailure",
    "IconResolutionFailure",
]
