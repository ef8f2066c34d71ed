"""Custom exception hierarchy for word square generation."""

from __future__ import annotations

from typing import Optional, Tuple


class WordSquareError(Exception):
    """Base exception for generator failures."""


class DictionaryLoadError(WordSquareError):
    """Raised when a word list cannot be read or decoded."""


class ConfigurationError(WordSquareError):
    """Raised when the grid shape or hardened cells are malformed."""


class UnsolvableError(WordSquareError):
    """Raised when no completion of the square exists."""

    def __init__(self, message: str, cell: Optional[Tuple[int, int]] = None) -> None:
        super().__init__(message)
        self.cell = cell


class SearchTimeoutError(UnsolvableError):
    """Raised when the search deadline expires before a verdict."""


class ValidationError(WordSquareError):
    """Raised when a filled square fails the integrity checks."""
