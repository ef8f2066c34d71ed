"""Word magic square generator.

This package exposes the public API surface via:

- ``wordsquare.data.dictionary.Dictionary``: word storage with template queries.
- ``wordsquare.engine.grid.MagicSquare``: the grid and its backtracking fill.
- ``wordsquare.engine.generator.SquareGenerator``: config-driven orchestration.
"""

from .core.models import FillResult, Hardening
from .data.dictionary import Dictionary, DictionaryConfig, load_dictionary
from .engine.generator import SquareConfig, SquareGenerator, SquareResult
from .engine.grid import MagicSquare

__all__ = [
    "Dictionary",
    "DictionaryConfig",
    "FillResult",
    "Hardening",
    "MagicSquare",
    "SquareConfig",
    "SquareGenerator",
    "SquareResult",
    "load_dictionary",
]

__version__ = "0.1.0"
