"""Shared constants and enumerations for the word square generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from string import ascii_lowercase
from typing import Iterator, Tuple


WILDCARD = "_"
ALPHABET = ascii_lowercase
ROW_SEPARATOR = "/"

DEFAULT_ROWS = 4
DEFAULT_PATTERN = "_____"
DEFAULT_RENDER_INTERVAL = 5
OS_WORDLIST_PATH = Path("/usr/share/dict/words")


class Engine(str, Enum):
    """Fill engines supported by the generator."""

    BACKTRACK = "backtrack"
    CP_SAT = "cp-sat"


@dataclass(frozen=True)
class Bounds:
    """Shape of a square; rows and columns may differ."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def row_range(self) -> range:
        return range(self.rows)

    def col_range(self) -> range:
        return range(self.cols)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield every coordinate in row-major order, the search order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col
