"""Word square grid and its backtracking fill."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.constants import ALPHABET, DEFAULT_RENDER_INTERVAL, ROW_SEPARATOR, WILDCARD, Bounds
from ..core.exceptions import ConfigurationError
from ..core.models import FillResult, Hardening
from ..data.dictionary import Dictionary
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Snapshot = Tuple[str, ...]
ProgressCallback = Callable[[Snapshot], None]


class MagicSquare:
    """A ``rows x cols`` letter grid whose rows and columns must be words.

    Cells hold a lowercase letter or the wildcard ``_``. Hardened cells are
    fixed by the caller before :meth:`fill` and are never touched by the
    search; every other cell is editable and starts as the wildcard.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        dictionary: Dictionary,
        progress_callback: Optional[ProgressCallback] = None,
        render_interval: int = DEFAULT_RENDER_INTERVAL,
    ) -> None:
        if rows < 1 or cols < 1:
            raise ConfigurationError(f"Grid must have at least one row and column, got {rows}x{cols}")
        if render_interval < 1:
            raise ConfigurationError(f"render_interval must be positive, got {render_interval}")
        self.bounds = Bounds(rows=rows, cols=cols)
        self.dictionary = dictionary
        self.progress_callback = progress_callback
        self.render_interval = render_interval
        self.cells: List[List[str]] = [[WILDCARD] * cols for _ in range(rows)]
        self.editable_mask: List[List[bool]] = [[True] * cols for _ in range(rows)]
        self.attempts = 0

    @classmethod
    def empty(cls, rows: int, cols: int, dictionary: Dictionary, **kwargs: Any) -> "MagicSquare":
        return cls(rows, cols, dictionary, **kwargs)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    def get(self, row: int, col: int) -> str:
        self._check_bounds(row, col)
        return self.cells[row][col]

    def is_editable(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self.editable_mask[row][col]

    def row(self, index: int) -> str:
        return "".join(self.cells[index])

    def column(self, index: int) -> str:
        return "".join(line[index] for line in self.cells)

    def rows_as_words(self) -> List[str]:
        return [self.row(r) for r in range(self.rows)]

    def columns_as_words(self) -> List[str]:
        return [self.column(c) for c in range(self.cols)]

    def snapshot(self) -> Snapshot:
        return tuple(self.rows_as_words())

    def is_complete(self) -> bool:
        return all(WILDCARD not in line for line in self.cells)

    def hardened_cells(self) -> List[Hardening]:
        return [
            Hardening(row=r, col=c, letter=self.cells[r][c])
            for r, c in self.bounds.cells()
            if not self.editable_mask[r][c]
        ]

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "rows": self.rows_as_words(),
            "columns": self.columns_as_words(),
            "cells": [list(line) for line in self.cells],
            "editable": [list(line) for line in self.editable_mask],
        }

    def __str__(self) -> str:
        return "\n".join(self.rows_as_words())

    # ------------------------------------------------------------------
    # Hardening
    # ------------------------------------------------------------------
    def set_and_harden(self, row: int, col: int, letter: str) -> None:
        """Fix ``letter`` at ``(row, col)`` and exclude the cell from the search."""

        self._check_bounds(row, col)
        if len(letter) != 1 or letter == WILDCARD or letter.isspace():
            raise ConfigurationError(f"Cannot harden ({row}, {col}) with {letter!r}")
        self.cells[row][col] = letter.lower()
        self.editable_mask[row][col] = False

    def harden_pattern(self, pattern: str) -> List[Hardening]:
        """Harden cells from a row pattern such as ``"cat/__e"``.

        Rows are separated by ``/`` and ``_`` leaves a cell editable. Rows
        may be shorter than the grid; missing cells stay editable.
        """

        lines = pattern.split(ROW_SEPARATOR) if pattern else []
        if len(lines) > self.rows:
            raise ConfigurationError(
                f"Pattern has {len(lines)} rows but the grid only has {self.rows}"
            )
        applied: List[Hardening] = []
        for r, line in enumerate(lines):
            if len(line) > self.cols:
                raise ConfigurationError(
                    f"Pattern row {r} {line!r} is longer than the grid width {self.cols}"
                )
            for c, char in enumerate(line):
                if char == WILDCARD:
                    continue
                self.set_and_harden(r, c, char)
                applied.append(Hardening(row=r, col=c, letter=char.lower()))
        return applied

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.bounds.contains(row, col):
            raise ConfigurationError(
                f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid"
            )

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------
    def find_first_empty_cell(self) -> Optional[Tuple[int, int]]:
        for r, line in enumerate(self.cells):
            for c, char in enumerate(line):
                if char == WILDCARD and self.editable_mask[r][c]:
                    return r, c
        return None

    def fill(self, timeout_seconds: Optional[float] = None) -> FillResult:
        """Fill every editable cell so each row and column is a word.

        Cells are visited in row-major order and letters are tried from
        ``a`` to ``z``, so the result only depends on the dictionary and the
        hardened cells. Each candidate must leave its row and column either a
        dictionary word or a template with at least one match.

        The search keeps an explicit stack of ``[row, col, next_letter]``
        frames instead of recursing, so grid size is not bounded by the
        interpreter's recursion limit. Whenever the fill does not
        succeed, including when the progress callback raises, every editable
        cell is reset to the wildcard.
        """

        started = time.monotonic()
        deadline = started + timeout_seconds if timeout_seconds is not None else None
        self.attempts = 0
        LOGGER.info(
            "Filling %dx%d square with %d hardened cells",
            self.rows,
            self.cols,
            len(self.hardened_cells()),
        )

        blocked = self._check_hardened_lines()
        if blocked is not None:
            cell, message = blocked
            return self._failure(message, cell, started)

        first = self.find_first_empty_cell()
        if first is None:
            return self._success(started)

        try:
            return self._search(first, started, deadline, timeout_seconds)
        except Exception:
            self.reset()
            raise

    def _search(
        self,
        first: Tuple[int, int],
        started: float,
        deadline: Optional[float],
        timeout_seconds: Optional[float],
    ) -> FillResult:
        stack: List[List[int]] = [[first[0], first[1], 0]]
        failed_cell = first
        while stack:
            frame = stack[-1]
            row, col, next_index = frame
            if deadline is not None and time.monotonic() >= deadline:
                return self._failure(
                    f"Search timed out after {timeout_seconds:.1f}s at ({row}, {col})",
                    (row, col),
                    started,
                    timed_out=True,
                )

            # Undo the letter committed on the previous visit of this frame.
            self.cells[row][col] = WILDCARD
            committed = False
            while next_index < len(ALPHABET):
                letter = ALPHABET[next_index]
                next_index += 1
                self.attempts += 1
                if self.is_valid_letter(row, col, letter):
                    self.cells[row][col] = letter
                    committed = True
                    break
            frame[2] = next_index

            if not committed:
                stack.pop()
                failed_cell = (row, col)
                continue

            if self.attempts % self.render_interval == 0:
                self._report_progress()

            upcoming = self.find_first_empty_cell()
            if upcoming is None:
                return self._success(started)
            stack.append([upcoming[0], upcoming[1], 0])

        return self._failure(
            f"Could not fill square at ({failed_cell[0]}, {failed_cell[1]})",
            failed_cell,
            started,
        )

    def is_valid_letter(self, row: int, col: int, letter: str) -> bool:
        """Check the row and column probes formed by placing ``letter``."""

        row_probe = "".join(letter if c == col else char for c, char in enumerate(self.cells[row]))
        if not self.is_valid_word_or_template(row_probe):
            return False
        col_probe = "".join(letter if r == row else line[col] for r, line in enumerate(self.cells))
        return self.is_valid_word_or_template(col_probe)

    def is_valid_word_or_template(self, probe: str) -> bool:
        if WILDCARD not in probe:
            return self.dictionary.contains(probe)
        return self.dictionary.has_template_match(probe)

    def _check_hardened_lines(self) -> Optional[Tuple[Tuple[int, int], str]]:
        """Reject fully hardened rows or columns that are not words.

        The search only probes lines through editable cells, so these lines
        would otherwise slip into a "solved" grid unchecked.
        """

        for r in range(self.rows):
            if any(self.editable_mask[r]):
                continue
            word = self.row(r)
            if not self.dictionary.contains(word):
                return (r, 0), f"Hardened row {r} {word!r} is not a dictionary word"
        for c in range(self.cols):
            if any(line[c] for line in self.editable_mask):
                continue
            word = self.column(c)
            if not self.dictionary.contains(word):
                return (0, c), f"Hardened column {c} {word!r} is not a dictionary word"
        return None

    def _report_progress(self) -> None:
        if self.progress_callback is not None:
            self.progress_callback(self.snapshot())

    def reset(self) -> None:
        """Return every editable cell to the wildcard."""

        for r, c in self.bounds.cells():
            if self.editable_mask[r][c]:
                self.cells[r][c] = WILDCARD

    def _success(self, started: float) -> FillResult:
        elapsed = time.monotonic() - started
        LOGGER.info("Square filled after %d attempts in %.2fs", self.attempts, elapsed)
        return FillResult(ok=True, attempts=self.attempts, elapsed_seconds=elapsed)

    def _failure(
        self,
        message: str,
        cell: Tuple[int, int],
        started: float,
        timed_out: bool = False,
    ) -> FillResult:
        self.reset()
        elapsed = time.monotonic() - started
        LOGGER.warning("%s (%d attempts, %.2fs)", message, self.attempts, elapsed)
        return FillResult(
            ok=False,
            message=message,
            failed_cell=cell,
            timed_out=timed_out,
            attempts=self.attempts,
            elapsed_seconds=elapsed,
        )
