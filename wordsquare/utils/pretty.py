"""Pretty-print helpers for word squares."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..engine.generator import SquareResult
    from ..engine.grid import MagicSquare


CLEAR_SCREEN = "\x1b[2J\x1b[H"


def format_rows(rows: Sequence[str]) -> str:
    """Render row strings as space-separated letters, one row per line."""
    return "\n".join(" ".join(row) for row in rows)


def format_square(square: MagicSquare) -> str:
    """Render the grid with row and column indices.

    Hardened letters are shown uppercase so they stand apart from letters
    the search placed.
    """
    header = " ".join(f"{c:>2}" for c in square.bounds.col_range())
    lines = ["    " + header, "    " + "-" * len(header)]
    for r in square.bounds.row_range():
        symbols = []
        for c in square.bounds.col_range():
            letter = square.get(r, c)
            symbols.append(letter if square.is_editable(r, c) else letter.upper())
        lines.append(f"{r:>2} | " + " ".join(f"{s:>2}" for s in symbols))
    return "\n".join(lines)


def pretty_print_square(square: MagicSquare, *, label: str | None = None, stream=None) -> None:
    """Print the square in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_square(square), file=stream)


class ProgressPrinter:
    """Progress callback that redraws the in-progress grid in place.

    Pass an instance as ``progress_callback`` to a square; it only reads
    the snapshots it receives.
    """

    def __init__(self, stream=None, clear: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.clear = clear
        self.frames = 0

    def __call__(self, snapshot: Sequence[str]) -> None:
        self.frames += 1
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        print(format_rows(snapshot), file=self.stream)
        self.stream.flush()


def print_square_summary(result: SquareResult, *, stream=None) -> None:
    """Print the solved grid, its words and the letters as one string."""

    stream = stream or sys.stdout
    square = result.square
    fill = result.fill

    if not fill.ok:
        print(f"Could not fill square: {fill.message}", file=stream)
        if result.hardenings:
            pretty_print_square(square, label="Hardened cells:", stream=stream)
        return

    print("--- Rows ---", file=stream)
    for word in square.rows_as_words():
        print(f"  {word}", file=stream)
    print("--- Columns ---", file=stream)
    for word in square.columns_as_words():
        print(f"  {word}", file=stream)

    print(file=stream)
    print(format_rows(square.rows_as_words()), file=stream)
    print(file=stream)
    print("".join(square.rows_as_words()).upper(), file=stream)

    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Size:          {square.rows} x {square.cols}", file=stream)
    print(f"  Hardened:      {len(result.hardenings)}", file=stream)
    if fill.attempts:
        print(f"  Attempts:      {fill.attempts}", file=stream)
    print(f"  Elapsed:       {fill.elapsed_seconds:.2f}s", file=stream)

    if result.validation and result.validation.messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation.messages:
            print(f"  {msg}", file=stream)
