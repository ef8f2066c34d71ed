"""Data models supporting the word square generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import SearchTimeoutError, UnsolvableError


@dataclass(frozen=True)
class Hardening:
    """A caller-fixed letter at a grid coordinate."""

    row: int
    col: int
    letter: str


@dataclass
class FillResult:
    """Outcome of a fill attempt.

    An unsolvable square is a regular negative result, not an exception.
    Callers who prefer exceptions use :meth:`raise_for_status`.
    """

    ok: bool
    message: str = ""
    failed_cell: Optional[Tuple[int, int]] = None
    timed_out: bool = False
    attempts: int = 0
    elapsed_seconds: float = 0.0

    def raise_for_status(self) -> None:
        if self.ok:
            return
        if self.timed_out:
            raise SearchTimeoutError(self.message, self.failed_cell)
        raise UnsolvableError(self.message, self.failed_cell)
