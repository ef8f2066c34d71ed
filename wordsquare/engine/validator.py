"""Deterministic rule validation for filled word squares."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..core.constants import ALPHABET, WILDCARD
from ..core.exceptions import ValidationError
from ..core.models import Hardening
from ..data.dictionary import Dictionary
from ..utils.logger import get_logger
from .grid import MagicSquare


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SquareValidator:
    """Runs deterministic validation over a filled square."""

    def __init__(self, dictionary: Dictionary) -> None:
        self.dictionary = dictionary

    def validate(self, square: MagicSquare, hardenings: Iterable[Hardening] = ()) -> ValidationResult:
        try:
            self.check(square, hardenings)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def check(self, square: MagicSquare, hardenings: Iterable[Hardening] = ()) -> None:
        """Raise :class:`ValidationError` on the first broken rule."""

        self._check_complete(square)
        self._check_hardened(square, hardenings)
        self._check_letters_valid(square)
        self._check_lines(square)

    def _check_complete(self, square: MagicSquare) -> None:
        for r in range(square.rows):
            for c in range(square.cols):
                if square.get(r, c) == WILDCARD:
                    raise ValidationError(f"Unfilled cell at ({r},{c})")

    def _check_hardened(self, square: MagicSquare, hardenings: Iterable[Hardening]) -> None:
        for hardening in hardenings:
            actual = square.get(hardening.row, hardening.col)
            if actual != hardening.letter:
                raise ValidationError(
                    f"Hardened cell ({hardening.row},{hardening.col}) changed "
                    f"from '{hardening.letter}' to '{actual}'"
                )
            if square.is_editable(hardening.row, hardening.col):
                raise ValidationError(
                    f"Hardened cell ({hardening.row},{hardening.col}) is editable"
                )

    def _check_letters_valid(self, square: MagicSquare) -> None:
        for r in range(square.rows):
            for c in range(square.cols):
                letter = square.get(r, c)
                if square.is_editable(r, c) and letter not in ALPHABET:
                    raise ValidationError(f"Invalid letter '{letter}' at ({r},{c})")

    def _check_lines(self, square: MagicSquare) -> None:
        for r, word in enumerate(square.rows_as_words()):
            if not self.dictionary.contains(word):
                raise ValidationError(f"Invalid word '{word}' in row {r}")
        for c, word in enumerate(square.columns_as_words()):
            if not self.dictionary.contains(word):
                raise ValidationError(f"Invalid word '{word}' in column {c}")
