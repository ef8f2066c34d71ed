"""Word square generation orchestration.

Resolves the configuration, loads the dictionary, applies hardened cells,
runs the selected fill engine and validates the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_RENDER_INTERVAL, DEFAULT_ROWS, ROW_SEPARATOR, WILDCARD, Engine
from ..core.exceptions import ConfigurationError
from ..core.models import FillResult, Hardening
from ..data.dictionary import Dictionary, DictionaryConfig, load_dictionary
from ..utils.logger import get_logger
from .grid import MagicSquare, ProgressCallback
from .validator import SquareValidator, ValidationResult


LOGGER = get_logger(__name__)


@dataclass
class SquareConfig:
    """Shape, fixed letters and search settings for one square."""

    rows: int = DEFAULT_ROWS
    cols: Optional[int] = None
    pattern: str = ""
    hardenings: Sequence[Tuple[int, int, str]] = field(default_factory=list)
    dictionary_path: Path | str | None = None
    dictionary_url: Optional[str] = None
    engine: Engine | str = Engine.BACKTRACK
    render_interval: int = DEFAULT_RENDER_INTERVAL
    timeout_seconds: Optional[float] = None
    alphabetic_only: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.engine, str) and not isinstance(self.engine, Engine):
            try:
                self.engine = Engine(self.engine)
            except ValueError as exc:
                choices = ", ".join(e.value for e in Engine)
                raise ConfigurationError(
                    f"Unknown engine '{self.engine}'. Must be one of: {choices}"
                ) from exc

    @property
    def pattern_rows(self) -> List[str]:
        return self.pattern.split(ROW_SEPARATOR) if self.pattern else []

    def resolved_cols(self) -> Optional[int]:
        """Explicit ``cols``, else the width of the first pattern row."""
        if self.cols is not None:
            return self.cols
        rows = self.pattern_rows
        return len(rows[0]) if rows else None

    def pattern_letters(self) -> Dict[Tuple[int, int], str]:
        """Cells the pattern fixes, mapped to their lowercase letter."""
        return {
            (r, c): char.lower()
            for r, line in enumerate(self.pattern_rows)
            for c, char in enumerate(line)
            if char != WILDCARD
        }

    def validate(self) -> List[str]:
        """Return validation error messages (empty if valid)."""
        errors: List[str] = []
        cols = self.resolved_cols()

        if self.rows < 1:
            errors.append(f"rows must be positive, got {self.rows}")
        if cols is None:
            errors.append("cols must be given when no pattern is supplied")
        elif cols < 1:
            errors.append(f"cols must be positive, got {cols}")

        pattern_rows = self.pattern_rows
        if len(pattern_rows) > self.rows:
            errors.append(f"Pattern has {len(pattern_rows)} rows but rows is {self.rows}")
        if cols is not None:
            for index, line in enumerate(pattern_rows):
                if len(line) > cols:
                    errors.append(f"Pattern row {index} '{line}' is wider than {cols} columns")

        fixed = self.pattern_letters()
        for row, col, letter in self.hardenings:
            if not (0 <= row < self.rows) or cols is None or not (0 <= col < cols):
                errors.append(f"Hardened cell ({row}, {col}) is outside the grid")
            if len(letter) != 1 or letter == WILDCARD or letter.isspace():
                errors.append(f"Hardened cell ({row}, {col}) needs a single letter, got '{letter}'")
                continue
            previous = fixed.setdefault((row, col), letter.lower())
            if previous != letter.lower():
                errors.append(
                    f"Hardened cell ({row}, {col}) is fixed to both '{previous}' and '{letter.lower()}'"
                )

        if self.render_interval < 1:
            errors.append("render_interval must be positive")
        if self.timeout_seconds is not None and self.timeout_seconds < 0:
            errors.append("timeout_seconds must be non-negative")
        if self.dictionary_path and self.dictionary_url:
            errors.append("dictionary_path and dictionary_url are mutually exclusive")
        return errors

    def to_dictionary_config(self) -> DictionaryConfig:
        """Load only words that can fill a row or a column of this shape."""
        cols = self.resolved_cols() or self.rows
        return DictionaryConfig(
            path=self.dictionary_path,
            url=self.dictionary_url,
            min_length=min(self.rows, cols),
            max_length=max(self.rows, cols),
            alphabetic_only=self.alphabetic_only,
        )


@dataclass
class SquareResult:
    square: MagicSquare
    fill: FillResult
    hardenings: List[Hardening] = field(default_factory=list)
    validation: Optional[ValidationResult] = None

    @property
    def ok(self) -> bool:
        return self.fill.ok and (self.validation is None or self.validation.ok)


class SquareGenerator:
    """High-level orchestrator: configuration, hardening, fill, validation."""

    def __init__(
        self,
        config: SquareConfig,
        dictionary: Optional[Dictionary] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        errors = config.validate()
        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )
        self.config = config
        self.dictionary = dictionary if dictionary is not None else load_dictionary(
            config.to_dictionary_config()
        )
        self.progress_callback = progress_callback
        self.validator = SquareValidator(self.dictionary)

    def build_square(self) -> Tuple[MagicSquare, List[Hardening]]:
        """Create the empty square and apply every hardened cell."""
        cols = self.config.resolved_cols()
        assert cols is not None
        square = MagicSquare.empty(
            self.config.rows,
            cols,
            self.dictionary,
            progress_callback=self.progress_callback,
            render_interval=self.config.render_interval,
        )
        hardenings = square.harden_pattern(self.config.pattern)
        for row, col, letter in self.config.hardenings:
            hardening = Hardening(row=row, col=col, letter=letter.lower())
            if hardening in hardenings:
                continue
            square.set_and_harden(row, col, letter)
            hardenings.append(hardening)
        return square, hardenings

    def generate(self) -> SquareResult:
        square, hardenings = self.build_square()
        LOGGER.info(
            "Generating %dx%d square with the %s engine (%d words in dictionary)",
            square.rows,
            square.cols,
            Engine(self.config.engine).value,
            len(self.dictionary),
        )

        if self.config.engine == Engine.CP_SAT:
            from .solver import solve_with_cp_sat

            fill = solve_with_cp_sat(square, timeout_seconds=self.config.timeout_seconds)
        else:
            fill = square.fill(timeout_seconds=self.config.timeout_seconds)

        result = SquareResult(square=square, fill=fill, hardenings=hardenings)
        if fill.ok:
            result.validation = self.validator.validate(square, hardenings)
        return result
