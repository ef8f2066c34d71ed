"""CP-SAT word square filling using OR-Tools."""

from __future__ import annotations

import time
from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import ALPHABET, WILDCARD
from ..core.models import FillResult
from ..data.normalization import is_alphabetic
from ..utils.logger import get_logger
from .grid import MagicSquare

LOGGER = get_logger(__name__)


def solve_with_cp_sat(
    square: MagicSquare,
    timeout_seconds: Optional[float] = 30.0,
    num_workers: int = 1,
    random_seed: int = 0,
) -> FillResult:
    """Fill ``square`` by modelling it as a constraint program.

    Every editable cell becomes an integer variable over ``a``-``z`` and
    every row and column gets a table constraint listing the dictionary
    words of its length. Hardened cells are constants. The solution found
    need not match the one the backtracking fill returns.

    Args:
        square: Grid with hardened cells already applied.
        timeout_seconds: Solver time limit; ``None`` disables it.
        num_workers: CP-SAT search workers. One keeps runs reproducible.
        random_seed: Seed for the CP-SAT search.

    Returns:
        A :class:`FillResult`. On success the editable cells hold the
        solution, otherwise they are left as wildcards.
    """
    started = time.monotonic()
    square.reset()
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell letter variables
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], object] = {}  # (r,c) -> IntVar or int
    for r in range(square.rows):
        for c in range(square.cols):
            if square.is_editable(r, c):
                cell_vars[(r, c)] = model.new_int_var(0, len(ALPHABET) - 1, f"L_{r}_{c}")
            else:
                letter = square.get(r, c)
                if letter not in ALPHABET:
                    return _failure(
                        square,
                        f"Hardened letter {letter!r} at ({r}, {c}) is outside a-z",
                        (r, c),
                        started,
                    )
                cell_vars[(r, c)] = ALPHABET.index(letter)

    # ------------------------------------------------------------------
    # Step 2: One table constraint per row and per column
    # ------------------------------------------------------------------
    lines: List[Tuple[str, int, List[Tuple[int, int]]]] = []
    lines.extend(("row", r, [(r, c) for c in range(square.cols)]) for r in range(square.rows))
    lines.extend(("column", c, [(r, c) for r in range(square.rows)]) for c in range(square.cols))

    for kind, index, cells in lines:
        pattern = "".join(
            WILDCARD if _is_var(cell_vars[cell]) else ALPHABET[cell_vars[cell]] for cell in cells
        )
        words = [w for w in square.dictionary.search_with_template(pattern) if is_alphabetic(w)]
        if not words:
            LOGGER.debug("No candidates for %s %d pattern %s", kind, index, pattern)
            first_cell = cells[0]
            return _failure(
                square,
                f"No dictionary word fits {kind} {index} ({pattern})",
                first_cell,
                started,
            )
        cell_list = [cell_vars[cell] for cell in cells]
        if any(_is_var(v) for v in cell_list):
            model.add_allowed_assignments(
                cell_list, [[ALPHABET.index(ch) for ch in word] for word in words]
            )

    # ------------------------------------------------------------------
    # Step 3: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    if timeout_seconds is not None:
        solver.parameters.max_time_in_seconds = timeout_seconds
    solver.parameters.num_workers = num_workers
    solver.parameters.random_seed = random_seed

    LOGGER.info(
        "CP-SAT: %d cell vars, %d line constraints, solving...",
        sum(1 for v in cell_vars.values() if _is_var(v)),
        len(lines),
    )
    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        timed_out = status == cp_model.UNKNOWN
        return _failure(
            square,
            f"CP-SAT found no solution (status={solver.status_name(status)})",
            None,
            started,
            timed_out=timed_out,
        )

    # ------------------------------------------------------------------
    # Step 4: Extract solution
    # ------------------------------------------------------------------
    for (r, c), var in cell_vars.items():
        if _is_var(var):
            square.cells[r][c] = ALPHABET[solver.value(var)]

    elapsed = time.monotonic() - started
    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)
    return FillResult(ok=True, elapsed_seconds=elapsed)


def _is_var(var_or_const: object) -> bool:
    return isinstance(var_or_const, cp_model.IntVar)


def _failure(
    square: MagicSquare,
    message: str,
    cell: Optional[Tuple[int, int]],
    started: float,
    timed_out: bool = False,
) -> FillResult:
    square.reset()
    LOGGER.warning("CP-SAT: %s", message)
    return FillResult(
        ok=False,
        message=message,
        failed_cell=cell,
        timed_out=timed_out,
        elapsed_seconds=time.monotonic() - started,
    )
