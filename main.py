"""CLI entrypoint for the word magic square generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from wordsquare.core.constants import DEFAULT_PATTERN, DEFAULT_RENDER_INTERVAL, DEFAULT_ROWS, Engine
from wordsquare.core.exceptions import ConfigurationError, DictionaryLoadError
from wordsquare.engine.generator import SquareConfig, SquareGenerator, SquareResult
from wordsquare.utils.logger import configure_logging
from wordsquare.utils.pretty import ProgressPrinter, print_square_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate word magic squares: grids whose rows and columns are all words",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--dictionary",
        type=Path,
        help="Word list with one word per line (default: the OS word list)",
    )
    source.add_argument(
        "--dictionary-url",
        type=str,
        help="Download the word list from this URL instead",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        default=None,
        help=(
            "Fixed letters, rows separated by '/', '_' for free cells (e.g. 'cat/__e'). "
            f"Without --pattern or --cols the grid is {len(DEFAULT_PATTERN)} columns wide"
        ),
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Grid height in cells")
    parser.add_argument(
        "--cols",
        type=int,
        help="Grid width in cells (default: width of the first pattern row)",
    )
    parser.add_argument(
        "--engine",
        type=str,
        choices=[e.value for e in Engine],
        default=Engine.BACKTRACK.value,
        help="Fill engine",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Redraw the grid while the search runs",
    )
    parser.add_argument(
        "--render-interval",
        type=int,
        default=DEFAULT_RENDER_INTERVAL,
        help="Redraw on every Nth attempted letter (default 5)",
    )
    parser.add_argument(
        "--alphabetic-only",
        action="store_true",
        help="Ignore dictionary words with characters outside a-z",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Search deadline in seconds")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_payload(result: SquareResult) -> Dict[str, Any]:
    fill = result.fill
    return {
        "ok": result.ok,
        "message": fill.message,
        "failed_cell": list(fill.failed_cell) if fill.failed_cell else None,
        "timed_out": fill.timed_out,
        "attempts": fill.attempts,
        "elapsed_seconds": round(fill.elapsed_seconds, 4),
        "hardened": [[h.row, h.col, h.letter] for h in result.hardenings],
        "grid": result.square.to_jsonable(),
        "validation": result.validation.messages if result.validation else [],
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    pattern = args.pattern
    if pattern is None:
        pattern = "" if args.cols is not None else DEFAULT_PATTERN

    config = SquareConfig(
        rows=args.rows,
        cols=args.cols,
        pattern=pattern,
        dictionary_path=args.dictionary,
        dictionary_url=args.dictionary_url,
        engine=args.engine,
        render_interval=args.render_interval,
        timeout_seconds=args.timeout,
        alphabetic_only=args.alphabetic_only,
    )

    progress = ProgressPrinter() if args.render else None
    try:
        generator = SquareGenerator(config, progress_callback=progress)
        result = generator.generate()
    except (ConfigurationError, DictionaryLoadError) as exc:
        parser.error(str(exc))

    print_square_summary(result)

    if args.output:
        output_text = json.dumps(build_payload(result), ensure_ascii=False, indent=2)
        args.output.write_text(output_text, encoding="utf-8")

    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
