"""Logging setup for the word square generator.

Everything logs under the ``wordsquare`` namespace. The fill engines log
once per run, never per attempted letter, and the live grid goes through
:class:`wordsquare.utils.pretty.ProgressPrinter` instead of the log.
"""

from __future__ import annotations

import logging
from typing import Optional

ROOT_LOGGER = "wordsquare"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# Third-party loggers that are only interesting when something goes wrong.
_CHATTY_LOGGERS = ("urllib3",)


def resolve_level(level: int | str) -> int:
    """Accept ``logging.DEBUG`` or a name such as ``"debug"``; unknown names mean INFO."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: int | str = logging.INFO) -> None:
    """Install a single stderr handler with the compact run format."""

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))

    # Connection chatter stays out of DEBUG runs.
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``wordsquare`` namespace, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER)
