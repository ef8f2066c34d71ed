"""Shared helpers for word and template normalization."""

from __future__ import annotations

import re

from ..core.constants import WILDCARD

ALPHABETIC_RE = re.compile(r"^[a-z]+$")


def clean_word(text: str) -> str:
    """Return the stored form of ``text``: stripped and lowercased."""

    if not text:
        return ""
    return text.strip().lower()


def clean_template(template: str) -> str:
    """Lowercase a template; the wildcard passes through unchanged."""

    return template.lower()


def is_alphabetic(word: str) -> bool:
    """True when ``word`` only uses the letters ``a`` to ``z``."""

    return bool(ALPHABETIC_RE.match(word))


__all__ = ["clean_word", "clean_template", "is_alphabetic"]
