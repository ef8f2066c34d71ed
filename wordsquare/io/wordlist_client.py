"""Lightweight HTTP client for downloading word lists."""

from __future__ import annotations

import requests

from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class WordListDownloadError(RuntimeError):
    """Raised when a word list cannot be downloaded or decoded."""


class WordListClient:
    """Minimal client fetching line-delimited word lists over HTTP."""

    def __init__(self, timeout_seconds: float = 30.0) -> None:
        self.timeout_seconds = timeout_seconds

    def fetch(self, url: str) -> str:
        """Download ``url`` and return its body decoded as UTF-8 text."""
        LOGGER.info("Downloading word list from %s", url)
        try:
            response = requests.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WordListDownloadError(f"Word list request failed: {exc}") from exc

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            LOGGER.warning("Word list at %s is not UTF-8 text", url)
            raise WordListDownloadError(f"Word list at {url} is not valid UTF-8: {exc}") from exc
