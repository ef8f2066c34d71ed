"""Word list storage with exact and template lookups."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from ..core.constants import OS_WORDLIST_PATH, WILDCARD
from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import clean_template, clean_word, is_alphabetic


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Where to read the word list from and how to filter it.

    Sources are tried in order: ``url``, then ``path``, then the OS word list.
    """

    path: Path | str | None = None
    url: Optional[str] = None
    min_length: int = 1
    max_length: Optional[int] = None
    alphabetic_only: bool = False
    timeout_seconds: float = 30.0


class Dictionary:
    """Immutable set of lowercase words.

    Besides exact membership the dictionary answers template queries, where
    ``_`` matches any single character. A positional index keyed by word
    length restricts each query to the words that can possibly match.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        cleaned = {clean_word(word) for word in words}
        cleaned.discard("")
        self._words: FrozenSet[str] = frozenset(cleaned)
        self._words_by_length: Dict[int, Set[str]] = defaultdict(set)
        # Positional index: length -> (position, letter) -> set of words
        self._position_index: Dict[int, Dict[Tuple[int, str], Set[str]]] = defaultdict(
            lambda: defaultdict(set)
        )
        for word in self._words:
            self._words_by_length[len(word)].add(word)
            length_index = self._position_index[len(word)]
            for pos, char in enumerate(word):
                length_index[(pos, char)].add(word)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Dictionary":
        return cls(words)

    @classmethod
    def from_text(cls, text: str) -> "Dictionary":
        """Build a dictionary from line-delimited text."""

        return cls(text.splitlines())

    @classmethod
    def from_file(cls, path: Path | str) -> "Dictionary":
        """Read a word list with one word per line.

        Raises :class:`DictionaryLoadError` when the file is missing,
        unreadable or not valid UTF-8.
        """

        source = Path(path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing dictionary file: {source}")
        try:
            text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DictionaryLoadError(f"Dictionary file {source} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise DictionaryLoadError(f"Could not read dictionary file {source}: {exc}") from exc
        dictionary = cls.from_text(text)
        LOGGER.info("Loaded %d words from %s", len(dictionary), source)
        return dictionary

    @classmethod
    def from_os_dict(cls, path: Path | str = OS_WORDLIST_PATH) -> "Dictionary":
        """Read the word list shipped with the operating system."""

        try:
            return cls.from_file(path)
        except DictionaryLoadError as exc:
            raise DictionaryLoadError(f"Could not read OS dictionary: {exc}") from exc

    @classmethod
    def from_url(cls, url: str, timeout_seconds: float = 30.0) -> "Dictionary":
        """Download a line-delimited word list over HTTP."""

        from ..io.wordlist_client import WordListClient, WordListDownloadError

        client = WordListClient(timeout_seconds=timeout_seconds)
        try:
            text = client.fetch(url)
        except WordListDownloadError as exc:
            raise DictionaryLoadError(str(exc)) from exc
        dictionary = cls.from_text(text)
        LOGGER.info("Loaded %d words from %s", len(dictionary), url)
        return dictionary

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    @property
    def words(self) -> FrozenSet[str]:
        return self._words

    def contains(self, word: str) -> bool:
        """Exact membership; queries must already be lowercase to match."""

        return word in self._words

    def search_with_template(self, template: str) -> List[str]:
        """Return every word matching ``template``.

        ``"__mon"`` matches ``"demon"`` and ``"lemon"`` but not ``"human"``.
        Words of a different length never match.
        """

        constraints = self._template_constraints(clean_template(template))
        if constraints is None:
            return []
        if not constraints:
            return sorted(self._words_by_length.get(len(template), ()))

        constraints.sort(key=len)
        result = set(constraints[0])
        for candidates in constraints[1:]:
            result &= candidates
            if not result:
                return []
        return sorted(result)

    def count_with_template(self, template: str) -> int:
        return len(self.search_with_template(template))

    def has_template_match(self, template: str) -> bool:
        """Existence probe that stops at the first matching word."""

        constraints = self._template_constraints(clean_template(template))
        if constraints is None:
            return False
        if not constraints:
            return bool(self._words_by_length.get(len(template)))

        constraints.sort(key=len)
        smallest, rest = constraints[0], constraints[1:]
        return any(all(word in candidates for candidates in rest) for word in smallest)

    def _template_constraints(self, template: str) -> Optional[List[Set[str]]]:
        """Collect the index sets a template must intersect.

        Returns ``None`` when some fixed position has no candidate at all.
        """

        length_index = self._position_index.get(len(template))
        if not length_index:
            return None

        constraints: List[Set[str]] = []
        for pos, letter in enumerate(template):
            if letter == WILDCARD:
                continue
            match_set = length_index.get((pos, letter))
            if match_set is None:
                return None
            constraints.append(match_set)
        return constraints

    def filtered(
        self,
        min_length: int = 1,
        max_length: Optional[int] = None,
        alphabetic_only: bool = False,
    ) -> "Dictionary":
        """Return a new dictionary restricted by length and character set."""

        selected = []
        for word in self._words:
            if len(word) < min_length:
                continue
            if max_length is not None and len(word) > max_length:
                continue
            if alphabetic_only and not is_alphabetic(word):
                continue
            selected.append(word)
        return Dictionary(selected)


def load_dictionary(config: DictionaryConfig) -> Dictionary:
    """Load and filter a dictionary as described by ``config``."""

    if config.url:
        dictionary = Dictionary.from_url(config.url, timeout_seconds=config.timeout_seconds)
    elif config.path:
        dictionary = Dictionary.from_file(config.path)
    else:
        dictionary = Dictionary.from_os_dict()

    if config.min_length > 1 or config.max_length is not None or config.alphabetic_only:
        dictionary = dictionary.filtered(
            min_length=config.min_length,
            max_length=config.max_length,
            alphabetic_only=config.alphabetic_only,
        )
        LOGGER.debug("Dictionary filtered down to %d words", len(dictionary))
    return dictionary
