"""
storyshape.lexicon.tables - Lexicon tables and the built-in table cache.

A Lexicon maps a lowercase word to every (category, value) pair recorded
for it. Tables are read-only once built. The built-in tables (syuzhet,
afinn, bing, nrc) are read from CSV files in a lexicon directory on
first use and cached for the life of the process.
"""

from __future__ import annotations

import csv
import os
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from storyshape.config import LEXICON_DIR_ENV
from storyshape.exceptions import InvalidParameterError, LexiconError
from storyshape.logging import logger
from storyshape.validation import BUILTIN_LEXICON_FILES

EMOTION_CATEGORIES = (
    "anger",
    "anticipation",
    "disgust",
    "fear",
    "joy",
    "sadness",
    "surprise",
    "trust",
)
POLARITY_CATEGORIES = ("negative", "positive")

DEFAULT_LANGUAGE = "english"


@dataclass(frozen=True)
class LexiconEntry:
    """One row of a lexicon table."""

    word: str
    category: str
    value: float
    language: str = DEFAULT_LANGUAGE


class Lexicon(Mapping):
    """Read-only mapping of word -> tuple of (category, value) pairs."""

    def __init__(self, name: str, entries: Iterable[LexiconEntry]) -> None:
        self.name = name
        self._entries = tuple(entries)
        table: dict[str, list[tuple[str, float]]] = {}
        for entry in self._entries:
            table.setdefault(entry.word, []).append((entry.category, entry.value))
        self._table = {word: tuple(pairs) for word, pairs in table.items()}

    @classmethod
    def from_mapping(
        cls,
        name: str,
        mapping: Mapping[str, Iterable[tuple[str, float]]],
        language: str = DEFAULT_LANGUAGE,
    ) -> Lexicon:
        """Build a lexicon from {word: [(category, value), ...]}."""
        if isinstance(mapping, Lexicon):
            return mapping
        entries = [
            LexiconEntry(word=word, category=category, value=float(value), language=language)
            for word, pairs in mapping.items()
            for category, value in pairs
        ]
        return cls(name, entries)

    def __getitem__(self, word: str) -> tuple[tuple[str, float], ...]:
        return self._table[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"Lexicon({self.name!r}, words={len(self)}, entries={len(self._entries)})"

    @property
    def entries(self) -> tuple[LexiconEntry, ...]:
        return self._entries

    @property
    def categories(self) -> set[str]:
        return {entry.category for entry in self._entries}

    @property
    def languages(self) -> set[str]:
        return {entry.language for entry in self._entries}

    def lowercased(self) -> Lexicon:
        """Return a copy with every word lowercased."""
        return Lexicon(
            self.name,
            (
                LexiconEntry(entry.word.lower(), entry.category, entry.value, entry.language)
                for entry in self._entries
            ),
        )

    def filter(
        self,
        language: str | None = None,
        categories: Iterable[str] | None = None,
    ) -> Lexicon:
        """Return a new lexicon restricted to a language and/or categories."""
        if isinstance(categories, str):
            raise InvalidParameterError(f"categories must be a collection, not {categories!r}")
        wanted = set(categories) if categories is not None else None
        entries = [
            entry
            for entry in self._entries
            if (language is None or entry.language == language)
            and (wanted is None or entry.category in wanted)
        ]
        return Lexicon(self.name, entries)


def _parse_value(raw: str | None, path: Path, line: int) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise LexiconError(f"{path}:{line}: invalid value {raw!r}") from e


def _category_for(value: float) -> str:
    if value > 0:
        return "positive"
    if value < 0:
        return "negative"
    return "neutral"


def load_lexicon_csv(path: Path, name: str | None = None) -> Lexicon:
    """Load a lexicon from a CSV file with a header row.

    Recognized columns: word (required), value, sentiment, lang. A file
    needs at least one of value/sentiment. Without a sentiment column the
    category follows the sign of the value; without a value column every
    entry counts 1. Words are lowercased.

    Raises:
        LexiconError: If the file is missing or malformed
    """
    if not path.is_file():
        raise LexiconError(f"Lexicon file not found: {path}")

    entries = []
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        columns = set(reader.fieldnames or [])
        if "word" not in columns or not columns & {"value", "sentiment"}:
            raise LexiconError(
                f"{path}: lexicon must have a 'word' column and a 'value' "
                f"or 'sentiment' column, found {sorted(columns)}"
            )
        for line, row in enumerate(reader, start=2):
            word = (row.get("word") or "").strip().lower()
            if not word:
                continue
            value = _parse_value(row["value"], path, line) if "value" in columns else 1.0
            category = (row.get("sentiment") or "").strip().lower() or _category_for(value)
            language = (row.get("lang") or "").strip().lower() or DEFAULT_LANGUAGE
            entries.append(LexiconEntry(word, category, value, language))

    logger.debug("Loaded %d lexicon entries from %s", len(entries), path)
    return Lexicon(name or path.stem, entries)


_CACHE: dict[tuple[str, Path], Lexicon] = {}
_CACHE_LOCK = threading.Lock()


def resolve_lexicon_dir(lexicon_dir: Path | None = None) -> Path:
    """Resolve the lexicon directory from the argument or environment."""
    if lexicon_dir is None:
        env_dir = os.environ.get(LEXICON_DIR_ENV)
        if not env_dir:
            raise LexiconError(
                "No lexicon directory configured. Set lexicon_dir in storyshape.yaml "
                f"or the {LEXICON_DIR_ENV} environment variable."
            )
        lexicon_dir = Path(env_dir)
    if not lexicon_dir.is_dir():
        raise LexiconError(f"Lexicon directory not found: {lexicon_dir}")
    return lexicon_dir


def load_builtin_lexicon(name: str, lexicon_dir: Path | None = None) -> Lexicon:
    """Load a built-in lexicon, reading its CSV only on first use.

    Raises:
        InvalidParameterError: If name is not a built-in lexicon
        LexiconError: If the directory or file is missing or malformed
    """
    if name not in BUILTIN_LEXICON_FILES:
        raise InvalidParameterError(
            f"Must be one of: {', '.join(sorted(BUILTIN_LEXICON_FILES))}; got {name!r}"
        )
    directory = resolve_lexicon_dir(lexicon_dir).resolve()
    key = (name, directory)
    with _CACHE_LOCK:
        if key not in _CACHE:
            _CACHE[key] = load_lexicon_csv(directory / BUILTIN_LEXICON_FILES[name], name)
        return _CACHE[key]


def clear_lexicon_cache() -> None:
    """Forget all cached built-in lexicons."""
    with _CACHE_LOCK:
        _CACHE.clear()


def get_sentiment_dictionary(
    dictionary: str = "syuzhet",
    language: str = DEFAULT_LANGUAGE,
    lexicon_dir: Path | None = None,
) -> Lexicon:
    """Return a built-in lexicon; the nrc table is filtered to one language."""
    lexicon = load_builtin_lexicon(dictionary, lexicon_dir)
    if dictionary == "nrc":
        return lexicon.filter(language=language.lower())
    return lexicon
