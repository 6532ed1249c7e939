"""
storyshape.lexicon.emotions - NRC emotion and valence profiles.

Counts the eight NRC emotions plus negative/positive valence for each
text, giving one ten-column row per sentence.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import Executor
from functools import partial
from pathlib import Path

from storyshape.lexicon.scorer import as_lexicon, check_language
from storyshape.lexicon.tables import (
    DEFAULT_LANGUAGE,
    EMOTION_CATEGORIES,
    POLARITY_CATEGORIES,
    Lexicon,
    load_builtin_lexicon,
)
from storyshape.text import DEFAULT_WORD_REGEX, split_words
from storyshape.validation import check_text_sequence

NRC_COLUMNS = EMOTION_CATEGORIES + POLARITY_CATEGORIES


def get_nrc_values(tokens: Sequence[str], lexicon: Lexicon) -> dict[str, float]:
    """Sum lexicon values per NRC column over the token occurrences.

    Categories outside the ten NRC columns are ignored; columns with no
    matching token are 0.
    """
    tokens = check_text_sequence(tokens, "tokens")
    row = dict.fromkeys(NRC_COLUMNS, 0.0)
    for token in tokens:
        for category, value in lexicon.get(token, ()):
            if category in row:
                row[category] += value
    return row


def _nrc_row(text: str, lexicon: Lexicon) -> dict[str, float]:
    return get_nrc_values(split_words(text, DEFAULT_WORD_REGEX), lexicon)


def get_nrc_sentiment(
    texts: Sequence[str],
    language: str = DEFAULT_LANGUAGE,
    lexicon: Lexicon | Mapping | Path | str | None = None,
    lowercase: bool = True,
    executor: Executor | None = None,
    lexicon_dir: Path | None = None,
) -> list[dict[str, float]]:
    """Compute an NRC emotion row for each text.

    Args:
        texts: Sentences in narrative order
        language: Language of the built-in NRC table
        lexicon: Optional user table; a CSV with word and sentiment
            columns gives every pair a value of 1
        lowercase: Lowercase texts (and custom lexicon words) first
        executor: Optional executor to process texts in parallel
        lexicon_dir: Directory holding the built-in lexicon CSVs

    Returns:
        One dict per text, keys in NRC_COLUMNS order
    """
    texts = check_text_sequence(texts, "texts")
    if lexicon is None:
        table = load_builtin_lexicon("nrc", lexicon_dir).filter(language=check_language(language))
    else:
        table = as_lexicon(lexicon)
        if lowercase:
            table = table.lowercased()
    if lowercase:
        texts = [text.lower() for text in texts]

    fn = partial(_nrc_row, lexicon=table)
    if executor is None:
        return list(map(fn, texts))
    return list(executor.map(fn, texts))
