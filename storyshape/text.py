"""
storyshape.text - Word and sentence tokenization.

Lightweight regex tokenizers that feed the lexicon scorers. Sentence
splitting is rule based: it breaks after terminal punctuation followed
by whitespace, except after common abbreviations and single initials.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from storyshape.exceptions import InvalidInputError

DEFAULT_WORD_REGEX = "[^A-Za-z']+"

CURLY_QUOTES = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    # cp1252 code points that survive a latin-1 decode
    "\x91": "'",
    "\x92": "'",
    "\x93": '"',
    "\x94": '"',
}

ABBREVIATIONS = {
    "mr",
    "mrs",
    "ms",
    "dr",
    "prof",
    "sr",
    "jr",
    "st",
    "vs",
    "etc",
    "e.g",
    "i.e",
    "a.m",
    "p.m",
    "no",
    "mt",
    "gen",
    "col",
    "capt",
    "lt",
    "rev",
}

_SENTENCE_END = re.compile(r"""([.!?]+["')\]]*)(\s+|$)""")


def replace_curly(text: str) -> str:
    """Replace curly quotes with their ASCII equivalents."""
    for curly, plain in CURLY_QUOTES.items():
        text = text.replace(curly, plain)
    return text


def get_tokens(text: str, pattern: str = r"\W", lowercase: bool = True) -> list[str]:
    """Split a string into word tokens.

    Args:
        text: Input text
        pattern: Regular expression that separates tokens
        lowercase: Lowercase the text before splitting

    Returns:
        Non-empty tokens in order
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"text must be a string, got {type(text).__name__}")
    if lowercase:
        text = text.lower()
    return [token for token in re.split(pattern, text) if token]


def split_words(text: str, regex: str = DEFAULT_WORD_REGEX) -> list[str]:
    """Split text into words the way the lexicon scorers expect."""
    return [word for word in re.split(regex, text) if word]


def _ends_with_abbreviation(chunk: str) -> bool:
    last = chunk.rstrip(".!?\"')]").split()
    if not last:
        return False
    word = last[-1].lower()
    if len(word) == 1 and word.isalpha():
        return True
    return word in ABBREVIATIONS


def _split_one(text: str) -> list[str]:
    sentences = []
    start = 0
    pending = ""
    for match in _SENTENCE_END.finditer(text):
        end = match.end(1)
        chunk = pending + text[start:end]
        start = match.end()
        if match.group(1).startswith(".") and len(match.group(1)) == 1:
            if _ends_with_abbreviation(chunk[:-1]) and match.end() < len(text):
                pending = chunk + match.group(2)
                continue
        pending = ""
        if chunk.strip():
            sentences.append(chunk.strip())
    tail = (pending + text[start:]).strip()
    if tail:
        sentences.append(tail)
    return sentences


def get_sentences(
    text: str | Sequence[str],
    fix_curly_quotes: bool = True,
) -> list[str]:
    """Split one string, or each of several strings, into sentences.

    Args:
        text: A string or a sequence of strings
        fix_curly_quotes: Convert curly quotes to ASCII before splitting

    Returns:
        Flat list of sentences in document order

    Raises:
        InvalidInputError: If text is not a string or sequence of strings
    """
    texts = [text] if isinstance(text, str) else text
    if not isinstance(texts, Sequence):
        raise InvalidInputError("Data must be a string or a sequence of strings")

    sentences: list[str] = []
    for item in texts:
        if not isinstance(item, str):
            raise InvalidInputError("Data must be a string or a sequence of strings")
        if fix_curly_quotes:
            item = replace_curly(item)
        sentences.extend(_split_one(item))
    return sentences
