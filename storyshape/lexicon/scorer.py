"""
storyshape.lexicon.scorer - Lexicon scoring and sentiment strategies.

`score` sums lexicon values over a token list. Each sentiment method
(syuzhet, afinn, bing, nrc, custom, stanford) is a SentimentMethod
strategy built by `get_method`; `get_sentiment` applies one to a list of
texts, optionally through an injected executor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import Executor
from functools import partial
from pathlib import Path

from storyshape.exceptions import DependencyError, InvalidParameterError
from storyshape.lexicon.tables import (
    DEFAULT_LANGUAGE,
    POLARITY_CATEGORIES,
    Lexicon,
    LexiconEntry,
    load_builtin_lexicon,
    load_lexicon_csv,
)
from storyshape.logging import logger
from storyshape.tagger import SentimentTagger
from storyshape.text import DEFAULT_WORD_REGEX, split_words
from storyshape.validation import check_text_sequence

METHODS = ("syuzhet", "afinn", "bing", "nrc", "custom", "stanford")

UNSUPPORTED_LANGUAGES = {
    "arabic",
    "bengali",
    "chinese_simplified",
    "chinese_traditional",
    "greek",
    "gujarati",
    "hebrew",
    "hindi",
    "japanese",
    "marathi",
    "persian",
    "russian",
    "tamil",
    "telugu",
    "thai",
    "ukranian",
    "ukrainian",
    "urdu",
    "yiddish",
}


def check_categories(categories: Iterable[str] | None) -> set[str] | None:
    """Turn a category filter into a set; None means every category."""
    if categories is None:
        return None
    if isinstance(categories, str):
        raise InvalidParameterError(
            f"categories must be a collection of names, not the string {categories!r}"
        )
    return set(categories)


def score(
    tokens: Sequence[str],
    table: Mapping[str, Iterable[tuple[str, float]]],
    categories: Iterable[str] | None = None,
) -> float:
    """Sum lexicon values for every token occurrence.

    Repeated tokens count once per occurrence. A word listed under
    several categories contributes each matching (category, value) pair.

    Args:
        tokens: Word tokens
        table: Mapping of word -> (category, value) pairs
        categories: Categories to count; all when None

    Returns:
        Summed score (0.0 when nothing matches)

    Raises:
        InvalidInputError: If tokens is not a sequence of strings
        InvalidParameterError: If categories is a bare string
    """
    tokens = check_text_sequence(tokens, "tokens")
    wanted = check_categories(categories)
    total = 0.0
    for token in tokens:
        for category, value in table.get(token, ()):
            if wanted is None or category in wanted:
                total += value
    return total


class SentimentMethod(ABC):
    """Strategy that turns texts into one sentiment value each."""

    name: str = ""

    @abstractmethod
    def score_texts(
        self,
        texts: list[str],
        regex: str = DEFAULT_WORD_REGEX,
        executor: Executor | None = None,
    ) -> list[float]: ...


class LexiconMethod(SentimentMethod):
    """Scores each text by summing lexicon values over its words."""

    def __init__(
        self,
        name: str,
        lexicon: Lexicon,
        categories: Iterable[str] | None = None,
    ) -> None:
        self.name = name
        self.lexicon = lexicon
        wanted = check_categories(categories)
        self.categories = tuple(sorted(wanted)) if wanted is not None else None

    def prepare(self, text: str) -> str:
        return text

    def score_text(self, text: str, regex: str = DEFAULT_WORD_REGEX) -> float:
        return score(split_words(self.prepare(text), regex), self.lexicon, self.categories)

    def score_token(self, token: str) -> float:
        return score([token], self.lexicon, self.categories)

    def score_texts(
        self,
        texts: list[str],
        regex: str = DEFAULT_WORD_REGEX,
        executor: Executor | None = None,
    ) -> list[float]:
        fn = partial(self.score_text, regex=regex)
        if executor is None:
            return list(map(fn, texts))
        return list(executor.map(fn, texts))


class SyuzhetMethod(LexiconMethod):
    """Syuzhet valence table; compound words are stored without hyphens."""

    def prepare(self, text: str) -> str:
        return text.replace("-", "")


class TaggerMethod(SentimentMethod):
    """Hands whole texts to an external tagger.

    The tagger does its own sentence splitting, so the result length can
    differ from the number of input texts.
    """

    name = "stanford"

    def __init__(self, tagger: SentimentTagger) -> None:
        self.tagger = tagger

    def score_texts(
        self,
        texts: list[str],
        regex: str = DEFAULT_WORD_REGEX,
        executor: Executor | None = None,
    ) -> list[float]:
        return self.tagger.get_external_sentiment(texts)


def nrc_polarity_lexicon(lexicon: Lexicon, language: str = DEFAULT_LANGUAGE) -> Lexicon:
    """Reduce an NRC table to one language's positive/negative entries.

    Negative entries are valued -1 so a single sum gives net polarity.
    """
    filtered = lexicon.filter(language=language, categories=POLARITY_CATEGORIES)
    entries = [
        LexiconEntry(
            entry.word,
            entry.category,
            -1.0 if entry.category == "negative" else entry.value,
            entry.language,
        )
        for entry in filtered.entries
    ]
    return Lexicon(f"{lexicon.name}:{language}", entries)


def as_lexicon(
    lexicon: Lexicon | Mapping[str, Iterable[tuple[str, float]]] | Path | str,
    name: str = "custom",
) -> Lexicon:
    """Coerce a Lexicon, a plain mapping or a CSV path into a Lexicon."""
    if isinstance(lexicon, Lexicon):
        return lexicon
    if isinstance(lexicon, (str, Path)):
        return load_lexicon_csv(Path(lexicon), name)
    if isinstance(lexicon, Mapping):
        return Lexicon.from_mapping(name, lexicon)
    raise InvalidParameterError(
        f"lexicon must be a Lexicon, mapping or CSV path, got {type(lexicon).__name__}"
    )


def check_language(language: str) -> str:
    """Lowercase a language name and reject scripts the tokenizer cannot split."""
    language = language.lower()
    if language in UNSUPPORTED_LANGUAGES:
        raise InvalidParameterError(f"Sorry, language '{language}' is not yet supported")
    return language


def get_method(
    name: str,
    *,
    language: str = DEFAULT_LANGUAGE,
    lexicon: Lexicon | Mapping | Path | str | None = None,
    tagger: SentimentTagger | None = None,
    lexicon_dir: Path | None = None,
    lowercase: bool = True,
) -> SentimentMethod:
    """Build the scoring strategy for a method name.

    Raises:
        InvalidParameterError: Unknown method, unsupported language, or a
            custom method without a lexicon
        DependencyError: stanford method without a tagger
        LexiconError: Built-in lexicon files missing or malformed
    """
    if name not in METHODS:
        raise InvalidParameterError(
            f"Invalid method {name!r}; must be one of: {', '.join(METHODS)}"
        )
    language = check_language(language)

    if name == "syuzhet":
        return SyuzhetMethod(name, load_builtin_lexicon("syuzhet", lexicon_dir))
    if name in ("afinn", "bing"):
        return LexiconMethod(name, load_builtin_lexicon(name, lexicon_dir))
    if name == "nrc":
        nrc = load_builtin_lexicon("nrc", lexicon_dir)
        return LexiconMethod(name, nrc_polarity_lexicon(nrc, language))
    if name == "custom":
        if lexicon is None:
            raise InvalidParameterError("The custom method needs a lexicon")
        table = as_lexicon(lexicon)
        if lowercase:
            table = table.lowercased()
        return LexiconMethod(name, table)

    if tagger is None:
        raise DependencyError(
            "stanford",
            "No external tagger configured",
            "Set sentiment.tagger_path to a local Stanford CoreNLP installation",
        )
    return TaggerMethod(tagger)


def get_sentiment(
    texts: Sequence[str],
    method: str | SentimentMethod = "syuzhet",
    *,
    language: str = DEFAULT_LANGUAGE,
    lexicon: Lexicon | Mapping | Path | str | None = None,
    tagger: SentimentTagger | None = None,
    regex: str = DEFAULT_WORD_REGEX,
    lowercase: bool = True,
    executor: Executor | None = None,
    lexicon_dir: Path | None = None,
) -> list[float]:
    """Score each text with a sentiment method.

    Args:
        texts: Sentences (or any text units) in narrative order
        method: Method name or a prebuilt SentimentMethod
        language: Language of the nrc table
        lexicon: Table for the custom method
        tagger: External tagger for the stanford method
        regex: Word-splitting pattern
        lowercase: Lowercase texts before scoring
        executor: Optional executor to score texts in parallel
        lexicon_dir: Directory holding the built-in lexicon CSVs

    Returns:
        One value per text (tagger methods may return a different count)
    """
    texts = check_text_sequence(texts, "texts")
    if lowercase:
        texts = [text.lower() for text in texts]

    strategy = (
        method
        if isinstance(method, SentimentMethod)
        else get_method(
            method,
            language=language,
            lexicon=lexicon,
            tagger=tagger,
            lexicon_dir=lexicon_dir,
            lowercase=lowercase,
        )
    )
    logger.debug("Scoring %d texts with %s", len(texts), strategy.name)
    return strategy.score_texts(texts, regex=regex, executor=executor)
