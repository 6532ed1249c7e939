"""Tests for storyshape.lexicon.scorer module."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from storyshape.exceptions import DependencyError, InvalidInputError, InvalidParameterError
from storyshape.lexicon.scorer import (
    LexiconMethod,
    SyuzhetMethod,
    TaggerMethod,
    as_lexicon,
    get_method,
    get_sentiment,
    score,
)
from storyshape.lexicon.tables import Lexicon
from storyshape.tagger import SentimentTagger


class FakeTagger(SentimentTagger):
    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def get_external_sentiment(self, texts: Sequence[str]) -> list[float]:
        self.calls.append(list(texts))
        return [0.5] * len(texts)


class TestScore:
    def test_counts_every_occurrence(self) -> None:
        table = {"a": [("positive", 1.0)], "b": [("negative", -2.0)]}
        assert score(["a", "a", "b", "c"], table) == 0.0
        assert score(["a", "a", "a"], table) == 3.0

    def test_category_filter(self) -> None:
        table = {"love": [("positive", 1.0), ("joy", 1.0)]}
        assert score(["love"], table) == 2.0
        assert score(["love"], table, categories=["joy"]) == 1.0

    def test_no_matches(self) -> None:
        assert score(["x", "y"], {}) == 0.0
        assert score([], {"x": [("positive", 1.0)]}) == 0.0

    def test_bare_string_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            score("love", {})

    def test_bare_string_categories_raise(self) -> None:
        table = {"love": [("positive", 1.0)]}
        with pytest.raises(InvalidParameterError, match="positive"):
            score(["love"], table, categories="positive")
        with pytest.raises(InvalidParameterError):
            LexiconMethod("t", Lexicon.from_mapping("t", table), categories="positive")

    def test_single_category_in_list(self) -> None:
        table = {"love": [("positive", 1.0), ("joy", 1.0)]}
        method = LexiconMethod("t", Lexicon.from_mapping("t", table), categories=["positive"])
        assert method.score_token("love") == 1.0


class TestGetSentiment:
    def test_syuzhet(self, lexicon_dir: Path) -> None:
        values = get_sentiment(["I love it", "I hate it"], lexicon_dir=lexicon_dir)
        assert values == [0.75, -0.75]

    def test_repeated_words(self, lexicon_dir: Path) -> None:
        assert get_sentiment(["love love love"], lexicon_dir=lexicon_dir) == [2.25]

    def test_syuzhet_joins_hyphenated_words(self, lexicon_dir: Path) -> None:
        assert get_sentiment(["A sense of well-being"], lexicon_dir=lexicon_dir) == [0.5]

    def test_lowercases_by_default(self, lexicon_dir: Path) -> None:
        assert get_sentiment(["HAPPY"], lexicon_dir=lexicon_dir) == [0.75]
        assert get_sentiment(["HAPPY"], lexicon_dir=lexicon_dir, lowercase=False) == [0.0]

    def test_afinn(self, lexicon_dir: Path) -> None:
        values = get_sentiment(["love and happy", "hate"], "afinn", lexicon_dir=lexicon_dir)
        assert values == [6.0, -3.0]

    def test_bing(self, lexicon_dir: Path) -> None:
        values = get_sentiment(["happy but silly"], "bing", lexicon_dir=lexicon_dir)
        assert values == [0.0]

    def test_nrc_polarity(self, lexicon_dir: Path) -> None:
        values = get_sentiment(
            ["happy love", "fear and hate", "love hate"], "nrc", lexicon_dir=lexicon_dir
        )
        assert values == [2.0, -2.0, 0.0]

    def test_nrc_language(self, lexicon_dir: Path) -> None:
        values = get_sentiment(
            ["amor", "love"], "nrc", language="spanish", lexicon_dir=lexicon_dir
        )
        assert values == [1.0, 0.0]

    def test_custom_mapping(self) -> None:
        lexicon = {"Great": [("positive", 2)], "awful": [("negative", -3)]}
        values = get_sentiment(["A GREAT day", "awful"], "custom", lexicon=lexicon)
        assert values == [2.0, -3.0]

    def test_custom_keep_case(self) -> None:
        lexicon = {"Great": [("positive", 2)]}
        assert get_sentiment(["Great", "great"], "custom", lexicon=lexicon, lowercase=False) == [
            2.0,
            0.0,
        ]

    def test_custom_csv(self, lexicon_dir: Path) -> None:
        values = get_sentiment(["love"], "custom", lexicon=lexicon_dir / "afinn.csv")
        assert values == [3.0]

    def test_custom_regex(self, lexicon_dir: Path) -> None:
        values = get_sentiment(["love_hate"], "afinn", regex="_", lexicon_dir=lexicon_dir)
        assert values == [0.0]
        values = get_sentiment(["love_happy"], "afinn", regex="_", lexicon_dir=lexicon_dir)
        assert values == [6.0]

    def test_empty_input(self, lexicon_dir: Path) -> None:
        assert get_sentiment([], lexicon_dir=lexicon_dir) == []

    def test_executor_matches_sequential(self, lexicon_dir: Path, sample_text: str) -> None:
        texts = sample_text.split(". ")
        sequential = get_sentiment(texts, lexicon_dir=lexicon_dir)
        with ThreadPoolExecutor(max_workers=2) as executor:
            parallel = get_sentiment(texts, lexicon_dir=lexicon_dir, executor=executor)
        assert parallel == sequential

    def test_prebuilt_method(self, lexicon_dir: Path) -> None:
        method = get_method("afinn", lexicon_dir=lexicon_dir)
        assert get_sentiment(["love"], method) == [3.0]

    def test_tagger(self) -> None:
        tagger = FakeTagger()
        assert get_sentiment(["One.", "Two."], "stanford", tagger=tagger) == [0.5, 0.5]
        assert tagger.calls == [["one.", "two."]]

    def test_string_input_raises(self, lexicon_dir: Path) -> None:
        with pytest.raises(InvalidInputError):
            get_sentiment("I love it", lexicon_dir=lexicon_dir)


class TestGetMethod:
    def test_strategies(self, lexicon_dir: Path) -> None:
        assert isinstance(get_method("syuzhet", lexicon_dir=lexicon_dir), SyuzhetMethod)
        assert isinstance(get_method("bing", lexicon_dir=lexicon_dir), LexiconMethod)
        assert isinstance(get_method("stanford", tagger=FakeTagger()), TaggerMethod)

    def test_score_token(self, lexicon_dir: Path) -> None:
        method = get_method("syuzhet", lexicon_dir=lexicon_dir)
        assert method.score_token("hated") == -0.75
        assert method.score_token("table") == 0.0

    def test_invalid_method(self) -> None:
        with pytest.raises(InvalidParameterError, match="Invalid method"):
            get_method("vader")

    def test_custom_requires_lexicon(self) -> None:
        with pytest.raises(InvalidParameterError):
            get_method("custom")

    def test_stanford_requires_tagger(self) -> None:
        with pytest.raises(DependencyError) as exc_info:
            get_method("stanford")
        assert exc_info.value.dependency == "stanford"

    @pytest.mark.parametrize("language", ["Arabic", "japanese", "ukranian"])
    def test_unsupported_language(self, language: str, lexicon_dir: Path) -> None:
        with pytest.raises(InvalidParameterError, match="not yet supported"):
            get_method("nrc", language=language, lexicon_dir=lexicon_dir)

    def test_as_lexicon_rejects_other_types(self) -> None:
        with pytest.raises(InvalidParameterError):
            as_lexicon(42)
