"""
storyshape.pipeline - End-to-end text analysis.

Ties the stages together for the CLI: sentence splitting → sentiment
scoring (optionally on a worker pool) → trajectory smoothing, driven by
a StoryshapeConfig.
"""

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import Executor, ProcessPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import numpy as np

from storyshape.config import StoryshapeConfig, TransformSettings
from storyshape.exceptions import InvalidParameterError
from storyshape.lexicon.scorer import LexiconMethod, SentimentMethod, get_method, get_sentiment
from storyshape.lexicon.tables import DEFAULT_LANGUAGE
from storyshape.logging import logger
from storyshape.tagger import create_tagger_from_config
from storyshape.text import get_sentences, get_tokens
from storyshape.transform.dct import dct_smooth
from storyshape.transform.entropy import MixedMessage, mixed_message_entropy
from storyshape.transform.fft import fft_smooth


@contextmanager
def make_executor(workers: int) -> Iterator[Executor | None]:
    """Yield a process pool for workers > 0, otherwise None (sequential)."""
    if workers <= 0:
        yield None
        return
    with ProcessPoolExecutor(max_workers=workers) as executor:
        yield executor


def build_method(config: StoryshapeConfig) -> SentimentMethod:
    """Create the configured sentiment strategy."""
    settings = config.sentiment
    tagger = create_tagger_from_config(config) if settings.method == "stanford" else None
    return get_method(
        settings.method,
        language=settings.language,
        lexicon=settings.custom_lexicon,
        tagger=tagger,
        lexicon_dir=config.resolved_lexicon_dir(),
        lowercase=settings.lowercase,
    )


def sentence_sentiment(text: str, config: StoryshapeConfig) -> dict[str, Any]:
    """Split text into sentences and score each one.

    Returns:
        Dict with 'method', 'sentences' and 'values'
    """
    settings = config.sentiment
    sentences = get_sentences(text)
    method = build_method(config)

    with make_executor(settings.workers) as executor:
        values = get_sentiment(
            sentences,
            method,
            regex=settings.regex,
            lowercase=settings.lowercase,
            executor=executor,
        )

    logger.debug("Scored %d sentences with %s", len(sentences), method.name)
    return {
        "method": method.name,
        "sentences": sentences,
        "values": values,
    }


def smooth(values, settings: TransformSettings) -> np.ndarray:
    """Apply the configured DCT or legacy FFT smoothing."""
    scale_vals = settings.scale == "zscore"
    scale_range = settings.scale == "range"
    if settings.method == "fft":
        return fft_smooth(
            values,
            low_pass_size=settings.low_pass_size,
            out_len=settings.out_len,
            padding_factor=settings.padding_factor,
            scale_vals=scale_vals,
            scale_range=scale_range,
        )
    return dct_smooth(
        values,
        low_pass_size=settings.low_pass_size,
        out_len=settings.out_len,
        scale_vals=scale_vals,
        scale_range=scale_range,
    )


def analyze_text(text: str, config: StoryshapeConfig) -> dict[str, Any]:
    """Score a text and compute its narrative trajectory."""
    result = sentence_sentiment(text, config)
    trajectory = smooth(result["values"], config.transform)
    result["transform"] = config.transform.model_dump()
    result["trajectory"] = [float(v) for v in trajectory]
    return result


def mixed_messages(
    text: str,
    method: str = "syuzhet",
    remove_neutral: bool = True,
    lexicon_dir: Path | None = None,
    lexicon: Any = None,
    language: str = DEFAULT_LANGUAGE,
    lowercase: bool = True,
) -> MixedMessage:
    """Emotional entropy of a string, scoring each word token on its own."""
    strategy = get_method(
        method,
        language=language,
        lexicon=lexicon,
        lexicon_dir=lexicon_dir,
        lowercase=lowercase,
    )
    if not isinstance(strategy, LexiconMethod):
        raise InvalidParameterError(f"Method {method!r} cannot score single tokens")
    tokens = get_tokens(text, lowercase=lowercase)
    return mixed_message_entropy(tokens, strategy.score_token, remove_neutral=remove_neutral)
