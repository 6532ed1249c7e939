"""
storyshape.transform.entropy - Emotional entropy of a message.

A message whose words pull in opposite emotional directions ("I loved
and hated it") is less predictable than one that stays on a single
valence. The Shannon entropy of the per-token sentiment signs measures
that conflict; dividing by the message length gives the metric entropy
used to compare messages of different lengths.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from typing import NamedTuple

import numpy as np

from storyshape.validation import check_text_sequence


class MixedMessage(NamedTuple):
    entropy: float
    metric_entropy: float


def mixed_message_entropy(
    tokens: Sequence[str],
    score_fn: Callable[[str], float],
    remove_neutral: bool = True,
) -> MixedMessage:
    """Compute Shannon and metric entropy of token sentiment signs.

    Args:
        tokens: Word tokens of one message
        score_fn: Returns the sentiment value of a single token
        remove_neutral: Drop tokens with zero sentiment before computing
            the sign distribution

    Returns:
        MixedMessage(entropy, metric_entropy). The metric entropy divides
        by the full token count, neutral tokens included.

    Raises:
        InvalidInputError: If tokens is not a sequence of strings
    """
    tokens = check_text_sequence(tokens, "tokens")
    if not tokens:
        return MixedMessage(0.0, 0.0)

    signs = [int(np.sign(score_fn(token))) for token in tokens]
    if remove_neutral:
        signs = [s for s in signs if s != 0]

    counts = Counter(signs)
    total = len(signs)
    entropy = 0.0
    for count in counts.values():
        p = count / total
        entropy -= p * np.log2(p)

    entropy = float(entropy)
    return MixedMessage(entropy, entropy / len(tokens))
