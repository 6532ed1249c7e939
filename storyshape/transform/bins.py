"""
storyshape.transform.bins - Percentage-based chunking.

Splits a sentiment sequence into a fixed number of contiguous chunks
(100 by default, i.e. one per percent of narrative time) and reduces
each chunk to its mean.
"""

from __future__ import annotations

import numpy as np

from storyshape.exceptions import InsufficientDataError
from storyshape.logging import logger
from storyshape.validation import as_numeric_array, check_positive_int


def bin_means(xs, bins: int = 100) -> list[tuple[int, float]]:
    """Chunk values into equal-width percentage bins and average each.

    The 1-based positions 1..n are cut into `bins` equal-width intervals
    that are closed on the right, so position i falls in the interval
    (lower, upper] that contains it. The first interval is widened by a
    thousandth of the range to take in position 1.

    Args:
        xs: Raw sentiment values in narrative order
        bins: Number of bins

    Returns:
        List of (bin_index, mean) with 1-based bin indices

    Raises:
        InvalidParameterError: If bins is not a positive integer
        InsufficientDataError: If there are fewer than two values per bin
    """
    bins = check_positive_int(bins, "bins")
    arr = as_numeric_array(xs, "xs")
    n = arr.size
    if n < 2 * bins:
        raise InsufficientDataError(
            f"Need at least {2 * bins} values for {bins} bins, got {n}; "
            "percentage segmentation requires two values per bin"
        )

    positions = np.arange(1, n + 1)
    inner_breaks = np.linspace(1, n, bins + 1)[1:-1]
    # side="left" counts breaks strictly below each position: (lower, upper]
    labels = np.searchsorted(inner_breaks, positions, side="left")

    sums = np.bincount(labels, weights=arr, minlength=bins)
    counts = np.bincount(labels, minlength=bins)
    means = sums / counts

    logger.debug("Binned %d values into %d bins", n, bins)
    return [(i + 1, float(mean)) for i, mean in enumerate(means)]
