"""
storyshape.transform.smoothing - Side-by-side smoother comparison.

Produces the curves for comparing a plain rolling mean against DCT
smoothing of the same raw sequence. Rendering is left to the caller.
"""

from __future__ import annotations

import numpy as np

from storyshape.exceptions import InvalidParameterError
from storyshape.transform.dct import dct_smooth
from storyshape.transform.rescale import rescale_linear
from storyshape.validation import as_numeric_array, check_positive_int


def rolling_mean(values, window: int, fill: float = np.nan) -> np.ndarray:
    """Centered rolling mean with the same length as the input.

    For an even window the extra element sits to the right of center.
    Positions where the window does not fit are set to `fill`.
    """
    arr = as_numeric_array(values, "values")
    window = check_positive_int(window, "window")
    if window > arr.size:
        raise InvalidParameterError(
            f"window ({window}) must not exceed the number of values ({arr.size})"
        )

    means = np.convolve(arr, np.ones(window) / window, mode="valid")
    left = (window - 1) // 2
    out = np.full(arr.size, fill, dtype=float)
    out[left : left + means.size] = means
    return out


def simple_shapes(raw, lps: int = 10, window: float = 0.1) -> dict[str, np.ndarray]:
    """Compute the rolling-mean, DCT and macro-shape curves for a text.

    Args:
        raw: Raw sentiment values
        lps: Low-pass size for the full-length DCT curve
        window: Rolling window as a fraction of the number of values

    Returns:
        Dict with 'rolling' and 'dct' (both len(raw), scaled to [-1, 1];
        the rolling curve is NaN for half a window at each end) and
        'macro' (100 values, low_pass_size 5, scaled to [-1, 1])
    """
    arr = as_numeric_array(raw, "raw")
    if not 0 < window <= 1:
        raise InvalidParameterError(f"window must be in (0, 1], got {window}")

    wdw = round(arr.size * window)
    if wdw < 1:
        raise InvalidParameterError(
            f"window {window} is too small for {arr.size} values"
        )

    rolled = rescale_linear(rolling_mean(arr, wdw, fill=0.0))
    half = round(wdw / 2)
    if half > 0:
        rolled[:half] = np.nan
        rolled[arr.size - half - 1 :] = np.nan

    return {
        "rolling": rolled,
        "dct": dct_smooth(arr, low_pass_size=lps, out_len=arr.size, scale_range=True),
        "macro": dct_smooth(arr, low_pass_size=5, scale_range=True),
    }
