"""
storyshape.transform.dct - Low-pass DCT smoothing of sentiment sequences.

The raw sequence is taken to the frequency domain with a type-II DCT,
everything above `low_pass_size` coefficients is discarded, and the
retained coefficients are zero-padded to `out_len` before the inverse
transform. Padding in the frequency domain resamples the trajectory, so
texts of any length come out with the same number of points covering
0% to 100% of narrative time.
"""

from __future__ import annotations

import numpy as np
from scipy.fft import dct, idct

from storyshape.exceptions import InvalidParameterError
from storyshape.logging import logger
from storyshape.transform.rescale import apply_scaling, check_scaling_options
from storyshape.validation import as_numeric_array, check_positive_int


def dct_smooth(
    raw,
    low_pass_size: int = 5,
    out_len: int = 100,
    *,
    scale_vals: bool = False,
    scale_range: bool = False,
) -> np.ndarray:
    """Smooth and resample a sentiment sequence with a low-pass DCT filter.

    Uses the unnormalized DCT-II/DCT-III pair, so an untouched spectrum
    reconstructs the input exactly, and resampling to `out_len` scales
    amplitudes by len(raw) / out_len.

    Args:
        raw: Raw sentiment values in narrative order
        low_pass_size: Number of low-frequency coefficients to keep
        out_len: Number of values to return
        scale_vals: Standardize the output (z-scores)
        scale_range: Rescale the output to [-1, 1]

    Returns:
        Array of length out_len

    Raises:
        InvalidInputError: If raw is not a non-empty numeric sequence
        InvalidParameterError: If low_pass_size exceeds len(raw) or out_len
        ConflictingOptionsError: If scale_vals and scale_range are both set
    """
    values = as_numeric_array(raw, "raw")
    low_pass_size = check_positive_int(low_pass_size, "low_pass_size")
    out_len = check_positive_int(out_len, "out_len")
    if low_pass_size > values.size:
        raise InvalidParameterError(
            f"low_pass_size ({low_pass_size}) must be less than or equal to "
            f"the length of raw ({values.size})"
        )
    if low_pass_size > out_len:
        raise InvalidParameterError(
            f"low_pass_size ({low_pass_size}) must not exceed out_len ({out_len})"
        )
    check_scaling_options(scale_vals, scale_range)

    logger.debug(
        "DCT smoothing %d values: low_pass_size=%d, out_len=%d",
        values.size,
        low_pass_size,
        out_len,
    )

    spectrum = dct(values, type=2)
    padded = np.zeros(out_len)
    padded[:low_pass_size] = spectrum[:low_pass_size]
    smoothed = idct(padded, type=2)

    return apply_scaling(smoothed, scale_vals, scale_range)
