"""
storyshape.transform.fft - Legacy Fourier smoothing.

Kept so older results can be reproduced exactly. New code should use
storyshape.transform.dct.dct_smooth.
"""

from __future__ import annotations

import warnings

import numpy as np

from storyshape.exceptions import InvalidParameterError
from storyshape.logging import logger
from storyshape.transform.rescale import apply_scaling, check_scaling_options
from storyshape.validation import as_numeric_array, check_positive_int


def fft_smooth(
    raw,
    low_pass_size: int = 2,
    out_len: int = 100,
    padding_factor: int = 2,
    *,
    scale_vals: bool = False,
    scale_range: bool = False,
) -> np.ndarray:
    """Smooth a sentiment sequence with a low-pass FFT filter.

    The input is zero-padded by padding_factor * len(raw) to reduce
    leakage from its non-periodic ends. After the forward FFT the first
    low_pass_size * (1 + padding_factor) coefficients are kept and a
    conjugate-symmetric spectrum of length out_len * (1 + padding_factor)
    is rebuilt around them, so the inverse is real up to rounding. When
    the retained band is wider than half that spectrum, coefficients up
    to the Nyquist bin are kept and mirrored, so keeping every component
    at the input length returns the input times the spectrum length. The
    inverse is not divided by the spectrum length.

    Args:
        raw: Raw sentiment values in narrative order
        low_pass_size: Number of components to keep, before padding
        out_len: Number of values to return
        padding_factor: Zero padding as a multiple of len(raw)
        scale_vals: Standardize the output (z-scores)
        scale_range: Rescale the output to [-1, 1]

    Returns:
        Array of length out_len

    Raises:
        InvalidInputError: If raw is not a non-empty numeric sequence
        InvalidParameterError: If low_pass_size exceeds len(raw) or
            padding_factor is not a non-negative integer
        ConflictingOptionsError: If scale_vals and scale_range are both set
    """
    warnings.warn(
        "fft_smooth is maintained for legacy purposes; consider dct_smooth instead",
        DeprecationWarning,
        stacklevel=2,
    )

    values = as_numeric_array(raw, "raw")
    low_pass_size = check_positive_int(low_pass_size, "low_pass_size")
    out_len = check_positive_int(out_len, "out_len")
    if isinstance(padding_factor, bool) or not isinstance(padding_factor, (int, np.integer)):
        raise InvalidParameterError(f"padding_factor must be an integer, got {padding_factor!r}")
    if padding_factor < 0:
        raise InvalidParameterError(f"padding_factor must not be negative, got {padding_factor}")
    if low_pass_size > values.size:
        raise InvalidParameterError(
            f"low_pass_size ({low_pass_size}) must be less than or equal to "
            f"the length of raw ({values.size})"
        )

    keep = low_pass_size * (1 + padding_factor)
    spectrum_len = out_len * (1 + padding_factor)
    check_scaling_options(scale_vals, scale_range)

    logger.debug(
        "FFT smoothing %d values: low_pass_size=%d, out_len=%d, padding_factor=%d",
        values.size,
        low_pass_size,
        out_len,
        padding_factor,
    )

    padded = np.concatenate([values, np.zeros(values.size * padding_factor)])
    coefficients = np.fft.fft(padded)
    if 2 * keep - 1 > spectrum_len:
        # band reaches past the Nyquist bin: keep up to it and mirror the rest
        keep = spectrum_len // 2 + 1
        keepers = coefficients[:keep]
        gap = 0
        mirrored = keepers[1 : spectrum_len - keep + 1]
    else:
        keepers = coefficients[:keep]
        gap = spectrum_len - 2 * keep + 1
        mirrored = keepers[1:]

    spectrum = np.concatenate(
        [
            keepers,
            np.zeros(gap, dtype=complex),
            np.conj(mirrored)[::-1],
        ]
    )
    # norm="forward" leaves the inverse unscaled
    inverse = np.fft.ifft(spectrum, norm="forward")
    smoothed = np.real(inverse[:out_len])

    return apply_scaling(smoothed, scale_vals, scale_range)
