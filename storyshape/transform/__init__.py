"""
storyshape.transform - Signal processing for sentiment sequences.

Rescaling, percentage binning, DCT/FFT low-pass smoothing and the
mixed-message entropy metric. Every function here is pure: inputs are
copied, never modified.
"""

from __future__ import annotations

from storyshape.transform.bins import bin_means
from storyshape.transform.dct import dct_smooth
from storyshape.transform.entropy import MixedMessage, mixed_message_entropy
from storyshape.transform.fft import fft_smooth
from storyshape.transform.rescale import (
    RescaledAxes,
    rescale_linear,
    rescale_unit,
    rescale_xy,
    standardize,
)
from storyshape.transform.smoothing import rolling_mean, simple_shapes

__all__ = [
    "MixedMessage",
    "RescaledAxes",
    "bin_means",
    "dct_smooth",
    "fft_smooth",
    "mixed_message_entropy",
    "rescale_linear",
    "rescale_unit",
    "rescale_xy",
    "rolling_mean",
    "simple_shapes",
    "standardize",
]
