"""
storyshape.transform.rescale - Linear rescaling of value sequences.

Maps sentiment values into fixed ranges so trajectories of different
texts can be plotted on the same axes.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from storyshape.exceptions import ConflictingOptionsError, RescaleRangeError
from storyshape.validation import as_numeric_array


class RescaledAxes(NamedTuple):
    """Plot-ready axes: x in (0, 1], y scaled by max, z in [-1, 1]."""

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray


def rescale_linear(xs) -> np.ndarray:
    """Rescale values so the minimum maps to -1 and the maximum to +1.

    Args:
        xs: Numeric sequence

    Returns:
        New array with 2 * (x - min) / (max - min) - 1 applied

    Raises:
        RescaleRangeError: If all values are equal
    """
    arr = as_numeric_array(xs, "xs")
    low = arr.min()
    high = arr.max()
    if high == low:
        raise RescaleRangeError("Cannot rescale a constant sequence (max == min)")
    return 2 * (arr - low) / (high - low) - 1


def rescale_unit(xs) -> np.ndarray:
    """Rescale values by dividing by their maximum.

    Zero stays fixed, so non-negative input lands in [0, 1]. Negative
    values come out below zero and are not clipped.

    Raises:
        RescaleRangeError: If the maximum is not positive
    """
    arr = as_numeric_array(xs, "xs")
    high = arr.max()
    if high <= 0:
        raise RescaleRangeError(f"Unit rescale needs a positive maximum, got {high}")
    return arr / high


def standardize(xs) -> np.ndarray:
    """Center on the mean and divide by the sample standard deviation."""
    arr = as_numeric_array(xs, "xs")
    if arr.size < 2:
        raise RescaleRangeError("Standardizing needs at least two values")
    std = arr.std(ddof=1)
    if std == 0:
        raise RescaleRangeError("Cannot standardize a constant sequence")
    return (arr - arr.mean()) / std


def rescale_xy(values) -> RescaledAxes:
    """Rescale on both axes for plot comparison.

    x runs from 1/n to 1 so texts of any length share a narrative-time
    axis; y uses rescale_unit and z uses rescale_linear.
    """
    arr = as_numeric_array(values, "values")
    n = arr.size
    x = np.arange(1, n + 1) / n
    return RescaledAxes(x=x, y=rescale_unit(arr), z=rescale_linear(arr))


def check_scaling_options(scale_vals: bool, scale_range: bool) -> None:
    """Reject requests for both z-score and range scaling."""
    if scale_vals and scale_range:
        raise ConflictingOptionsError("scale_vals and scale_range cannot both be true")


def apply_scaling(values: np.ndarray, scale_vals: bool, scale_range: bool) -> np.ndarray:
    """Apply the optional post-processing step of a smoothing transform."""
    check_scaling_options(scale_vals, scale_range)
    if scale_vals:
        return standardize(values)
    if scale_range:
        return rescale_linear(values)
    return values
