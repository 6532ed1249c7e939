"""Tests for storyshape.transform.bins module."""

from __future__ import annotations

import math

import numpy as np
import pytest

from storyshape.exceptions import InsufficientDataError, InvalidParameterError
from storyshape.transform.bins import bin_means


class TestBinMeans:
    def test_even_split(self) -> None:
        assert bin_means([1, 2, 3, 4, 5, 6], bins=3) == [(1, 1.5), (2, 3.5), (3, 5.5)]

    def test_uneven_split_is_right_closed(self) -> None:
        """Position 3 of 7 sits on the first boundary and stays in bin 1."""
        result = bin_means([1, 2, 3, 4, 5, 6, 7], bins=3)
        assert result == [(1, 2.0), (2, 4.5), (3, 6.5)]

    def test_single_bin_is_overall_mean(self) -> None:
        assert bin_means([2.0, 4.0, 6.0], bins=1) == [(1, 4.0)]

    def test_default_hundred_bins(self) -> None:
        values = np.sin(np.linspace(0, 6, 250))
        result = bin_means(values)
        assert len(result) == 100
        assert [i for i, _ in result] == list(range(1, 101))
        assert all(math.isfinite(mean) for _, mean in result)

    def test_always_returns_requested_bins(self) -> None:
        rng = np.random.default_rng(3)
        for bins in (1, 2, 5, 13, 40):
            for n in (2 * bins, 2 * bins + 1, 3 * bins + 7):
                result = bin_means(rng.normal(size=n), bins=bins)
                assert len(result) == bins

    def test_insufficient_data_raises(self) -> None:
        with pytest.raises(InsufficientDataError):
            bin_means([1, 2, 3, 4, 5], bins=3)

    def test_invalid_bins_raise(self) -> None:
        with pytest.raises(InvalidParameterError):
            bin_means([1, 2, 3, 4], bins=0)
        with pytest.raises(InvalidParameterError):
            bin_means([1, 2, 3, 4], bins=2.5)
