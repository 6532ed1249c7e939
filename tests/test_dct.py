"""Tests for storyshape.transform.dct module."""

from __future__ import annotations

import numpy as np
import pytest

from storyshape.exceptions import (
    ConflictingOptionsError,
    InvalidInputError,
    InvalidParameterError,
)
from storyshape.transform.dct import dct_smooth


class TestDctSmooth:
    def test_identity_when_nothing_filtered(self) -> None:
        """Keeping every coefficient at the input length reproduces the input."""
        rng = np.random.default_rng(11)
        raw = rng.normal(size=37)
        result = dct_smooth(raw, low_pass_size=37, out_len=37)
        np.testing.assert_allclose(result, raw, atol=1e-10)

    @pytest.mark.parametrize("n", [5, 12, 100, 333])
    @pytest.mark.parametrize("out_len", [5, 50, 100, 250])
    def test_output_length(self, n: int, out_len: int) -> None:
        raw = np.cos(np.linspace(0, 3, n))
        assert dct_smooth(raw, low_pass_size=5, out_len=out_len).shape == (out_len,)

    def test_default_length_is_hundred(self) -> None:
        assert len(dct_smooth(list(range(10)))) == 100

    def test_low_pass_removes_alternation(self) -> None:
        raw = [1.0, 3.0] * 10
        np.testing.assert_allclose(dct_smooth(raw, low_pass_size=1, out_len=20), 2.0)

    def test_resampling_scales_by_length_ratio(self) -> None:
        result = dct_smooth([2.0] * 10, low_pass_size=1, out_len=100)
        np.testing.assert_allclose(result, 0.2)

    def test_scale_range(self) -> None:
        raw = np.sin(np.linspace(0, 2 * np.pi, 60))
        result = dct_smooth(raw, low_pass_size=4, scale_range=True)
        assert result.min() == pytest.approx(-1.0)
        assert result.max() == pytest.approx(1.0)

    def test_scale_vals(self) -> None:
        raw = np.sin(np.linspace(0, 2 * np.pi, 60))
        result = dct_smooth(raw, low_pass_size=4, scale_vals=True)
        assert result.mean() == pytest.approx(0.0, abs=1e-12)
        assert result.std(ddof=1) == pytest.approx(1.0)

    def test_conflicting_scaling_raises(self) -> None:
        with pytest.raises(ConflictingOptionsError):
            dct_smooth([1.0, 2.0, 3.0], low_pass_size=2, scale_vals=True, scale_range=True)

    def test_low_pass_larger_than_input_raises(self) -> None:
        with pytest.raises(InvalidParameterError):
            dct_smooth([1.0, 2.0, 3.0], low_pass_size=4)

    def test_low_pass_larger_than_output_raises(self) -> None:
        with pytest.raises(InvalidParameterError):
            dct_smooth(list(range(20)), low_pass_size=10, out_len=5)

    def test_non_numeric_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            dct_smooth(["a", "b", "c"], low_pass_size=1)

    def test_input_not_modified(self) -> None:
        raw = np.array([0.5, -1.0, 2.0, 0.0, 1.0])
        dct_smooth(raw, low_pass_size=2, out_len=10)
        np.testing.assert_array_equal(raw, [0.5, -1.0, 2.0, 0.0, 1.0])
