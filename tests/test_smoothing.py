"""Tests for storyshape.transform.smoothing module."""

from __future__ import annotations

import numpy as np
import pytest

from storyshape.exceptions import InvalidParameterError
from storyshape.transform.smoothing import rolling_mean, simple_shapes


class TestRollingMean:
    def test_odd_window(self) -> None:
        result = rolling_mean([1, 2, 3, 4, 5], 3)
        np.testing.assert_allclose(result, [np.nan, 2, 3, 4, np.nan])

    def test_even_window_leans_right(self) -> None:
        result = rolling_mean([1, 2, 3, 4, 5], 4)
        np.testing.assert_allclose(result, [np.nan, 2.5, 3.5, np.nan, np.nan])

    def test_custom_fill(self) -> None:
        result = rolling_mean([1, 2, 3], 3, fill=0.0)
        np.testing.assert_allclose(result, [0, 2, 0])

    def test_window_of_one_is_identity(self) -> None:
        np.testing.assert_allclose(rolling_mean([4, 1, 7], 1), [4, 1, 7])

    def test_window_too_large_raises(self) -> None:
        with pytest.raises(InvalidParameterError):
            rolling_mean([1, 2, 3], 4)


class TestSimpleShapes:
    @pytest.fixture
    def raw(self) -> np.ndarray:
        x = np.linspace(0, 4 * np.pi, 50)
        return np.sin(x) + 0.3 * np.cos(7 * x)

    def test_curves(self, raw: np.ndarray) -> None:
        shapes = simple_shapes(raw)
        assert set(shapes) == {"rolling", "dct", "macro"}
        assert len(shapes["rolling"]) == 50
        assert len(shapes["dct"]) == 50
        assert len(shapes["macro"]) == 100

    def test_dct_curves_scaled(self, raw: np.ndarray) -> None:
        shapes = simple_shapes(raw)
        for key in ("dct", "macro"):
            assert shapes[key].min() == pytest.approx(-1.0)
            assert shapes[key].max() == pytest.approx(1.0)

    def test_rolling_edges_are_nan(self, raw: np.ndarray) -> None:
        rolled = simple_shapes(raw)["rolling"]
        assert np.isnan(rolled[:2]).all()
        assert np.isnan(rolled[-3:]).all()
        inner = rolled[2:-3]
        assert not np.isnan(inner).any()
        assert inner.min() >= -1.0
        assert inner.max() <= 1.0

    @pytest.mark.parametrize("window", [0, -0.1, 1.5])
    def test_window_out_of_range(self, raw: np.ndarray, window: float) -> None:
        with pytest.raises(InvalidParameterError):
            simple_shapes(raw, window=window)

    def test_window_too_small(self) -> None:
        with pytest.raises(InvalidParameterError):
            simple_shapes([1.0, 2.0, 3.0, 2.0, 1.0], lps=2, window=0.05)
