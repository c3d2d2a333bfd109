from __future__ import annotations

import numpy as np
import pytest

from taengine.indicators import functions
from taengine.indicators.domain.entities import IndexRange, RetCode


def _prices(size: int = 80) -> np.ndarray:
    rng = np.random.default_rng(20260211)
    return np.ascontiguousarray(100.0 + np.cumsum(rng.normal(0.0, 1.0, size)))


def _candles(size: int = 80) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build high/low/close series with positive closes.

    Args:
        size: Number of samples.
    Returns:
        tuple[np.ndarray, np.ndarray, np.ndarray]: `(high, low, close)` arrays.
    Assumptions:
        High stays above low for every bar.
    Raises:
        None.
    Side Effects:
        Allocates numpy arrays.
    """
    close = _prices(size)
    rng = np.random.default_rng(3)
    high = np.ascontiguousarray(close + rng.uniform(0.1, 2.0, size))
    low = np.ascontiguousarray(close - rng.uniform(0.1, 2.0, size))
    return high, low, close


def test_min_max_matches_single_extrema_functions() -> None:
    values = _prices()
    size = values.shape[0]
    out_min, out_max, lowest, highest = (np.empty(size) for _ in range(4))

    result = functions.min_max(values, None, out_min, out_max, period=9)
    functions.rolling_min(values, None, lowest, period=9)
    functions.rolling_max(values, None, highest, period=9)

    count = len(result.out_range)
    assert result.out_range == IndexRange(8, size)
    np.testing.assert_array_equal(out_min[:count], lowest[:count])
    np.testing.assert_array_equal(out_max[:count], highest[:count])


def test_min_max_index_matches_single_index_functions() -> None:
    """
    Verify the paired index function agrees with the single index functions.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Indices are absolute positions in the input series.
    Raises:
        AssertionError: If any index differs or falls outside its window.
    Side Effects:
        None.
    """
    values = _prices()
    size = values.shape[0]
    period = 6
    out_min_idx, out_max_idx, min_idx, max_idx = (
        np.empty(size, dtype=np.int64) for _ in range(4)
    )

    result = functions.min_max_index(values, None, out_min_idx, out_max_idx, period=period)
    functions.min_index(values, None, min_idx, period=period)
    functions.max_index(values, None, max_idx, period=period)

    count = len(result.out_range)
    np.testing.assert_array_equal(out_min_idx[:count], min_idx[:count])
    np.testing.assert_array_equal(out_max_idx[:count], max_idx[:count])
    positions = np.arange(result.out_range.start, result.out_range.end)
    assert np.all(max_idx[:count] <= positions)
    assert np.all(max_idx[:count] > positions - period)
    np.testing.assert_array_equal(
        values[max_idx[:count]],
        [values[i - period + 1 : i + 1].max() for i in positions],
    )


def test_max_index_reports_absolute_positions_for_partial_ranges() -> None:
    values = np.asarray([1.0, 5.0, 2.0, 2.0, 9.0, 3.0, 1.0, 0.0])
    out = np.full(values.shape[0], -1, dtype=np.int64)

    result = functions.max_index(values, IndexRange(5, 8), out, period=3)

    assert result.out_range == IndexRange(5, 8)
    np.testing.assert_array_equal(out[:3], [4, 4, 5])


def test_rolling_sum_of_ones_is_period() -> None:
    values = np.ones(12)
    out = np.empty(12)

    result = functions.rolling_sum(values, None, out, period=4)

    np.testing.assert_allclose(out[: len(result.out_range)], 4.0)


def test_var_of_constant_series_is_zero() -> None:
    values = np.full(20, 7.25)
    out = np.empty(20)

    result = functions.var(values, None, out, period=5)

    assert result.out_range == IndexRange(4, 20)
    np.testing.assert_allclose(out[: len(result.out_range)], 0.0, atol=1e-12)


def test_stddev_scales_with_deviation_multiplier() -> None:
    values = _prices()
    size = values.shape[0]
    unit, doubled, variance = (np.empty(size) for _ in range(3))

    result = functions.stddev(values, None, unit, period=5, nbdev=1.0)
    functions.stddev(values, None, doubled, period=5, nbdev=2.0)
    functions.var(values, None, variance, period=5)

    count = len(result.out_range)
    np.testing.assert_allclose(doubled[:count], 2.0 * unit[:count], rtol=1e-12)
    np.testing.assert_allclose(unit[:count] ** 2, variance[:count], rtol=1e-9, atol=1e-9)


def test_var_matches_population_variance() -> None:
    values = np.asarray([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
    out = np.empty(8)

    result = functions.var(values, IndexRange(7, 8), out, period=8)

    assert result.out_range == IndexRange(7, 8)
    assert out[0] == pytest.approx(4.0)


def test_natr_is_atr_as_percentage_of_close() -> None:
    """
    Verify NATR equals `100 * ATR / close` at the same index.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Closes are strictly positive.
    Raises:
        AssertionError: If normalization or alignment regress.
    Side Effects:
        None.
    """
    high, low, close = _candles()
    size = close.shape[0]
    atr_out, natr_out = np.empty(size), np.empty(size)

    atr_result = functions.atr(high, low, close, None, atr_out, period=10)
    natr_result = functions.natr(high, low, close, None, natr_out, period=10)

    assert atr_result.out_range == natr_result.out_range == IndexRange(10, size)
    count = len(atr_result.out_range)
    closes = close[atr_result.out_range.as_slice()]
    np.testing.assert_allclose(natr_out[:count], atr_out[:count] / closes * 100.0, rtol=1e-12)


def test_atr_with_period_one_is_true_range() -> None:
    high, low, close = _candles()
    size = close.shape[0]
    atr_out, tr_out = np.empty(size), np.empty(size)

    atr_result = functions.atr(high, low, close, None, atr_out, period=1)
    tr_result = functions.trange(high, low, close, None, tr_out)

    assert atr_result.out_range == tr_result.out_range == IndexRange(1, size)
    count = len(tr_result.out_range)
    np.testing.assert_array_equal(atr_out[:count], tr_out[:count])


def test_natr_with_period_one_is_normalized_true_range() -> None:
    high, low, close = _candles()
    size = close.shape[0]
    natr_out, tr_out = np.empty(size), np.empty(size)

    result = functions.natr(high, low, close, None, natr_out, period=1)
    functions.trange(high, low, close, None, tr_out)

    count = len(result.out_range)
    closes = close[result.out_range.as_slice()]
    np.testing.assert_allclose(natr_out[:count], tr_out[:count] / closes * 100.0, rtol=1e-12)


def test_natr_writes_zero_for_zero_close() -> None:
    high = np.asarray([2.0, 3.0, 2.5, 1.0])
    low = np.asarray([1.0, 1.5, 0.5, 0.0])
    close = np.asarray([1.5, 2.0, 0.0, 0.5])
    out = np.empty(4)

    result = functions.natr(high, low, close, None, out, period=1)

    assert result.out_range == IndexRange(1, 4)
    assert out[1] == 0.0
    assert np.all(np.isfinite(out[:3]))


def test_trange_needs_one_prior_close() -> None:
    high, low, close = _candles(10)
    out = np.empty(10)

    result = functions.trange(high, low, close, (0, 1), out)

    assert result.ok
    assert result.out_range.is_empty
    assert result.out_range.start == 1


def test_atr_rejects_period_zero() -> None:
    high, low, close = _candles(10)
    out = np.empty(10)

    assert functions.atr(high, low, close, None, out, period=0).ret_code is RetCode.BAD_PARAM


def test_linear_regression_reproduces_a_straight_line() -> None:
    """
    Verify every regression term is exact on a linear series.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        The intercept is the fitted value at the oldest bar of each window.
    Raises:
        AssertionError: If any term of the fitted line regresses.
    Side Effects:
        None.
    """
    values = 3.0 + 2.0 * np.arange(30, dtype=np.float64)
    period = 6
    outputs = {name: np.empty(30) for name in ("value", "slope", "intercept", "angle", "tsf")}

    result = functions.linearreg(values, None, outputs["value"], period=period)
    functions.linearreg_slope(values, None, outputs["slope"], period=period)
    functions.linearreg_intercept(values, None, outputs["intercept"], period=period)
    functions.linearreg_angle(values, None, outputs["angle"], period=period)
    functions.tsf(values, None, outputs["tsf"], period=period)

    assert result.out_range == IndexRange(5, 30)
    count = len(result.out_range)
    np.testing.assert_allclose(outputs["value"][:count], values[5:], rtol=1e-9)
    np.testing.assert_allclose(outputs["slope"][:count], 2.0, rtol=1e-9)
    np.testing.assert_allclose(outputs["intercept"][:count], values[:count], rtol=1e-9)
    np.testing.assert_allclose(outputs["angle"][:count], np.degrees(np.arctan(2.0)), rtol=1e-9)
    np.testing.assert_allclose(outputs["tsf"][:count], values[5:] + 2.0, rtol=1e-9)


def test_avgdev_matches_mean_absolute_deviation() -> None:
    values = _prices()
    out = np.empty(values.shape[0])

    result = functions.avgdev(values, IndexRange(20, 24), out, period=5)

    assert result.out_range == IndexRange(20, 24)
    expected = [
        np.abs(values[i - 4 : i + 1] - values[i - 4 : i + 1].mean()).mean() for i in range(20, 24)
    ]
    np.testing.assert_allclose(out[:4], expected, rtol=1e-12)
