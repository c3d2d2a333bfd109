from __future__ import annotations

import numpy as np
import pytest

from taengine.indicators import functions
from taengine.indicators.domain.entities import IndexRange, RetCode, UnstableFunc
from taengine.platform.config import CompatibilitySettings


def _candles(size: int = 120) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build high/low/close series with a trend change halfway through.

    Args:
        size: Number of samples.
    Returns:
        tuple[np.ndarray, np.ndarray, np.ndarray]: `(high, low, close)` arrays.
    Assumptions:
        High stays above low, so every true range is positive.
    Raises:
        None.
    Side Effects:
        Allocates numpy arrays.
    """
    rng = np.random.default_rng(7)
    drift = np.where(np.arange(size) < size // 2, 0.4, -0.4)
    close = 100.0 + np.cumsum(drift + rng.normal(0.0, 1.0, size))
    high = np.ascontiguousarray(close + rng.uniform(0.1, 2.0, size))
    low = np.ascontiguousarray(close - rng.uniform(0.1, 2.0, size))
    return high, low, np.ascontiguousarray(close)


def _one_bar_moves(high: np.ndarray, low: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    up = high[1:] - high[:-1]
    down = low[:-1] - low[1:]
    plus = np.where((up > 0.0) & (up > down), up, 0.0)
    minus = np.where((down > 0.0) & (down > up), down, 0.0)
    return plus, minus


def test_period_one_movement_is_the_one_bar_move() -> None:
    high, low, _ = _candles()
    size = high.shape[0]
    plus_out, minus_out = np.empty(size), np.empty(size)
    plus, minus = _one_bar_moves(high, low)

    plus_result = functions.plus_dm(high, low, None, plus_out, period=1)
    minus_result = functions.minus_dm(high, low, None, minus_out, period=1)

    assert plus_result.out_range == minus_result.out_range == IndexRange(1, size)
    np.testing.assert_array_equal(plus_out[: size - 1], plus)
    np.testing.assert_array_equal(minus_out[: size - 1], minus)


def test_smoothed_movement_starts_from_sum_of_first_moves() -> None:
    """
    Verify +DM seeds with the sum of `period - 1` moves and then Wilder-smooths.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Zero unstable period.
    Raises:
        AssertionError: If seeding or smoothing regress.
    Side Effects:
        None.
    """
    high, low, _ = _candles()
    size = high.shape[0]
    period = 6
    out = np.empty(size)
    plus, _ = _one_bar_moves(high, low)

    result = functions.plus_dm(high, low, None, out, period=period)

    assert result.out_range == IndexRange(period - 1, size)
    expected = [plus[: period - 1].sum()]
    for move in plus[period - 1 :]:
        expected.append(expected[-1] - expected[-1] / period + move)
    np.testing.assert_allclose(out[: len(result.out_range)], expected, rtol=1e-12)


def test_period_one_di_is_unscaled_move_over_true_range() -> None:
    high, low, close = _candles()
    size = close.shape[0]
    di_out, tr_out = np.empty(size), np.empty(size)
    _, minus = _one_bar_moves(high, low)

    result = functions.minus_di(high, low, close, None, di_out, period=1)
    functions.trange(high, low, close, None, tr_out)

    assert result.out_range == IndexRange(1, size)
    np.testing.assert_allclose(di_out[: size - 1], minus / tr_out[: size - 1], rtol=1e-12)


def test_dx_combines_plus_and_minus_di() -> None:
    high, low, close = _candles()
    size = close.shape[0]
    plus_di, minus_di, dx = np.empty(size), np.empty(size), np.empty(size)

    result = functions.dx(high, low, close, None, dx, period=10)
    functions.plus_di(high, low, close, None, plus_di, period=10)
    functions.minus_di(high, low, close, None, minus_di, period=10)

    assert result.out_range == IndexRange(10, size)
    count = len(result.out_range)
    spread = np.abs(minus_di[:count] - plus_di[:count])
    total = minus_di[:count] + plus_di[:count]
    np.testing.assert_allclose(dx[:count], 100.0 * spread / total, rtol=1e-9)


def test_adx_seeds_with_mean_dx_then_smooths() -> None:
    """
    Verify the first ADX is the mean of `period` DX values, later ones Wilder averages.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Every DX in the series is defined because each bar has a positive range.
    Raises:
        AssertionError: If ADX drifts from its DX-based definition.
    Side Effects:
        None.
    """
    high, low, close = _candles()
    size = close.shape[0]
    period = 8
    dx, adx = np.empty(size), np.empty(size)

    functions.dx(high, low, close, None, dx, period=period)
    result = functions.adx(high, low, close, None, adx, period=period)

    assert result.out_range == IndexRange(2 * period - 1, size)
    expected = [dx[:period].mean()]
    for value in dx[period : size - period]:
        expected.append((expected[-1] * (period - 1) + value) / period)
    np.testing.assert_allclose(adx[: len(result.out_range)], expected, rtol=1e-9)
    assert np.all((adx[: len(result.out_range)] >= 0.0) & (adx[: len(result.out_range)] <= 100.0))


def test_adxr_averages_adx_with_its_lagged_value() -> None:
    high, low, close = _candles()
    size = close.shape[0]
    period = 7
    adx, adxr = np.empty(size), np.empty(size)

    adx_result = functions.adx(high, low, close, None, adx, period=period)
    result = functions.adxr(high, low, close, None, adxr, period=period)

    assert result.out_range.start == adx_result.out_range.start + period - 1
    count = len(result.out_range)
    expected = (adx[period - 1 : period - 1 + count] + adx[:count]) / 2.0
    np.testing.assert_allclose(adxr[:count], expected, rtol=1e-12)


def test_flat_bars_give_zero_directional_values() -> None:
    flat = np.full(40, 12.5)
    outputs = {name: np.full(40, np.nan) for name in ("plus_di", "dx", "adx")}

    functions.plus_di(flat, flat, flat, None, outputs["plus_di"], period=5)
    functions.dx(flat, flat, flat, None, outputs["dx"], period=5)
    result = functions.adx(flat, flat, flat, None, outputs["adx"], period=5)

    assert result.out_range == IndexRange(9, 40)
    np.testing.assert_array_equal(outputs["plus_di"][:35], np.zeros(35))
    np.testing.assert_array_equal(outputs["dx"][:35], np.zeros(35))
    np.testing.assert_array_equal(outputs["adx"][:31], np.zeros(31))


def test_adx_unstable_period_delays_first_output() -> None:
    high, low, close = _candles()
    size = close.shape[0]
    settings = CompatibilitySettings(unstable_periods={UnstableFunc.ADX: 6})
    out = np.empty(size)

    result = functions.adx(high, low, close, None, out, period=5, settings=settings)

    assert result.out_range == IndexRange(15, size)
    assert np.all(np.isfinite(out[: len(result.out_range)]))


@pytest.mark.parametrize("fn", [functions.dx, functions.adx, functions.adxr])
def test_directional_index_rejects_period_one(fn) -> None:
    high, low, close = _candles(30)
    out = np.full(30, np.nan)

    result = fn(high, low, close, None, out, period=1)

    assert result.ret_code is RetCode.BAD_PARAM
    assert np.all(np.isnan(out))


def test_mfi_is_hundred_for_steadily_rising_typical_price() -> None:
    close = np.arange(1.0, 31.0)
    high, low = close + 1.0, close - 1.0
    volume = np.full(30, 1_000.0)
    out = np.empty(30)

    result = functions.mfi(high, low, close, volume, None, out, period=5)

    assert result.out_range == IndexRange(5, 30)
    np.testing.assert_allclose(out[:25], 100.0)


def test_mfi_is_zero_when_combined_flow_is_below_one() -> None:
    high, low, close = _candles(40)
    volume = np.full(40, 1e-6)
    out = np.full(40, np.nan)

    result = functions.mfi(high, low, close, volume, None, out, period=6)

    np.testing.assert_array_equal(out[: len(result.out_range)], 0.0)


def test_cci_is_zero_for_constant_bars() -> None:
    flat = np.full(25, 3.0)
    out = np.full(25, np.nan)

    result = functions.cci(flat, flat, flat, None, out, period=5)

    assert result.out_range == IndexRange(4, 25)
    np.testing.assert_array_equal(out[:21], 0.0)
