from __future__ import annotations

import numpy as np
import pytest

from taengine.indicators import functions
from taengine.indicators.domain.entities import CompatibilityMode, IndexRange, MAType, RetCode
from taengine.platform.config import CompatibilitySettings, set_compatibility_mode


def _prices(size: int = 150) -> np.ndarray:
    rng = np.random.default_rng(20260211)
    return np.ascontiguousarray(100.0 + np.cumsum(rng.normal(0.0, 1.0, size)))


def _candles(size: int = 120) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    close = _prices(size)
    rng = np.random.default_rng(7)
    high = np.ascontiguousarray(close + rng.uniform(0.1, 1.5, size))
    low = np.ascontiguousarray(close - rng.uniform(0.1, 1.5, size))
    return high, low, close


def _run(fn, values: np.ndarray, **params) -> tuple[functions.ComputeResult, np.ndarray]:
    out = np.full(values.shape[0], np.nan, dtype=values.dtype)
    result = fn(values, None, out, **params)
    assert result.ok
    return result, out[: len(result.out_range)]


def _run_macd(
    fn, values: np.ndarray, **params
) -> tuple[functions.ComputeResult, np.ndarray, np.ndarray, np.ndarray]:
    """
    Run a MACD-family function over the whole series.

    Args:
        fn: `macd`, `macdfix` or `macdext`.
        values: Input series.
        **params: Function parameters.
    Returns:
        tuple: Result plus trimmed MACD, signal and histogram buffers.
    Assumptions:
        The call is expected to succeed.
    Raises:
        AssertionError: If the call fails.
    Side Effects:
        Allocates three output buffers.
    """
    size = values.shape[0]
    line, signal, hist = (np.full(size, np.nan) for _ in range(3))
    result = fn(values, None, line, signal, hist, **params)
    assert result.ok
    count = len(result.out_range)
    return result, line[:count], signal[:count], hist[:count]


def test_rsi_of_rising_series_is_one_hundred() -> None:
    """
    Verify RSI(2) over `[1, 2, 3, 4, 5]` is 100 at `[2, 5)`.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        No losses in the series.
    Raises:
        AssertionError: If values or alignment regress.
    Side Effects:
        None.
    """
    values = np.asarray([1.0, 2.0, 3.0, 4.0, 5.0])

    result, out = _run(functions.rsi, values, period=2)

    assert result.out_range == IndexRange(2, 5)
    np.testing.assert_allclose(out, [100.0, 100.0, 100.0])


def test_rsi_and_cmo_of_flat_series_are_zero() -> None:
    values = np.full(30, 12.5)

    for fn in (functions.rsi, functions.cmo):
        _, out = _run(fn, values, period=5)
        np.testing.assert_array_equal(out, np.zeros(25))


def test_cmo_of_falling_series_is_minus_one_hundred() -> None:
    values = np.arange(30.0, 0.0, -1.0)

    _, out = _run(functions.cmo, values, period=4)

    np.testing.assert_allclose(out, -100.0)


def test_rsi_stays_within_bounds() -> None:
    _, out = _run(functions.rsi, _prices(), period=14)

    assert np.all(out >= 0.0)
    assert np.all(out <= 100.0)


def test_metastock_rsi_starts_one_sample_earlier() -> None:
    """
    Verify the legacy first sample shortens the RSI lookback to `period - 1`.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        METASTOCK with no unstable period enables the legacy first output.
    Raises:
        AssertionError: If the range or sample count regress.
    Side Effects:
        Switches the process-wide mode; restored by the autouse fixture.
    """
    values = _prices(60)
    default_result, default_out = _run(functions.rsi, values, period=14)

    set_compatibility_mode(CompatibilityMode.METASTOCK)
    legacy_result, legacy_out = _run(functions.rsi, values, period=14)

    assert default_result.out_range == IndexRange(14, 60)
    assert legacy_result.out_range == IndexRange(13, 60)
    assert legacy_out.shape[0] == default_out.shape[0] + 1
    assert np.all(np.isfinite(legacy_out))


def test_macd_histogram_is_line_minus_signal() -> None:
    values = _prices()

    result, line, signal, hist = _run_macd(functions.macd, values)

    assert result.out_range.start == 33
    np.testing.assert_allclose(hist, line - signal, rtol=1e-12, atol=1e-12)


def test_macd_swaps_fast_and_slow_periods() -> None:
    values = _prices()

    _, line, signal, _ = _run_macd(functions.macd, values, fast_period=12, slow_period=26)
    _, swapped_line, swapped_signal, _ = _run_macd(
        functions.macd, values, fast_period=26, slow_period=12
    )

    np.testing.assert_array_equal(line, swapped_line)
    np.testing.assert_array_equal(signal, swapped_signal)


def test_macdext_with_exponential_lines_matches_macd() -> None:
    """
    Verify MACDEXT configured with EMA everywhere reproduces MACD exactly.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Both cascades start their lines at the same stage start.
    Raises:
        AssertionError: If the staged lines drift apart.
    Side Effects:
        None.
    """
    values = _prices()

    macd_result, line, signal, hist = _run_macd(
        functions.macd, values, fast_period=5, slow_period=13, signal_period=4
    )
    ext_result, ext_line, ext_signal, ext_hist = _run_macd(
        functions.macdext,
        values,
        fast_period=5,
        fast_ma_type=MAType.EMA,
        slow_period=13,
        slow_ma_type=MAType.EMA,
        signal_period=4,
        signal_ma_type=MAType.EMA,
    )

    assert ext_result.out_range == macd_result.out_range
    np.testing.assert_allclose(ext_line, line, rtol=1e-12)
    np.testing.assert_allclose(ext_signal, signal, rtol=1e-12)
    np.testing.assert_allclose(ext_hist, hist, rtol=1e-12, atol=1e-12)


def test_macdext_with_simple_lines_is_difference_of_smas() -> None:
    values = _prices()

    result, line, signal, hist = _run_macd(
        functions.macdext, values, fast_period=4, slow_period=10, signal_period=3
    )
    _, fast = _run(functions.sma, values, period=4)
    _, slow = _run(functions.sma, values, period=10)

    assert result.out_range.start == 11
    np.testing.assert_allclose(line, (fast[6:] - slow)[2:], rtol=1e-9, atol=1e-9)
    np.testing.assert_allclose(hist, line - signal, rtol=1e-12, atol=1e-12)


def test_macdfix_uses_fixed_smoothing_lookback() -> None:
    values = _prices()

    result, line, signal, hist = _run_macd(functions.macdfix, values)

    assert result.out_range.start == 33
    assert np.all(np.isfinite(line))
    np.testing.assert_allclose(hist, line - signal, rtol=1e-12, atol=1e-12)


def test_apo_is_difference_of_simple_averages() -> None:
    values = _prices()

    result, out = _run(functions.apo, values, fast_period=3, slow_period=5)
    _, fast = _run(functions.sma, values, period=3)
    _, slow = _run(functions.sma, values, period=5)

    assert result.out_range.start == 4
    np.testing.assert_allclose(out, fast[2:] - slow, rtol=1e-9, atol=1e-9)


def test_ppo_is_zero_where_slow_average_is_zero() -> None:
    values = np.concatenate([np.zeros(10), np.arange(1.0, 11.0)])

    result, out = _run(functions.ppo, values, fast_period=2, slow_period=4)
    _, fast = _run(functions.sma, values, period=2)
    _, slow = _run(functions.sma, values, period=4)

    assert result.out_range.start == 3
    safe_slow = np.where(slow != 0.0, slow, 1.0)
    expected = np.where(slow != 0.0, (fast[2:] - slow) / safe_slow * 100.0, 0.0)
    np.testing.assert_allclose(out, expected, rtol=1e-12)
    np.testing.assert_array_equal(out[:7], np.zeros(7))


def test_exponential_apo_seeds_each_average_at_its_own_start() -> None:
    """
    Verify EMA-based APO/PPO subtract averages seeded at their own lookbacks.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        A whole-series EMA(5) seeds at index 4 while EMA(12) seeds at index 11.
    Raises:
        AssertionError: If the fast average is reseeded on the slow window.
    Side Effects:
        None.
    """
    values = _prices()

    result, apo_out = _run(functions.apo, values, fast_period=5, slow_period=12, ma_type="ema")
    _, ppo_out = _run(functions.ppo, values, fast_period=5, slow_period=12, ma_type="ema")
    _, fast = _run(functions.ema, values, period=5)
    _, slow = _run(functions.ema, values, period=12)

    assert result.out_range.start == 11
    np.testing.assert_allclose(apo_out, fast[7:] - slow, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(ppo_out, (fast[7:] - slow) / slow * 100.0, rtol=1e-12)


def test_exponential_apo_seeds_fast_average_at_requested_start() -> None:
    values = _prices()
    requested = IndexRange(30, values.shape[0])
    size = len(requested)
    apo_out, fast, slow = (np.full(size, np.nan) for _ in range(3))

    result = functions.apo(
        values, requested, apo_out, fast_period=5, slow_period=12, ma_type=MAType.EMA
    )
    assert functions.ema(values, requested, fast, period=5).ok
    assert functions.ema(values, requested, slow, period=12).ok

    assert result.out_range == requested
    np.testing.assert_allclose(apo_out, fast - slow, rtol=1e-12, atol=1e-12)


def test_price_oscillators_reject_invalid_variant() -> None:
    values = _prices(40)
    out = np.empty(40)

    assert functions.apo(values, None, out, ma_type="hull").ret_code is RetCode.BAD_PARAM
    assert functions.ppo(values, None, out, fast_period=1).ret_code is RetCode.BAD_PARAM


def test_trix_is_rate_of_change_of_triple_ema() -> None:
    """
    Verify TRIX against three chained EMA calls followed by a one-step ROC.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Whole-series requests seed every EMA at the same index as the staged cascade.
    Raises:
        AssertionError: If the composed value or start index regress.
    Side Effects:
        None.
    """
    values = _prices(200)
    period = 5

    _, e1 = _run(functions.ema, values, period=period)
    _, e2 = _run(functions.ema, np.ascontiguousarray(e1), period=period)
    _, e3 = _run(functions.ema, np.ascontiguousarray(e2), period=period)
    result, out = _run(functions.trix, values, period=period)

    assert result.out_range.start == 3 * (period - 1) + 1
    np.testing.assert_allclose(out, (e3[1:] / e3[:-1] - 1.0) * 100.0, rtol=1e-10)


def test_rate_of_change_family_relations() -> None:
    values = _prices(50)
    period = 3
    current = values[period:]
    previous = values[:-period]

    _, mom = _run(functions.mom, values, period=period)
    _, roc = _run(functions.roc, values, period=period)
    _, rocp = _run(functions.rocp, values, period=period)
    _, rocr = _run(functions.rocr, values, period=period)
    _, rocr100 = _run(functions.rocr100, values, period=period)

    np.testing.assert_allclose(mom, current - previous)
    np.testing.assert_allclose(roc, (current / previous - 1.0) * 100.0)
    np.testing.assert_allclose(rocp, (current - previous) / previous)
    np.testing.assert_allclose(rocr, current / previous)
    np.testing.assert_allclose(rocr100, current / previous * 100.0)


def test_ratio_changes_write_zero_for_zero_reference() -> None:
    values = np.asarray([0.0, 1.0, 2.0, 4.0])

    for fn in (functions.roc, functions.rocp, functions.rocr, functions.rocr100):
        _, out = _run(fn, values, period=1)
        assert out[0] == 0.0
        assert np.all(np.isfinite(out))


def test_mom_accepts_period_one() -> None:
    values = np.asarray([1.0, 4.0, 9.0])

    result, out = _run(functions.mom, values, period=1)

    assert result.out_range == IndexRange(1, 3)
    np.testing.assert_allclose(out, [3.0, 5.0])


def test_willr_stays_within_bounds() -> None:
    high, low, close = _candles()
    out = np.empty(close.shape[0])

    result = functions.willr(high, low, close, None, out, period=14)

    assert result.out_range.start == 13
    written = out[: len(result.out_range)]
    assert np.all(written <= 0.0)
    assert np.all(written >= -100.0)


def test_aroonosc_is_up_minus_down() -> None:
    high, low, _ = _candles()
    size = high.shape[0]
    down, up, osc = (np.empty(size) for _ in range(3))

    result = functions.aroon(high, low, None, down, up, period=14)
    osc_result = functions.aroonosc(high, low, None, osc, period=14)

    assert result.out_range == osc_result.out_range == IndexRange(14, size)
    count = len(result.out_range)
    np.testing.assert_allclose(osc[:count], up[:count] - down[:count])


@pytest.mark.parametrize("settings", [None, CompatibilitySettings(mode=CompatibilityMode.METASTOCK)])
def test_explicit_settings_override_process_defaults(settings: CompatibilitySettings | None) -> None:
    values = _prices(60)

    result, _ = _run(functions.cmo, values, period=10, settings=settings)

    expected_start = 9 if settings is not None else 10
    assert result.out_range.start == expected_start
