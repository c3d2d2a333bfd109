from __future__ import annotations

import numpy as np
import pytest

from taengine.indicators import functions
from taengine.indicators.domain.entities import (
    CompatibilityMode,
    IndexRange,
    MAType,
    RetCode,
    UnstableFunc,
)
from taengine.platform.config import (
    CompatibilitySettings,
    set_compatibility_mode,
    set_unstable_period,
)


def _prices(size: int = 120) -> np.ndarray:
    rng = np.random.default_rng(20260211)
    return np.ascontiguousarray(100.0 + np.cumsum(rng.normal(0.0, 1.0, size)))


def _run(fn, values: np.ndarray, **params) -> tuple[functions.ComputeResult, np.ndarray]:
    out = np.full(values.shape[0], np.nan, dtype=values.dtype)
    result = fn(values, None, out, **params)
    assert result.ok
    return result, out[: len(result.out_range)]


def test_sma_period_three_over_five_samples() -> None:
    """
    Verify the basic SMA walk-through: lookback 2, outputs aligned to `[2, 5)`.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Full-range request.
    Raises:
        AssertionError: If values or alignment regress.
    Side Effects:
        None.
    """
    values = np.asarray([1.0, 2.0, 3.0, 4.0, 5.0])

    result, out = _run(functions.sma, values, period=3)

    assert result.out_range == IndexRange(2, 5)
    np.testing.assert_allclose(out, [2.0, 3.0, 4.0])


def test_ema_metastock_seeds_with_first_sample() -> None:
    """
    Verify EMA(2) over `[1, 2, 3]` seeds with 1 and then applies `k = 2/3`.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        METASTOCK mode seeds with the first warm-up sample.
    Raises:
        AssertionError: If seeding or smoothing regresses.
    Side Effects:
        Switches the process-wide mode; restored by the autouse fixture.
    """
    set_compatibility_mode(CompatibilityMode.METASTOCK)
    values = np.asarray([1.0, 2.0, 3.0])

    result, out = _run(functions.ema, values, period=2)

    assert result.out_range == IndexRange(1, 3)
    np.testing.assert_allclose(out, [2.0 * 2.0 / 3.0 + 1.0 / 3.0, 2.555555555555556])


def test_ema_default_seeds_with_window_average() -> None:
    values = np.asarray([1.0, 2.0, 3.0])

    result, out = _run(functions.ema, values, period=2)

    assert result.out_range == IndexRange(1, 3)
    np.testing.assert_allclose(out, [1.5, 3.0 * 2.0 / 3.0 + 1.5 / 3.0])


@pytest.mark.parametrize("size", [40, 41, 120])
def test_dema_equals_twice_ema_minus_ema_of_ema(size: int) -> None:
    """
    Verify DEMA against its composition from two EMA calls.

    Args:
        size: Input length, always above twice the EMA lookback.
    Returns:
        None.
    Assumptions:
        The second EMA runs over the first EMA's written values.
    Raises:
        AssertionError: If DEMA drifts from `2 * EMA - EMA(EMA)`.
    Side Effects:
        None.
    """
    values = _prices(size)
    period = 10

    dema_result, dema_out = _run(functions.dema, values, period=period)
    ema_result, first = _run(functions.ema, values, period=period)
    second_result, second = _run(functions.ema, np.ascontiguousarray(first), period=period)

    offset = second_result.out_range.start
    expected = 2.0 * first[offset:] - second
    assert dema_result.out_range.start == ema_result.out_range.start + offset
    np.testing.assert_allclose(dema_out, expected, rtol=1e-12)


def test_tema_equals_its_ema_cascade() -> None:
    values = _prices()
    period = 6

    _, e1 = _run(functions.ema, values, period=period)
    r2, e2 = _run(functions.ema, np.ascontiguousarray(e1), period=period)
    r3, e3 = _run(functions.ema, np.ascontiguousarray(e2), period=period)
    result, out = _run(functions.tema, values, period=period)

    lb = r2.out_range.start
    expected = 3.0 * e1[2 * lb :] - 3.0 * e2[lb:] + e3
    assert result.out_range.start == 3 * lb
    np.testing.assert_allclose(out, expected, rtol=1e-12)


@pytest.mark.parametrize(
    ("ma_type", "direct", "params"),
    [
        (MAType.SMA, functions.sma, {}),
        (MAType.EMA, functions.ema, {}),
        (MAType.WMA, functions.wma, {}),
        (MAType.DEMA, functions.dema, {}),
        (MAType.TEMA, functions.tema, {}),
        (MAType.TRIMA, functions.trima, {}),
        (MAType.KAMA, functions.kama, {}),
        (MAType.T3, functions.t3, {"vfactor": 0.7}),
    ],
)
def test_ma_dispatch_matches_direct_function(ma_type: MAType, direct, params: dict) -> None:
    values = _prices()

    dispatched_result, dispatched = _run(functions.ma, values, period=7, ma_type=ma_type)
    direct_result, expected = _run(direct, values, period=7, **params)

    assert dispatched_result.out_range == direct_result.out_range
    np.testing.assert_allclose(dispatched, expected, rtol=1e-12)


def test_ma_dispatch_mama_uses_fixed_limits() -> None:
    values = _prices(200)
    out_mama = np.empty(200)
    out_fama = np.empty(200)

    direct = functions.mama(values, None, out_mama, out_fama, fast_limit=0.5, slow_limit=0.05)
    dispatched_result, dispatched = _run(functions.ma, values, period=9, ma_type="mama")

    assert dispatched_result.out_range == direct.out_range
    np.testing.assert_allclose(dispatched, out_mama[: len(direct.out_range)], rtol=1e-12)


@pytest.mark.parametrize("ma_type", list(MAType))
def test_ma_period_one_copies_input(ma_type: MAType) -> None:
    values = _prices(30)

    result, out = _run(functions.ma, values, period=1, ma_type=ma_type)

    assert result.out_range == IndexRange(0, 30)
    np.testing.assert_array_equal(out, values)


def test_ma_rejects_unknown_variant() -> None:
    values = _prices(30)
    out = np.empty(30)

    assert functions.ma(values, None, out, period=5, ma_type="hull").ret_code is RetCode.BAD_PARAM


def test_moving_averages_of_constant_series_are_constant() -> None:
    """
    Verify every moving-average variant reproduces a flat input.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        KAMA seeds from the previous sample; MAMA starts at zero and only
        converges geometrically, so it is held to a looser bound.
    Raises:
        AssertionError: If any variant drifts from the constant.
    Side Effects:
        None.
    """
    values = np.full(150, 42.0)

    for ma_type in MAType:
        _, out = _run(functions.ma, values, period=8, ma_type=ma_type)
        if ma_type is MAType.MAMA:
            np.testing.assert_allclose(out[-20:], 42.0, rtol=1e-9)
        else:
            np.testing.assert_allclose(out, 42.0, rtol=1e-12)


def test_kama_and_t3_and_mama_reject_out_of_domain_factors() -> None:
    values = _prices(100)
    out = np.empty(100)
    other = np.empty(100)

    assert functions.t3(values, None, out, period=5, vfactor=1.2).ret_code is RetCode.BAD_PARAM
    assert functions.kama(values, None, out, period=1).ret_code is RetCode.BAD_PARAM
    bad_mama = functions.mama(values, None, out, other, fast_limit=0.5, slow_limit=0.001)
    assert bad_mama.ret_code is RetCode.BAD_PARAM


def test_mama_outputs_share_one_range_and_stay_finite() -> None:
    values = _prices(200)
    out_mama = np.empty(200)
    out_fama = np.empty(200)

    result = functions.mama(values, None, out_mama, out_fama)

    assert result.out_range == IndexRange(32, 200)
    count = len(result.out_range)
    assert np.all(np.isfinite(out_mama[:count]))
    assert np.all(np.isfinite(out_fama[:count]))


def test_bbands_sma_middle_is_sma_and_bands_are_symmetric() -> None:
    """
    Verify Bollinger bands around an SMA with equal multipliers.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Deviation is the population standard deviation of the window.
    Raises:
        AssertionError: If any band regresses.
    Side Effects:
        None.
    """
    values = _prices()
    size = values.shape[0]
    upper, middle, lower = (np.empty(size) for _ in range(3))

    result = functions.bbands(values, None, upper, middle, lower, period=10, nbdev_up=2.0, nbdev_dn=2.0)
    _, sma = _run(functions.sma, values, period=10)
    _, deviation = _run(functions.stddev, values, period=10, nbdev=1.0)

    count = len(result.out_range)
    assert result.out_range.start == 9
    np.testing.assert_allclose(middle[:count], sma, rtol=1e-12)
    np.testing.assert_allclose(upper[:count] - middle[:count], 2.0 * deviation, rtol=1e-7)
    np.testing.assert_allclose(middle[:count] - lower[:count], 2.0 * deviation, rtol=1e-7)


def test_bbands_with_recursive_middle_band_uses_its_lookback() -> None:
    values = _prices(200)
    upper, middle, lower = (np.empty(200) for _ in range(3))

    ema_result = functions.bbands(values, None, upper, middle, lower, period=10, ma_type=MAType.EMA)
    mama_result = functions.bbands(values, None, upper, middle, lower, period=10, ma_type="mama")

    assert ema_result.out_range.start == 9
    assert mama_result.out_range.start == 32
    count = len(mama_result.out_range)
    assert np.all(upper[:count] >= middle[:count])
    assert np.all(lower[:count] <= middle[:count])


def test_midpoint_and_midprice_average_window_extremes() -> None:
    high = np.asarray([3.0, 5.0, 4.0, 8.0, 6.0])
    low = np.asarray([1.0, 2.0, 0.0, 3.0, 5.0])
    out = np.empty(5)

    result = functions.midpoint(high, None, out, period=3)
    np.testing.assert_allclose(out[: len(result.out_range)], [4.0, 6.0, 6.0])

    result = functions.midprice(high, low, None, out, period=3)
    np.testing.assert_allclose(out[: len(result.out_range)], [2.5, 4.0, 4.0])


def test_unstable_period_delays_first_ema_output() -> None:
    """
    Verify the EMA unstable period shifts the first output and still converges.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Process-wide and per-call settings are both honoured.
    Raises:
        AssertionError: If the shift is missing or explicit settings are ignored.
    Side Effects:
        Mutates process-wide settings; restored by the autouse fixture.
    """
    values = _prices(300)
    set_unstable_period(UnstableFunc.EMA, 20)

    shifted, shifted_out = _run(functions.ema, values, period=10)
    baseline, baseline_out = _run(functions.ema, values, period=10, settings=CompatibilitySettings())

    assert shifted.out_range.start == 29
    assert baseline.out_range.start == 9
    np.testing.assert_allclose(shifted_out[-50:], baseline_out[-50:], rtol=1e-6)
