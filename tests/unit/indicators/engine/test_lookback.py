from __future__ import annotations

from typing import Callable

import pytest

from taengine.indicators.domain.entities import CompatibilityMode, MAType, UnstableFunc
from taengine.indicators.engine import lookback
from taengine.platform.config import CompatibilitySettings, set_unstable_period

_PERIOD_LOOKBACKS: tuple[tuple[Callable[..., int], int], ...] = (
    (lookback.sma_lookback, 2),
    (lookback.ema_lookback, 2),
    (lookback.wma_lookback, 2),
    (lookback.dema_lookback, 2),
    (lookback.tema_lookback, 2),
    (lookback.trima_lookback, 2),
    (lookback.kama_lookback, 2),
    (lookback.t3_lookback, 2),
    (lookback.ma_lookback, 1),
    (lookback.bbands_lookback, 2),
    (lookback.midpoint_lookback, 2),
    (lookback.midprice_lookback, 2),
    (lookback.trix_lookback, 1),
    (lookback.rsi_lookback, 2),
    (lookback.cmo_lookback, 2),
    (lookback.mom_lookback, 1),
    (lookback.roc_lookback, 1),
    (lookback.rocp_lookback, 1),
    (lookback.rocr_lookback, 1),
    (lookback.rocr100_lookback, 1),
    (lookback.willr_lookback, 2),
    (lookback.aroon_lookback, 2),
    (lookback.aroonosc_lookback, 2),
    (lookback.stoch_lookback, 1),
    (lookback.stochf_lookback, 1),
    (lookback.stochrsi_lookback, 2),
    (lookback.cci_lookback, 2),
    (lookback.mfi_lookback, 2),
    (lookback.plus_dm_lookback, 1),
    (lookback.minus_dm_lookback, 1),
    (lookback.plus_di_lookback, 1),
    (lookback.minus_di_lookback, 1),
    (lookback.dx_lookback, 2),
    (lookback.adx_lookback, 2),
    (lookback.adxr_lookback, 2),
    (lookback.avgdev_lookback, 2),
    (lookback.linearreg_lookback, 2),
    (lookback.linearreg_slope_lookback, 2),
    (lookback.linearreg_intercept_lookback, 2),
    (lookback.linearreg_angle_lookback, 2),
    (lookback.tsf_lookback, 2),
    (lookback.rolling_max_lookback, 2),
    (lookback.rolling_min_lookback, 2),
    (lookback.max_index_lookback, 2),
    (lookback.min_index_lookback, 2),
    (lookback.min_max_lookback, 2),
    (lookback.min_max_index_lookback, 2),
    (lookback.rolling_sum_lookback, 2),
    (lookback.var_lookback, 1),
    (lookback.stddev_lookback, 2),
    (lookback.atr_lookback, 1),
    (lookback.natr_lookback, 1),
)


@pytest.mark.parametrize(("fn", "minimum"), _PERIOD_LOOKBACKS)
def test_period_lookbacks_are_minus_one_below_domain_and_monotonic_inside(
    fn: Callable[..., int],
    minimum: int,
) -> None:
    """
    Verify every period-driven lookback is `-1` outside the domain and non-decreasing.

    Args:
        fn: Lookback function taking `period` as first argument.
        minimum: Smallest valid period.
    Returns:
        None.
    Assumptions:
        Default values are used for every other parameter.
    Raises:
        AssertionError: If domain or monotonicity checks fail.
    Side Effects:
        None.
    """
    assert fn(minimum - 1) == -1
    assert fn(lookback.MAX_PERIOD + 1) == -1
    assert fn(True) == -1

    values = [fn(period) for period in range(minimum, 60)]
    assert all(value >= 0 for value in values)
    assert values == sorted(values)


@pytest.mark.parametrize("ma_type", list(MAType))
def test_ma_lookback_is_monotonic_for_every_variant(ma_type: MAType) -> None:
    values = [lookback.ma_lookback(period, ma_type) for period in range(1, 60)]

    assert values[0] == 0
    assert all(value >= 0 for value in values)
    assert values == sorted(values)


def test_default_lookback_formulas() -> None:
    """
    Verify documented closed-form lookbacks with zero unstable periods.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        DEFAULT compatibility mode.
    Raises:
        AssertionError: If a formula regresses.
    Side Effects:
        None.
    """
    assert lookback.sma_lookback(3) == 2
    assert lookback.ema_lookback(10) == 9
    assert lookback.dema_lookback(10) == 18
    assert lookback.tema_lookback(10) == 27
    assert lookback.trix_lookback(10) == 28
    assert lookback.kama_lookback(10) == 10
    assert lookback.t3_lookback(5, 0.7) == 24
    assert lookback.mama_lookback(0.5, 0.05) == 32
    assert lookback.rsi_lookback(14) == 14
    assert lookback.cmo_lookback(14) == 14
    assert lookback.atr_lookback(14) == 14
    assert lookback.natr_lookback(14) == 14
    assert lookback.aroon_lookback(14) == 14
    assert lookback.mom_lookback(10) == 10
    assert lookback.trange_lookback() == 1
    assert lookback.macd_lookback(12, 26, 9) == 33
    assert lookback.macd_lookback(26, 12, 9) == 33
    assert lookback.macdfix_lookback(9) == 33
    assert lookback.apo_lookback(12, 26, MAType.SMA) == 25
    assert lookback.macdext_lookback(12, MAType.EMA, 26, MAType.SMA, 9, MAType.WMA) == 33
    assert lookback.bbands_lookback(5, 2.0, 2.0, MAType.SMA) == 4
    assert lookback.bbands_lookback(5, 2.0, 2.0, MAType.MAMA) == 32
    assert lookback.bbands_lookback(40, 2.0, 2.0, MAType.MAMA) == 39
    assert lookback.stochf_lookback() == 6
    assert lookback.stoch_lookback() == 8
    assert lookback.stochrsi_lookback() == 20
    assert lookback.plus_dm_lookback(14) == 13
    assert lookback.minus_dm_lookback(1) == 1
    assert lookback.plus_di_lookback(14) == 14
    assert lookback.plus_di_lookback(1) == 1
    assert lookback.dx_lookback(14) == 14
    assert lookback.adx_lookback(14) == 27
    assert lookback.adxr_lookback(14) == 40
    assert lookback.mfi_lookback(14) == 14
    assert lookback.cci_lookback(14) == 13
    assert lookback.linearreg_lookback(14) == 13
    assert lookback.avgprice_lookback() == 0


def test_invalid_non_period_parameters_yield_minus_one() -> None:
    assert lookback.t3_lookback(5, 1.5) == -1
    assert lookback.t3_lookback(5, float("nan")) == -1
    assert lookback.mama_lookback(0.5, 0.0) == -1
    assert lookback.mama_lookback(1.0, 0.05) == -1
    assert lookback.ma_lookback(10, "hull") == -1
    assert lookback.bbands_lookback(5, -1.0, 2.0) == -1
    assert lookback.macd_lookback(12, 26, 0) == -1
    assert lookback.macdext_lookback(12, MAType.SMA, 26, "bogus", 9, MAType.SMA) == -1


def test_unstable_period_is_added_only_to_recursive_families() -> None:
    """
    Verify unstable addends apply to their own family and nowhere else.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Explicit settings override the process-wide snapshot.
    Raises:
        AssertionError: If an addend leaks into a non-recursive indicator.
    Side Effects:
        None.
    """
    settings = CompatibilitySettings().with_unstable_period(UnstableFunc.ALL, 5)

    assert lookback.ema_lookback(10, settings=settings) == 14
    assert lookback.dema_lookback(10, settings=settings) == 28
    assert lookback.kama_lookback(10, settings=settings) == 15
    assert lookback.t3_lookback(5, 0.7, settings=settings) == 29
    assert lookback.mama_lookback(settings=settings) == 37
    assert lookback.rsi_lookback(14, settings=settings) == 19
    assert lookback.atr_lookback(14, settings=settings) == 19
    assert lookback.sma_lookback(10, settings=settings) == 9
    assert lookback.wma_lookback(10, settings=settings) == 9
    assert lookback.willr_lookback(10, settings=settings) == 9
    assert lookback.aroon_lookback(10, settings=settings) == 10
    assert lookback.adx_lookback(14, settings=settings) == 32
    assert lookback.plus_dm_lookback(14, settings=settings) == 18
    assert lookback.mfi_lookback(14, settings=settings) == 19
    assert lookback.cci_lookback(14, settings=settings) == 13
    assert lookback.tsf_lookback(14, settings=settings) == 13


def test_metastock_mode_shortens_only_rsi_and_cmo() -> None:
    settings = CompatibilitySettings(mode=CompatibilityMode.METASTOCK)

    assert lookback.rsi_lookback(14, settings=settings) == 13
    assert lookback.cmo_lookback(14, settings=settings) == 13
    assert lookback.ema_lookback(14, settings=settings) == 13
    assert lookback.atr_lookback(14, settings=settings) == 14


def test_lookback_reads_process_wide_settings_when_none_given() -> None:
    set_unstable_period(UnstableFunc.EMA, 3)

    assert lookback.ema_lookback(10) == 12
    assert lookback.ema_lookback(10, settings=CompatibilitySettings()) == 9


def test_directional_unstable_periods_are_read_per_family() -> None:
    settings = CompatibilitySettings(
        unstable_periods={UnstableFunc.ADX: 4, UnstableFunc.PLUS_DI: 2}
    )

    assert lookback.adx_lookback(14, settings=settings) == 31
    assert lookback.adxr_lookback(14, settings=settings) == 44
    assert lookback.dx_lookback(14, settings=settings) == 14
    assert lookback.plus_di_lookback(14, settings=settings) == 16
    assert lookback.minus_di_lookback(14, settings=settings) == 14
    assert lookback.plus_di_lookback(1, settings=settings) == 1
