"""
Lookback calculator: leading samples each indicator configuration consumes.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.platform.config.compatibility_settings,
  taengine.indicators.functions

Every function returns `-1` when a parameter is outside its domain. Unstable-period
addends apply only to the recursive families that declare one (the `UnstableFunc`
members: moving averages, Wilder oscillators and the directional-movement family, plus
MFI); the legacy one-sample shift applies only to RSI and CMO. Composite lookbacks are
the sum of their stage lookbacks, each stage counted once.
"""

from __future__ import annotations

import math

import numpy as np

from taengine.indicators.domain.entities import MAType, UnstableFunc
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

INVALID_LOOKBACK = -1
MAX_PERIOD = 100_000

MACDFIX_SLOW_PERIOD = 26
MACDFIX_FAST_PERIOD = 12
MAMA_FIXED_LOOKBACK = 32
MA_DISPATCH_MAMA_FAST_LIMIT = 0.5
MA_DISPATCH_MAMA_SLOW_LIMIT = 0.05
MA_DISPATCH_T3_VFACTOR = 0.7


def is_period(value: object, *, minimum: int) -> bool:
    """
    Return whether `value` is an integral period within `[minimum, MAX_PERIOD]`.

    Args:
        value: Candidate period.
        minimum: Smallest accepted period.
    Returns:
        bool: True for valid periods.
    Assumptions:
        Booleans are not periods even though they subclass `int`.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        return False
    return minimum <= int(value) <= MAX_PERIOD


def is_real_in(value: object, *, low: float, high: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    as_float = float(value)
    return not math.isnan(as_float) and low <= as_float <= high


def coerce_ma_type(value: object) -> MAType | None:
    """
    Convert a moving-average selector into `MAType`.

    Args:
        value: `MAType` member or its case-insensitive string value.
    Returns:
        MAType | None: Member, or `None` for unknown selectors.
    Assumptions:
        Unknown selectors are reported by callers as invalid parameters.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(value, MAType):
        return value
    if isinstance(value, str):
        try:
            return MAType(value.strip().lower())
        except ValueError:
            return None
    return None


def ema_stage_lookback(period: int, settings: CompatibilitySettings) -> int:
    """
    Lookback of one exponential stage; tolerates period 1 for internal signal lines.

    Args:
        period: Stage period, `>= 1`.
        settings: Call snapshot.
    Returns:
        int: `period - 1 + unstable(EMA)`.
    Assumptions:
        Caller has validated `period`.
    Raises:
        None.
    Side Effects:
        None.
    """
    return int(period) - 1 + settings.unstable_period(UnstableFunc.EMA)


def _settings(settings: CompatibilitySettings | None) -> CompatibilitySettings:
    return resolve_compatibility_settings(settings)


def _window_lookback(period: int, *, minimum: int = 2) -> int:
    if not is_period(period, minimum=minimum):
        return INVALID_LOOKBACK
    return int(period) - 1


# Moving averages


def sma_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def wma_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def trima_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def ema_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return ema_stage_lookback(period, _settings(settings))


def dema_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return 2 * ema_stage_lookback(period, _settings(settings))


def tema_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return 3 * ema_stage_lookback(period, _settings(settings))


def kama_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return int(period) + _settings(settings).unstable_period(UnstableFunc.KAMA)


def t3_lookback(
    period: int = 5,
    vfactor: float = 0.7,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_period(period, minimum=2) or not is_real_in(vfactor, low=0.0, high=1.0):
        return INVALID_LOOKBACK
    return 6 * (int(period) - 1) + _settings(settings).unstable_period(UnstableFunc.T3)


def mama_lookback(
    fast_limit: float = 0.5,
    slow_limit: float = 0.05,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_real_in(fast_limit, low=0.01, high=0.99):
        return INVALID_LOOKBACK
    if not is_real_in(slow_limit, low=0.01, high=0.99):
        return INVALID_LOOKBACK
    return MAMA_FIXED_LOOKBACK + _settings(settings).unstable_period(UnstableFunc.MAMA)


def ma_lookback(
    period: int = 30,
    ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    """
    Lookback of the moving-average dispatcher.

    Args:
        period: Averaging period; 1 means pass-through copy.
        ma_type: Selected variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        int: Variant lookback, 0 for period 1, or `-1` for invalid input.
    Assumptions:
        MAMA ignores `period` and uses fixed limits 0.5/0.05; T3 uses volume factor 0.7.
    Raises:
        None.
    Side Effects:
        None.
    """
    resolved_type = coerce_ma_type(ma_type)
    if resolved_type is None or not is_period(period, minimum=1):
        return INVALID_LOOKBACK
    if int(period) == 1:
        return 0

    snapshot = _settings(settings)
    if resolved_type is MAType.SMA:
        return sma_lookback(period, settings=snapshot)
    if resolved_type is MAType.EMA:
        return ema_lookback(period, settings=snapshot)
    if resolved_type is MAType.WMA:
        return wma_lookback(period, settings=snapshot)
    if resolved_type is MAType.DEMA:
        return dema_lookback(period, settings=snapshot)
    if resolved_type is MAType.TEMA:
        return tema_lookback(period, settings=snapshot)
    if resolved_type is MAType.TRIMA:
        return trima_lookback(period, settings=snapshot)
    if resolved_type is MAType.KAMA:
        return kama_lookback(period, settings=snapshot)
    if resolved_type is MAType.MAMA:
        return mama_lookback(
            MA_DISPATCH_MAMA_FAST_LIMIT,
            MA_DISPATCH_MAMA_SLOW_LIMIT,
            settings=snapshot,
        )
    return t3_lookback(period, MA_DISPATCH_T3_VFACTOR, settings=snapshot)


def bbands_lookback(
    period: int = 5,
    nbdev_up: float = 2.0,
    nbdev_dn: float = 2.0,
    ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    if not is_real_in(nbdev_up, low=0.0, high=math.inf):
        return INVALID_LOOKBACK
    if not is_real_in(nbdev_dn, low=0.0, high=math.inf):
        return INVALID_LOOKBACK
    middle = ma_lookback(period, ma_type, settings=settings)
    if middle == INVALID_LOOKBACK:
        return INVALID_LOOKBACK
    # deviation window needs period - 1 samples even when the middle band needs fewer (MAMA)
    return max(middle, int(period) - 1)


def midpoint_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def midprice_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


# Oscillators


def _price_oscillator_lookback(
    fast_period: int,
    slow_period: int,
    ma_type: MAType | str,
    settings: CompatibilitySettings | None,
) -> int:
    if not is_period(fast_period, minimum=2) or not is_period(slow_period, minimum=2):
        return INVALID_LOOKBACK
    return ma_lookback(max(int(fast_period), int(slow_period)), ma_type, settings=settings)


def apo_lookback(
    fast_period: int = 12,
    slow_period: int = 26,
    ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    return _price_oscillator_lookback(fast_period, slow_period, ma_type, settings)


def ppo_lookback(
    fast_period: int = 12,
    slow_period: int = 26,
    ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    return _price_oscillator_lookback(fast_period, slow_period, ma_type, settings)


def macd_lookback(
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    """
    Lookback of MACD: slowest EMA stage plus the signal EMA stage.

    Args:
        fast_period: Fast EMA period, `>= 2`.
        slow_period: Slow EMA period, `>= 2`; swapped with `fast_period` when smaller.
        signal_period: Signal EMA period, `>= 1`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        int: Combined lookback or `-1`.
    Assumptions:
        The EMA unstable period is counted once per stage.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not is_period(fast_period, minimum=2) or not is_period(slow_period, minimum=2):
        return INVALID_LOOKBACK
    if not is_period(signal_period, minimum=1):
        return INVALID_LOOKBACK
    snapshot = _settings(settings)
    slowest = max(int(fast_period), int(slow_period))
    return ema_stage_lookback(slowest, snapshot) + ema_stage_lookback(signal_period, snapshot)


def macdfix_lookback(
    signal_period: int = 9,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_period(signal_period, minimum=1):
        return INVALID_LOOKBACK
    snapshot = _settings(settings)
    return ema_stage_lookback(MACDFIX_SLOW_PERIOD, snapshot) + ema_stage_lookback(
        signal_period, snapshot
    )


def macdext_lookback(
    fast_period: int = 12,
    fast_ma_type: MAType | str = MAType.SMA,
    slow_period: int = 26,
    slow_ma_type: MAType | str = MAType.SMA,
    signal_period: int = 9,
    signal_ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_period(fast_period, minimum=2) or not is_period(slow_period, minimum=2):
        return INVALID_LOOKBACK
    if not is_period(signal_period, minimum=1):
        return INVALID_LOOKBACK
    snapshot = _settings(settings)
    fast = ma_lookback(fast_period, fast_ma_type, settings=snapshot)
    slow = ma_lookback(slow_period, slow_ma_type, settings=snapshot)
    signal = ma_lookback(signal_period, signal_ma_type, settings=snapshot)
    if INVALID_LOOKBACK in (fast, slow, signal):
        return INVALID_LOOKBACK
    return max(fast, slow) + signal


def trix_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=1):
        return INVALID_LOOKBACK
    return 3 * ema_stage_lookback(period, _settings(settings)) + 1


def _wilder_oscillator_lookback(
    period: int,
    func: UnstableFunc,
    settings: CompatibilitySettings | None,
) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    snapshot = _settings(settings)
    lookback = int(period) + snapshot.unstable_period(func)
    if snapshot.is_metastock:
        lookback -= 1
    return max(0, lookback)


def rsi_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _wilder_oscillator_lookback(period, UnstableFunc.RSI, settings)


def cmo_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _wilder_oscillator_lookback(period, UnstableFunc.CMO, settings)


def _change_lookback(period: int) -> int:
    if not is_period(period, minimum=1):
        return INVALID_LOOKBACK
    return int(period)


def mom_lookback(period: int = 10, *, settings: CompatibilitySettings | None = None) -> int:
    return _change_lookback(period)


def roc_lookback(period: int = 10, *, settings: CompatibilitySettings | None = None) -> int:
    return _change_lookback(period)


def rocp_lookback(period: int = 10, *, settings: CompatibilitySettings | None = None) -> int:
    return _change_lookback(period)


def rocr_lookback(period: int = 10, *, settings: CompatibilitySettings | None = None) -> int:
    return _change_lookback(period)


def rocr100_lookback(period: int = 10, *, settings: CompatibilitySettings | None = None) -> int:
    return _change_lookback(period)


def willr_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def aroon_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return int(period)


def aroonosc_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return aroon_lookback(period, settings=settings)


def stochf_lookback(
    fastk_period: int = 5,
    fastd_period: int = 3,
    fastd_ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    """
    Lookback of the fast stochastic: raw %K window plus the %D average.

    Args:
        fastk_period: Raw %K window, `>= 1`.
        fastd_period: %D period, `>= 1`; 1 copies %K.
        fastd_ma_type: %D variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        int: `fastk_period - 1 + ma_lookback(fastd)` or `-1`.
    Assumptions:
        None.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not is_period(fastk_period, minimum=1) or not is_period(fastd_period, minimum=1):
        return INVALID_LOOKBACK
    smoothing = ma_lookback(fastd_period, fastd_ma_type, settings=settings)
    if smoothing == INVALID_LOOKBACK:
        return INVALID_LOOKBACK
    return int(fastk_period) - 1 + smoothing


def stoch_lookback(
    fastk_period: int = 5,
    slowk_period: int = 3,
    slowk_ma_type: MAType | str = MAType.SMA,
    slowd_period: int = 3,
    slowd_ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_period(fastk_period, minimum=1):
        return INVALID_LOOKBACK
    if not is_period(slowk_period, minimum=1) or not is_period(slowd_period, minimum=1):
        return INVALID_LOOKBACK
    snapshot = _settings(settings)
    slow_k = ma_lookback(slowk_period, slowk_ma_type, settings=snapshot)
    slow_d = ma_lookback(slowd_period, slowd_ma_type, settings=snapshot)
    if INVALID_LOOKBACK in (slow_k, slow_d):
        return INVALID_LOOKBACK
    return int(fastk_period) - 1 + slow_k + slow_d


def stochrsi_lookback(
    period: int = 14,
    fastk_period: int = 5,
    fastd_period: int = 3,
    fastd_ma_type: MAType | str = MAType.SMA,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    snapshot = _settings(settings)
    rsi = rsi_lookback(period, settings=snapshot)
    stochastic = stochf_lookback(fastk_period, fastd_period, fastd_ma_type, settings=snapshot)
    if INVALID_LOOKBACK in (rsi, stochastic):
        return INVALID_LOOKBACK
    return rsi + stochastic


def cci_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def mfi_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return int(period) + _settings(settings).unstable_period(UnstableFunc.MFI)


# Directional movement


def _movement_lookback(
    period: int,
    func: UnstableFunc,
    settings: CompatibilitySettings | None,
    *,
    smoothed_ratio: bool,
) -> int:
    if not is_period(period, minimum=1):
        return INVALID_LOOKBACK
    if int(period) == 1:
        return 1
    base = int(period) if smoothed_ratio else int(period) - 1
    return base + _settings(settings).unstable_period(func)


def plus_dm_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _movement_lookback(period, UnstableFunc.PLUS_DM, settings, smoothed_ratio=False)


def minus_dm_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _movement_lookback(period, UnstableFunc.MINUS_DM, settings, smoothed_ratio=False)


def plus_di_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _movement_lookback(period, UnstableFunc.PLUS_DI, settings, smoothed_ratio=True)


def minus_di_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _movement_lookback(period, UnstableFunc.MINUS_DI, settings, smoothed_ratio=True)


def dx_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return int(period) + _settings(settings).unstable_period(UnstableFunc.DX)


def adx_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    """
    Lookback of ADX: DX needs `period` bars and its first average needs `period` DX.

    Args:
        period: Smoothing period, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        int: `2 * period - 1 + unstable(ADX)` or `-1`.
    Assumptions:
        The first DX and the first smoothed movement share one bar.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not is_period(period, minimum=2):
        return INVALID_LOOKBACK
    return 2 * int(period) - 1 + _settings(settings).unstable_period(UnstableFunc.ADX)


def adxr_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    adx = adx_lookback(period, settings=settings)
    if adx == INVALID_LOOKBACK:
        return INVALID_LOOKBACK
    return adx + int(period) - 1


# Extrema and sums


def rolling_max_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def rolling_min_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def max_index_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def min_index_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def min_max_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def min_max_index_lookback(
    period: int = 30,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    return _window_lookback(period)


def rolling_sum_lookback(period: int = 30, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


# Statistics and volatility


def var_lookback(period: int = 5, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period, minimum=1)


def stddev_lookback(
    period: int = 5,
    nbdev: float = 1.0,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    if not is_real_in(nbdev, low=-math.inf, high=math.inf):
        return INVALID_LOOKBACK
    return _window_lookback(period)


def avgdev_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def linearreg_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def linearreg_slope_lookback(
    period: int = 14,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    return _window_lookback(period)


def linearreg_intercept_lookback(
    period: int = 14,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    return _window_lookback(period)


def linearreg_angle_lookback(
    period: int = 14,
    *,
    settings: CompatibilitySettings | None = None,
) -> int:
    return _window_lookback(period)


def tsf_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    return _window_lookback(period)


def trange_lookback(*, settings: CompatibilitySettings | None = None) -> int:
    return 1


def atr_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=1):
        return INVALID_LOOKBACK
    return int(period) + _settings(settings).unstable_period(UnstableFunc.ATR)


def natr_lookback(period: int = 14, *, settings: CompatibilitySettings | None = None) -> int:
    if not is_period(period, minimum=1):
        return INVALID_LOOKBACK
    return int(period) + _settings(settings).unstable_period(UnstableFunc.NATR)


# Price transforms


def avgprice_lookback(*, settings: CompatibilitySettings | None = None) -> int:
    return 0


def medprice_lookback(*, settings: CompatibilitySettings | None = None) -> int:
    return 0


def typprice_lookback(*, settings: CompatibilitySettings | None = None) -> int:
    return 0


def wclprice_lookback(*, settings: CompatibilitySettings | None = None) -> int:
    return 0


__all__ = [
    "INVALID_LOOKBACK",
    "MAX_PERIOD",
    "adx_lookback",
    "adxr_lookback",
    "apo_lookback",
    "aroon_lookback",
    "aroonosc_lookback",
    "atr_lookback",
    "avgdev_lookback",
    "avgprice_lookback",
    "bbands_lookback",
    "cci_lookback",
    "cmo_lookback",
    "coerce_ma_type",
    "dema_lookback",
    "dx_lookback",
    "ema_lookback",
    "ema_stage_lookback",
    "is_period",
    "is_real_in",
    "kama_lookback",
    "linearreg_angle_lookback",
    "linearreg_intercept_lookback",
    "linearreg_lookback",
    "linearreg_slope_lookback",
    "ma_lookback",
    "macd_lookback",
    "macdext_lookback",
    "macdfix_lookback",
    "mama_lookback",
    "max_index_lookback",
    "medprice_lookback",
    "mfi_lookback",
    "midpoint_lookback",
    "midprice_lookback",
    "min_index_lookback",
    "min_max_index_lookback",
    "min_max_lookback",
    "minus_di_lookback",
    "minus_dm_lookback",
    "mom_lookback",
    "natr_lookback",
    "plus_di_lookback",
    "plus_dm_lookback",
    "ppo_lookback",
    "roc_lookback",
    "rocp_lookback",
    "rocr100_lookback",
    "rocr_lookback",
    "rolling_max_lookback",
    "rolling_min_lookback",
    "rolling_sum_lookback",
    "rsi_lookback",
    "sma_lookback",
    "stddev_lookback",
    "stoch_lookback",
    "stochf_lookback",
    "stochrsi_lookback",
    "t3_lookback",
    "tema_lookback",
    "trange_lookback",
    "trima_lookback",
    "trix_lookback",
    "tsf_lookback",
    "typprice_lookback",
    "var_lookback",
    "wclprice_lookback",
    "willr_lookback",
    "wma_lookback",
]
