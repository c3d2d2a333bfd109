"""
Numpy oracle implementation for momentum indicators and oscillators.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.wilder,
  taengine.indicators.adapters.outbound.compute_numba.kernels.momentum,
  taengine.indicators.functions.momentum
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .ma import as_f64, nan_like


def rsi_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    """
    Compute Wilder RSI over the whole series.

    Args:
        source: Input series.
        period: Smoothing period.
    Returns:
        np.ndarray: Float64 series, first defined sample at index `period`.
    Assumptions:
        Averages are seeded with the plain mean of the first `period` changes; output is
        0 when both averages are 0.
    Raises:
        None.
    Side Effects:
        Allocates output array.
    """
    return _wilder_f64(source=source, period=period, cmo=False)


def cmo_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    return _wilder_f64(source=source, period=period, cmo=True)


def mom_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    out[period:] = source_f64[period:] - source_f64[:-period]
    return out


def roc_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    previous = source_f64[:-period]
    current = source_f64[period:]
    ratio = np.zeros(current.shape[0], dtype=np.float64)
    nonzero = previous != 0.0
    ratio[nonzero] = (current[nonzero] / previous[nonzero] - 1.0) * 100.0
    out[period:] = ratio
    return out


def willr_f64(
    *,
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    period: int,
) -> np.ndarray:
    high_f64, low_f64, close_f64 = as_f64(high), as_f64(low), as_f64(close)
    out = nan_like(close_f64)
    if close_f64.shape[0] < period:
        return out
    highest = sliding_window_view(high_f64, period).max(axis=1)
    lowest = sliding_window_view(low_f64, period).min(axis=1)
    span = highest - lowest
    values = np.zeros(span.shape[0], dtype=np.float64)
    nonzero = span != 0.0
    values[nonzero] = (highest[nonzero] - close_f64[period - 1 :][nonzero]) / span[nonzero] * -100.0
    out[period - 1 :] = values
    return out


def aroon_f64(
    *,
    high: np.ndarray,
    low: np.ndarray,
    period: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Compute Aroon down and up with the most recent extreme winning ties.

    Args:
        high: High series.
        low: Low series.
        period: Lookback; each window spans `period + 1` samples.
    Returns:
        tuple[np.ndarray, np.ndarray]: `(down, up)` float64 series.
    Assumptions:
        `argmax` over the reversed window yields bars since the most recent extreme.
    Raises:
        None.
    Side Effects:
        Allocates output arrays.
    """
    high_f64, low_f64 = as_f64(high), as_f64(low)
    down = nan_like(high_f64)
    up = nan_like(high_f64)
    span = period + 1
    if high_f64.shape[0] < span:
        return down, up
    bars_since_high = sliding_window_view(high_f64, span)[:, ::-1].argmax(axis=1)
    bars_since_low = sliding_window_view(low_f64, span)[:, ::-1].argmin(axis=1)
    factor = 100.0 / period
    up[period:] = factor * (period - bars_since_high)
    down[period:] = factor * (period - bars_since_low)
    return down, up


def stoch_fast_k_f64(
    *,
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    period: int,
) -> np.ndarray:
    high_f64, low_f64, close_f64 = as_f64(high), as_f64(low), as_f64(close)
    out = nan_like(close_f64)
    if close_f64.shape[0] < period:
        return out
    highest = sliding_window_view(high_f64, period).max(axis=1)
    lowest = sliding_window_view(low_f64, period).min(axis=1)
    span = highest - lowest
    values = np.zeros(span.shape[0], dtype=np.float64)
    nonzero = span != 0.0
    values[nonzero] = (close_f64[period - 1 :][nonzero] - lowest[nonzero]) / span[nonzero] * 100.0
    out[period - 1 :] = values
    return out


def cci_f64(
    *,
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    period: int,
) -> np.ndarray:
    """
    Compute the commodity channel index of the typical price.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        period: Window length.
    Returns:
        np.ndarray: Float64 series, first defined sample at index `period - 1`.
    Assumptions:
        Output is 0 when the distance from the mean or the mean deviation is 0.
    Raises:
        None.
    Side Effects:
        Allocates output array.
    """
    typical = (as_f64(high) + as_f64(low) + as_f64(close)) / 3.0
    out = nan_like(typical)
    if typical.shape[0] < period:
        return out
    windows = sliding_window_view(typical, period)
    average = windows.mean(axis=1)
    deviation = np.abs(windows - average[:, None]).mean(axis=1)
    distance = typical[period - 1 :] - average
    values = np.zeros(average.shape[0], dtype=np.float64)
    defined = (distance != 0.0) & (deviation != 0.0)
    values[defined] = distance[defined] / (0.015 * deviation[defined])
    out[period - 1 :] = values
    return out


def mfi_f64(
    *,
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    volume: np.ndarray,
    period: int,
) -> np.ndarray:
    typical = (as_f64(high) + as_f64(low) + as_f64(close)) / 3.0
    out = nan_like(typical)
    if typical.shape[0] <= period:
        return out
    flow = typical[1:] * as_f64(volume)[1:]
    change = np.diff(typical)
    positive = sliding_window_view(np.where(change > 0.0, flow, 0.0), period).sum(axis=1)
    negative = sliding_window_view(np.where(change < 0.0, flow, 0.0), period).sum(axis=1)
    total = positive + negative
    values = np.zeros(total.shape[0], dtype=np.float64)
    defined = total >= 1.0
    values[defined] = 100.0 * positive[defined] / total[defined]
    out[period:] = values
    return out


def _wilder_f64(*, source: np.ndarray, period: int, cmo: bool) -> np.ndarray:
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    if source_f64.shape[0] <= period:
        return out
    deltas = np.diff(source_f64)
    gains = np.where(deltas > 0.0, deltas, 0.0)
    losses = np.where(deltas < 0.0, -deltas, 0.0)

    avg_gain = float(gains[:period].mean())
    avg_loss = float(losses[:period].mean())
    out[period] = _oscillator(avg_gain, avg_loss, cmo)
    for index in range(period, deltas.shape[0]):
        avg_gain = (avg_gain * (period - 1) + gains[index]) / period
        avg_loss = (avg_loss * (period - 1) + losses[index]) / period
        out[index + 1] = _oscillator(avg_gain, avg_loss, cmo)
    return out


def _oscillator(gain: float, loss: float, cmo: bool) -> float:
    total = gain + loss
    if total == 0.0:
        return 0.0
    if cmo:
        return 100.0 * (gain - loss) / total
    return 100.0 * gain / total


__all__ = [
    "aroon_f64",
    "cci_f64",
    "cmo_f64",
    "mfi_f64",
    "mom_f64",
    "roc_f64",
    "rsi_f64",
    "stoch_fast_k_f64",
    "willr_f64",
]
