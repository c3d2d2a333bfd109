"""
Numpy oracle implementation for rolling statistics and true-range volatility.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.stats,
  taengine.indicators.adapters.outbound.compute_numba.kernels.wilder
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .ma import as_f64, nan_like


def rolling_max_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    return _rolling_reduce(source=source, period=period, reducer=np.max)


def rolling_min_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    return _rolling_reduce(source=source, period=period, reducer=np.min)


def rolling_sum_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    return _rolling_reduce(source=source, period=period, reducer=np.sum)


def variance_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    return _rolling_reduce(source=source, period=period, reducer=np.var)


def stddev_f64(*, source: np.ndarray, period: int, nbdev: float = 1.0) -> np.ndarray:
    return _rolling_reduce(source=source, period=period, reducer=np.std) * nbdev


def true_range_f64(*, high: np.ndarray, low: np.ndarray, close: np.ndarray) -> np.ndarray:
    """
    Compute the true range from index 1 onward.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
    Returns:
        np.ndarray: Float64 series, NaN at index 0.
    Assumptions:
        Inputs share one length.
    Raises:
        None.
    Side Effects:
        Allocates output array.
    """
    high_f64, low_f64, close_f64 = as_f64(high), as_f64(low), as_f64(close)
    out = nan_like(close_f64)
    prev_close = close_f64[:-1]
    out[1:] = np.maximum.reduce(
        [
            high_f64[1:] - low_f64[1:],
            np.abs(prev_close - high_f64[1:]),
            np.abs(prev_close - low_f64[1:]),
        ]
    )
    return out


def atr_f64(
    *,
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    period: int,
) -> np.ndarray:
    """
    Compute the Wilder average true range seeded with the mean of the first `period`
    true ranges.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        period: Smoothing period, `>= 2`.
    Returns:
        np.ndarray: Float64 series, first defined sample at index `period`.
    Assumptions:
        No unstable period.
    Raises:
        None.
    Side Effects:
        Allocates output arrays.
    """
    true_range = true_range_f64(high=high, low=low, close=close)
    out = nan_like(true_range)
    if true_range.shape[0] <= period:
        return out
    prev = float(np.mean(true_range[1 : period + 1]))
    out[period] = prev
    for index in range(period + 1, true_range.shape[0]):
        prev = (prev * (period - 1) + true_range[index]) / period
        out[index] = prev
    return out


def avgdev_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    return _rolling_reduce(source=source, period=period, reducer=_mean_absolute_deviation)


def linear_regression_f64(
    *,
    source: np.ndarray,
    period: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Fit a least-squares line over every trailing window.

    Args:
        source: Input series.
        period: Window length.
    Returns:
        tuple[np.ndarray, np.ndarray, np.ndarray]: `(value, slope, intercept)`: the fitted
            value at the newest bar, the slope per bar and the fitted value at the
            oldest bar of each window.
    Assumptions:
        Abscissas run forward in time from 0 at the oldest bar.
    Raises:
        None.
    Side Effects:
        Allocates output arrays.
    """
    source_f64 = as_f64(source)
    value, slope, intercept = (nan_like(source_f64) for _ in range(3))
    if source_f64.shape[0] < period:
        return value, slope, intercept
    windows = sliding_window_view(source_f64, period)
    x = np.arange(period, dtype=np.float64) - (period - 1) / 2.0
    window_mean = windows.mean(axis=1)
    fitted_slope = (windows - window_mean[:, None]) @ x / float(x @ x)
    fitted_intercept = window_mean - fitted_slope * (period - 1) / 2.0
    slope[period - 1 :] = fitted_slope
    intercept[period - 1 :] = fitted_intercept
    value[period - 1 :] = fitted_intercept + fitted_slope * (period - 1)
    return value, slope, intercept


def _rolling_reduce(*, source: np.ndarray, period: int, reducer) -> np.ndarray:
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    if source_f64.shape[0] >= period:
        out[period - 1 :] = reducer(sliding_window_view(source_f64, period), axis=1)
    return out


def _mean_absolute_deviation(windows: np.ndarray, axis: int) -> np.ndarray:
    centered = windows - windows.mean(axis=axis, keepdims=True)
    return np.abs(centered).mean(axis=axis)


__all__ = [
    "atr_f64",
    "avgdev_f64",
    "linear_regression_f64",
    "rolling_max_f64",
    "rolling_min_f64",
    "rolling_sum_f64",
    "stddev_f64",
    "true_range_f64",
    "variance_f64",
]
