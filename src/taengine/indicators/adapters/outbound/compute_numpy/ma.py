"""
Numpy oracle implementation for moving averages.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.ma,
  taengine.indicators.functions.overlap

Oracles compute whole series in float64 with DEFAULT compatibility and no unstable
period, returning full-length arrays with NaN before the first defined sample.
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view


def sma_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    """
    Compute the simple moving average with vectorized windows.

    Args:
        source: Input series.
        period: Window length.
    Returns:
        np.ndarray: Float64 series, NaN for the first `period - 1` samples.
    Assumptions:
        `period >= 1`.
    Raises:
        None.
    Side Effects:
        Allocates a float64 copy of `source`.
    """
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    if source_f64.shape[0] >= period:
        out[period - 1 :] = sliding_window_view(source_f64, period).mean(axis=1)
    return out


def ema_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    """
    Compute the exponential moving average seeded with the first window's mean.

    Args:
        source: Input series; leading NaN samples are skipped before seeding.
        period: EMA period.
    Returns:
        np.ndarray: Float64 series aligned to `source`.
    Assumptions:
        `k = 2 / (period + 1)`.
    Raises:
        None.
    Side Effects:
        Allocates output array.
    """
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    offset = first_valid(source_f64)
    seed_end = offset + period
    if seed_end > source_f64.shape[0]:
        return out
    k = 2.0 / (period + 1.0)
    prev = float(np.mean(source_f64[offset:seed_end]))
    out[seed_end - 1] = prev
    for index in range(seed_end, source_f64.shape[0]):
        prev = (source_f64[index] - prev) * k + prev
        out[index] = prev
    return out


def wma_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    if source_f64.shape[0] >= period:
        weights = np.arange(1, period + 1, dtype=np.float64)
        windows = sliding_window_view(source_f64, period)
        out[period - 1 :] = windows @ weights / weights.sum()
    return out


def trima_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    """
    Compute the triangular average as one convolution with triangle weights.

    Args:
        source: Input series.
        period: Triangle width.
    Returns:
        np.ndarray: Float64 series, NaN for the first `period - 1` samples.
    Assumptions:
        Weights are the convolution of two boxes of `period // 2 + 1` and
        `(period + 1) // 2` samples.
    Raises:
        None.
    Side Effects:
        Allocates output array.
    """
    source_f64 = as_f64(source)
    out = nan_like(source_f64)
    weights = np.convolve(np.ones(period // 2 + 1), np.ones((period + 1) // 2))
    weights /= weights.sum()
    if source_f64.shape[0] >= period:
        out[period - 1 :] = sliding_window_view(source_f64, period) @ weights[::-1]
    return out


def dema_f64(*, source: np.ndarray, period: int) -> np.ndarray:
    first = ema_f64(source=source, period=period)
    second = ema_f64(source=first, period=period)
    return 2.0 * first - second


def as_f64(source: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(np.asarray(source, dtype=np.float64))


def nan_like(source: np.ndarray) -> np.ndarray:
    return np.full(source.shape[0], np.nan, dtype=np.float64)


def first_valid(source: np.ndarray) -> int:
    valid = np.flatnonzero(~np.isnan(source))
    if valid.size == 0:
        return source.shape[0]
    return int(valid[0])


__all__ = ["dema_f64", "ema_f64", "sma_f64", "trima_f64", "wma_f64"]
