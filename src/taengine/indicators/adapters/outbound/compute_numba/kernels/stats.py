"""
Numba kernels for rolling sums, dispersion and linear regression.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.statistic,
  taengine.indicators.functions.overlap
"""

from __future__ import annotations

import math

import numba as nb
import numpy as np

LINEARREG_VALUE = 0
LINEARREG_SLOPE = 1
LINEARREG_INTERCEPT = 2
LINEARREG_ANGLE = 3
LINEARREG_FORECAST = 4


@nb.njit(cache=True)
def rolling_sum_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    trailing_idx = start - period + 1
    period_total = 0.0
    for index in range(trailing_idx, start):
        period_total += values[index]

    out_idx = 0
    for today in range(start, end):
        period_total += values[today]
        current = period_total
        period_total -= values[trailing_idx]
        trailing_idx += 1
        out[out_idx] = current
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def variance_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write population variance `mean(x^2) - mean(x)^2` from running sums.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length, `>= 1`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Both running sums drop the outgoing sample after it has been read.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    trailing_idx = start - period + 1
    total = 0.0
    total_sq = 0.0
    for index in range(trailing_idx, start):
        value = float(values[index])
        total += value
        total_sq += value * value

    out_idx = 0
    for today in range(start, end):
        value = float(values[today])
        total += value
        total_sq += value * value
        mean = total / period
        mean_sq = total_sq / period
        outgoing = float(values[trailing_idx])
        trailing_idx += 1
        total -= outgoing
        total_sq -= outgoing * outgoing
        out[out_idx] = mean_sq - mean * mean
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def stddev_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    nbdev: float,
    out: np.ndarray,
) -> int:
    """
    Write `nbdev` times the population standard deviation; 0 for non-positive variance.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length.
        nbdev: Multiplier applied to the deviation.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Rounding can push the variance slightly below zero; that reads as 0.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    count = variance_kernel(values, start, end, period, out)
    for index in range(count):
        variance = float(out[index])
        if variance > 0.0:
            out[index] = math.sqrt(variance) * nbdev
        else:
            out[index] = 0.0
    return count


@nb.njit(cache=True)
def stddev_around_mean_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    mean: np.ndarray,
    out: np.ndarray,
) -> int:
    """
    Write `sqrt(mean(x^2) - m^2)` where `m` is a precomputed simple average.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length.
        mean: Simple moving average aligned with the output (offset 0 is `start`).
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        `mean` was produced by the simple moving average over the same window.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    trailing_idx = start - period + 1
    total_sq = 0.0
    for index in range(trailing_idx, start):
        value = float(values[index])
        total_sq += value * value

    out_idx = 0
    for today in range(start, end):
        value = float(values[today])
        total_sq += value * value
        mean_value = float(mean[out_idx])
        variance = total_sq / period - mean_value * mean_value
        outgoing = float(values[trailing_idx])
        trailing_idx += 1
        total_sq -= outgoing * outgoing
        if variance > 0.0:
            out[out_idx] = math.sqrt(variance)
        else:
            out[out_idx] = 0.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def avgdev_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    out_idx = 0
    for today in range(start, end):
        total = 0.0
        for lag in range(period):
            total += float(values[today - lag])
        mean = total / period
        deviation = 0.0
        for lag in range(period):
            deviation += abs(float(values[today - lag]) - mean)
        out[out_idx] = deviation / period
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def linear_regression_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    mode: int,
    out: np.ndarray,
) -> int:
    """
    Fit a least-squares line over each trailing window and write one of its terms.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length, `>= 2`.
        mode: `LINEARREG_VALUE` (fitted value at today), `LINEARREG_SLOPE`,
            `LINEARREG_INTERCEPT` (fitted value at the oldest bar), `LINEARREG_ANGLE`
            (slope in degrees) or `LINEARREG_FORECAST` (fitted value one bar ahead).
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        `x` counts bars back from today, so the sums over `x` are closed-form and
        the slope sign is flipped back by the negated divisor.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    n = float(period)
    sum_x = n * (n - 1.0) * 0.5
    sum_x_sq = n * (n - 1.0) * (2.0 * n - 1.0) / 6.0
    divisor = sum_x * sum_x - n * sum_x_sq
    out_idx = 0
    for today in range(start, end):
        sum_xy = 0.0
        sum_y = 0.0
        for lag in range(period - 1, -1, -1):
            value = float(values[today - lag])
            sum_y += value
            sum_xy += lag * value
        slope = (n * sum_xy - sum_x * sum_y) / divisor
        intercept = (sum_y - slope * sum_x) / n
        if mode == LINEARREG_SLOPE:
            out[out_idx] = slope
        elif mode == LINEARREG_INTERCEPT:
            out[out_idx] = intercept
        elif mode == LINEARREG_ANGLE:
            out[out_idx] = math.atan(slope) * (180.0 / math.pi)
        elif mode == LINEARREG_FORECAST:
            out[out_idx] = intercept + slope * n
        else:
            out[out_idx] = intercept + slope * (n - 1.0)
        out_idx += 1
    return out_idx


__all__ = [
    "LINEARREG_ANGLE",
    "LINEARREG_FORECAST",
    "LINEARREG_INTERCEPT",
    "LINEARREG_SLOPE",
    "LINEARREG_VALUE",
    "avgdev_kernel",
    "linear_regression_kernel",
    "rolling_sum_kernel",
    "stddev_around_mean_kernel",
    "stddev_kernel",
    "variance_kernel",
]
