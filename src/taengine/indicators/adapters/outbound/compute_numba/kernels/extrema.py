"""
Numba kernels built on the sliding-window extrema tracker.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels._common,
  taengine.indicators.functions.math_operators,
  taengine.indicators.functions.momentum, taengine.indicators.functions.stochastic
"""

from __future__ import annotations

import numba as nb
import numpy as np

from ._common import PERCENT, calc_highest, calc_lowest


@nb.njit(cache=True)
def rolling_max_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write the highest value over each trailing `period`-sample window.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Window of output `today` is `[today - period + 1, today]`.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    highest_idx = -1
    highest = 0.0
    out_idx = 0
    for today in range(start, end):
        highest_idx, highest = calc_highest(values, today - period + 1, today, highest_idx, highest)
        out[out_idx] = highest
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def rolling_min_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        lowest_idx, lowest = calc_lowest(values, today - period + 1, today, lowest_idx, lowest)
        out[out_idx] = lowest
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def max_index_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out_idx_buffer: np.ndarray,
) -> int:
    highest_idx = -1
    highest = 0.0
    out_idx = 0
    for today in range(start, end):
        highest_idx, highest = calc_highest(values, today - period + 1, today, highest_idx, highest)
        out_idx_buffer[out_idx] = highest_idx
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def min_index_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out_idx_buffer: np.ndarray,
) -> int:
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        lowest_idx, lowest = calc_lowest(values, today - period + 1, today, lowest_idx, lowest)
        out_idx_buffer[out_idx] = lowest_idx
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def min_max_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out_min: np.ndarray,
    out_max: np.ndarray,
) -> int:
    """
    Write window minimum and maximum values in one pass.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length.
        out_min: Output buffer for the minimum.
        out_max: Output buffer for the maximum.
    Returns:
        int: Number of written samples.
    Assumptions:
        Both windows are tracked over the same trailing bounds.
    Raises:
        None.
    Side Effects:
        Writes into `out_min` and `out_max`.
    """
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period + 1
        highest_idx, highest = calc_highest(values, trailing_idx, today, highest_idx, highest)
        lowest_idx, lowest = calc_lowest(values, trailing_idx, today, lowest_idx, lowest)
        out_max[out_idx] = highest
        out_min[out_idx] = lowest
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def min_max_index_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out_min_idx: np.ndarray,
    out_max_idx: np.ndarray,
) -> int:
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period + 1
        highest_idx, highest = calc_highest(values, trailing_idx, today, highest_idx, highest)
        lowest_idx, lowest = calc_lowest(values, trailing_idx, today, lowest_idx, lowest)
        out_max_idx[out_idx] = highest_idx
        out_min_idx[out_idx] = lowest_idx
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def midpoint_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period + 1
        highest_idx, highest = calc_highest(values, trailing_idx, today, highest_idx, highest)
        lowest_idx, lowest = calc_lowest(values, trailing_idx, today, lowest_idx, lowest)
        out[out_idx] = (highest + lowest) / 2.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def midprice_kernel(
    high: np.ndarray,
    low: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period + 1
        highest_idx, highest = calc_highest(high, trailing_idx, today, highest_idx, highest)
        lowest_idx, lowest = calc_lowest(low, trailing_idx, today, lowest_idx, lowest)
        out[out_idx] = (highest + lowest) / 2.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def willr_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write Williams %R: position of close within the window range, scaled to [-100, 0].

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        A flat window (highest == lowest) yields 0.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period + 1
        highest_idx, highest = calc_highest(high, trailing_idx, today, highest_idx, highest)
        lowest_idx, lowest = calc_lowest(low, trailing_idx, today, lowest_idx, lowest)
        close_today = float(close[today])
        diff = (highest - lowest) / -PERCENT
        if diff != 0.0:
            out[out_idx] = (highest - close_today) / diff
        else:
            out[out_idx] = 0.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def aroon_kernel(
    high: np.ndarray,
    low: np.ndarray,
    start: int,
    end: int,
    period: int,
    out_down: np.ndarray,
    out_up: np.ndarray,
    oscillator: bool,
) -> int:
    """
    Write Aroon down/up lines, or the Aroon oscillator (up minus down) into `out_up`.

    Args:
        high: High series.
        low: Low series.
        start: First output index, `>= period`.
        end: Exclusive end index.
        period: Lookback window; the tracked window spans `period + 1` samples.
        out_down: Aroon down buffer; ignored when `oscillator` is True.
        out_up: Aroon up buffer, or oscillator buffer when `oscillator` is True.
        oscillator: Selects oscillator output.
    Returns:
        int: Number of written samples.
    Assumptions:
        "Bars since extreme" counts from the most recent extreme on ties.
    Raises:
        None.
    Side Effects:
        Writes into output buffers.
    """
    factor = PERCENT / period
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period
        lowest_idx, lowest = calc_lowest(low, trailing_idx, today, lowest_idx, lowest)
        highest_idx, highest = calc_highest(high, trailing_idx, today, highest_idx, highest)
        aroon_up = factor * (period - (today - highest_idx))
        aroon_down = factor * (period - (today - lowest_idx))
        if oscillator:
            out_up[out_idx] = aroon_up - aroon_down
        else:
            out_up[out_idx] = aroon_up
            out_down[out_idx] = aroon_down
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def stoch_fast_k_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write raw stochastic %K: position of close within the window range, scaled to [0, 100].

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length, `>= 1`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        A flat window yields 0. Stochastic RSI passes one series as all three inputs.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    highest_idx = -1
    highest = 0.0
    lowest_idx = -1
    lowest = 0.0
    out_idx = 0
    for today in range(start, end):
        trailing_idx = today - period + 1
        lowest_idx, lowest = calc_lowest(low, trailing_idx, today, lowest_idx, lowest)
        highest_idx, highest = calc_highest(high, trailing_idx, today, highest_idx, highest)
        diff = (highest - lowest) / PERCENT
        if diff != 0.0:
            out[out_idx] = (float(close[today]) - lowest) / diff
        else:
            out[out_idx] = 0.0
        out_idx += 1
    return out_idx


__all__ = [
    "aroon_kernel",
    "max_index_kernel",
    "midpoint_kernel",
    "midprice_kernel",
    "min_index_kernel",
    "min_max_index_kernel",
    "min_max_kernel",
    "rolling_max_kernel",
    "rolling_min_kernel",
    "stoch_fast_k_kernel",
    "willr_kernel",
]
