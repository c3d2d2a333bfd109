"""
Common Numba kernels shared by windowed indicators: extrema tracking, copies and true range.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.extrema,
  taengine.indicators.adapters.outbound.compute_numba.warmup

Kernel conventions used across this package:
- `start`/`end` are the half-open output window in input coordinates; `start` already
  includes the lookback, so every read index is `>= start - lookback >= 0`.
- Output is written from offset 0; kernels return the number of written samples.
- Every read needed for a step happens before `out[step]` is written, and read indices
  never trail the output index, so `out` may be the same array as any input.
"""

from __future__ import annotations

import numba as nb
import numpy as np

PERCENT = 100.0


@nb.njit(cache=True)
def calc_highest(
    values: np.ndarray,
    trailing_idx: int,
    today: int,
    highest_idx: int,
    highest: float,
) -> tuple[int, float]:
    """
    Advance the sliding-window maximum tracker by one step.

    Args:
        values: Input series.
        trailing_idx: Oldest index of the window (inclusive).
        today: Newest index of the window (inclusive).
        highest_idx: Index of the maximum from the previous step, `-1` initially.
        highest: Maximum from the previous step.
    Returns:
        tuple[int, float]: Updated `(highest_idx, highest)`.
    Assumptions:
        `trailing_idx` and `today` advance by at most one per call.
    Raises:
        None.
    Side Effects:
        None.

    The previous maximum is reused unless it fell out of the window, in which case the
    window is rescanned. Ties resolve to the most recent index on both paths.
    """
    if highest_idx < trailing_idx:
        highest_idx = trailing_idx
        highest = float(values[trailing_idx])
        for index in range(trailing_idx + 1, today + 1):
            candidate = float(values[index])
            if candidate >= highest:
                highest_idx = index
                highest = candidate
    else:
        candidate = float(values[today])
        if candidate >= highest:
            highest_idx = today
            highest = candidate
    return highest_idx, highest


@nb.njit(cache=True)
def calc_lowest(
    values: np.ndarray,
    trailing_idx: int,
    today: int,
    lowest_idx: int,
    lowest: float,
) -> tuple[int, float]:
    """
    Advance the sliding-window minimum tracker by one step.

    Args:
        values: Input series.
        trailing_idx: Oldest index of the window (inclusive).
        today: Newest index of the window (inclusive).
        lowest_idx: Index of the minimum from the previous step, `-1` initially.
        lowest: Minimum from the previous step.
    Returns:
        tuple[int, float]: Updated `(lowest_idx, lowest)`.
    Assumptions:
        Mirror image of `calc_highest`; ties resolve to the most recent index.
    Raises:
        None.
    Side Effects:
        None.
    """
    if lowest_idx < trailing_idx:
        lowest_idx = trailing_idx
        lowest = float(values[trailing_idx])
        for index in range(trailing_idx + 1, today + 1):
            candidate = float(values[index])
            if candidate <= lowest:
                lowest_idx = index
                lowest = candidate
    else:
        candidate = float(values[today])
        if candidate <= lowest:
            lowest_idx = today
            lowest = candidate
    return lowest_idx, lowest


@nb.njit(cache=True)
def copy_window(values: np.ndarray, start: int, end: int, out: np.ndarray) -> int:
    """
    Copy `values[start:end]` into `out[0:end-start]` front to back.

    Args:
        values: Input series.
        start: First copied index.
        end: Exclusive end index.
        out: Destination buffer.
    Returns:
        int: Number of copied samples.
    Assumptions:
        Forward copy is alias-safe because the destination index never exceeds the
        source index.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    count = 0
    for index in range(start, end):
        out[count] = values[index]
        count += 1
    return count


@nb.njit(cache=True)
def per_to_k(period: int) -> float:
    return 2.0 / (period + 1.0)


@nb.njit(cache=True)
def true_range_at(high: np.ndarray, low: np.ndarray, close: np.ndarray, today: int) -> float:
    """
    Return the widest of today's high-low span and its gaps to yesterday's close.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        today: Bar index, `>= 1`.
    Returns:
        float: True range of bar `today`.
    Assumptions:
        Reads indices `today` and `today - 1` only.
    Raises:
        None.
    Side Effects:
        None.
    """
    high_today = float(high[today])
    low_today = float(low[today])
    close_yesterday = float(close[today - 1])
    greatest = high_today - low_today
    gap_high = abs(close_yesterday - high_today)
    if gap_high > greatest:
        greatest = gap_high
    gap_low = abs(close_yesterday - low_today)
    if gap_low > greatest:
        greatest = gap_low
    return greatest
