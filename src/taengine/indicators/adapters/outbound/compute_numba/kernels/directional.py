"""
Numba kernels for Wilder's directional movement system: +DM/-DM, +DI/-DI, DX and ADX.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.directional,
  taengine.indicators.adapters.outbound.compute_numba.kernels.wilder

One-bar movement compares today's range with yesterday's: the up move is
`high - prev_high`, the down move `prev_low - low`, and only the larger one counts when
it is positive. Equal moves count as neither. A period-`n` movement or true range is the
sum of the first `n - 1` one-bar values, then `prev - prev / n + today` per later bar.
Every kernel walks `begin + 1 .. end` and writes once `today` reaches `start`.
"""

from __future__ import annotations

import numba as nb
import numpy as np

from ._common import PERCENT, true_range_at


@nb.njit(cache=True)
def _movement(high: np.ndarray, low: np.ndarray, today: int) -> tuple[float, float]:
    up_move = float(high[today]) - float(high[today - 1])
    down_move = float(low[today - 1]) - float(low[today])
    if down_move > 0.0 and up_move < down_move:
        return 0.0, down_move
    if up_move > 0.0 and up_move > down_move:
        return up_move, 0.0
    return 0.0, 0.0


@nb.njit(cache=True)
def _accumulate(total: float, current: float, step: int, period: int) -> float:
    if step < period:
        return total + current
    return total - total / period + current


@nb.njit(cache=True)
def directional_movement_kernel(
    high: np.ndarray,
    low: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    minus: bool,
    out: np.ndarray,
) -> int:
    """
    Write the smoothed +DM (or -DM when `minus` is True).

    Args:
        high: High series.
        low: Low series.
        begin: First bar read, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Smoothing period, `>= 1`; period 1 writes the one-bar movement.
        minus: Selects the down movement.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        For period > 1 the lookback is `period - 1 + unstable`.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    total = 0.0
    out_idx = 0
    for today in range(begin + 1, end):
        plus_move, minus_move = _movement(high, low, today)
        current = minus_move if minus else plus_move
        total = _accumulate(total, current, today - begin, period)
        if today >= start:
            out[out_idx] = total
            out_idx += 1
    return out_idx


@nb.njit(cache=True)
def directional_index_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    minus: bool,
    out: np.ndarray,
) -> int:
    """
    Write +DI (or -DI when `minus` is True): smoothed movement over smoothed true range.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        begin: First bar read, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Smoothing period, `>= 1`.
        minus: Selects the down movement.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        A zero true range writes 0. Period 1 writes the bare one-bar ratio
        `movement / true_range`, unscaled, as the legacy library does.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    scale = PERCENT if period > 1 else 1.0
    movement = 0.0
    true_range = 0.0
    out_idx = 0
    for today in range(begin + 1, end):
        plus_move, minus_move = _movement(high, low, today)
        step = today - begin
        movement = _accumulate(movement, minus_move if minus else plus_move, step, period)
        true_range = _accumulate(true_range, true_range_at(high, low, close, today), step, period)
        if today >= start:
            if true_range != 0.0:
                out[out_idx] = scale * (movement / true_range)
            else:
                out[out_idx] = 0.0
            out_idx += 1
    return out_idx


@nb.njit(cache=True)
def _directional_spread(plus_dm: float, minus_dm: float, true_range: float) -> float:
    """
    Return DX for the current smoothed values, or -1 when it is undefined.

    Args:
        plus_dm: Smoothed up movement.
        minus_dm: Smoothed down movement.
        true_range: Smoothed true range.
    Returns:
        float: `100 * |-DI - +DI| / (-DI + +DI)`, or -1 for a zero range or zero sum.
    Assumptions:
        A valid DX is never negative, so -1 is free as a marker.
    Raises:
        None.
    Side Effects:
        None.
    """
    if true_range == 0.0:
        return -1.0
    minus_di = PERCENT * (minus_dm / true_range)
    plus_di = PERCENT * (plus_dm / true_range)
    total = minus_di + plus_di
    if total == 0.0:
        return -1.0
    return PERCENT * (abs(minus_di - plus_di) / total)


@nb.njit(cache=True)
def dx_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write the directional movement index.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        begin: First bar read, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Smoothing period, `>= 2`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Where DX is undefined the previous output repeats; the first output is 0.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    plus_dm = 0.0
    minus_dm = 0.0
    true_range = 0.0
    dx = 0.0
    out_idx = 0
    for today in range(begin + 1, end):
        plus_move, minus_move = _movement(high, low, today)
        step = today - begin
        plus_dm = _accumulate(plus_dm, plus_move, step, period)
        minus_dm = _accumulate(minus_dm, minus_move, step, period)
        true_range = _accumulate(true_range, true_range_at(high, low, close, today), step, period)
        if today >= start:
            current = _directional_spread(plus_dm, minus_dm, true_range)
            if current >= 0.0:
                dx = current
            out[out_idx] = dx
            out_idx += 1
    return out_idx


@nb.njit(cache=True)
def adx_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write the average directional movement index.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        begin: First bar read, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Smoothing period, `>= 2`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        The first ADX is the plain mean of the `period` DX values from bars
        `begin + period .. begin + 2 * period - 1`; later bars apply Wilder smoothing.
        Undefined DX values are skipped: they add nothing to the seed and leave the
        average unchanged afterwards.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    plus_dm = 0.0
    minus_dm = 0.0
    true_range = 0.0
    adx = 0.0
    seed_end = 2 * period - 1
    out_idx = 0
    for today in range(begin + 1, end):
        plus_move, minus_move = _movement(high, low, today)
        step = today - begin
        plus_dm = _accumulate(plus_dm, plus_move, step, period)
        minus_dm = _accumulate(minus_dm, minus_move, step, period)
        true_range = _accumulate(true_range, true_range_at(high, low, close, today), step, period)
        if step >= period:
            dx = _directional_spread(plus_dm, minus_dm, true_range)
            if step <= seed_end:
                if dx >= 0.0:
                    adx += dx
                if step == seed_end:
                    adx /= period
            elif dx >= 0.0:
                adx = (adx * (period - 1) + dx) / period
        if today >= start:
            out[out_idx] = adx
            out_idx += 1
    return out_idx


__all__ = [
    "adx_kernel",
    "directional_index_kernel",
    "directional_movement_kernel",
    "dx_kernel",
]
