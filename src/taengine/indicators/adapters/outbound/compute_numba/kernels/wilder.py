"""
Numba kernels for Wilder smoothing: RSI, CMO and average true range.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.momentum,
  taengine.indicators.functions.volatility

Wilder smoothing is `avg = (avg * (period - 1) + current) / period`, seeded by the plain
average of the first `period` values.
"""

from __future__ import annotations

import numba as nb
import numpy as np

from ._common import PERCENT, true_range_at


@nb.njit(cache=True)
def _oscillator_value(gain: float, loss: float, cmo: bool) -> float:
    total = gain + loss
    if total == 0.0:
        return 0.0
    if cmo:
        return PERCENT * ((gain - loss) / total)
    return PERCENT * (gain / total)


@nb.njit(cache=True)
def wilder_oscillator_kernel(
    values: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    legacy_first_output: bool,
    cmo: bool,
    out: np.ndarray,
) -> int:
    """
    Write RSI (or CMO when `cmo` is True) from Wilder-smoothed gains and losses.

    Args:
        values: Input series.
        begin: First sample read, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Smoothing period, `>= 2`.
        legacy_first_output: Emit the legacy charting package's first sample: the gain
            and loss averages are accumulated from `values[begin]` against itself (a
            zero first delta), written once, then accumulation restarts one sample later
            for every following output. Only valid when the lookback is `period - 1`.
        cmo: Selects CMO `100 * (gain - loss) / (gain + loss)` instead of RSI
            `100 * gain / (gain + loss)`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Both oscillators are 0 when `gain + loss == 0`.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    out_idx = 0
    today = begin
    prev_value = float(values[today])

    if legacy_first_output:
        saved_prev_value = prev_value
        prev_gain = 0.0
        prev_loss = 0.0
        for _ in range(period):
            current = float(values[today])
            today += 1
            delta = current - prev_value
            prev_value = current
            if delta < 0.0:
                prev_loss -= delta
            else:
                prev_gain += delta
        out[out_idx] = _oscillator_value(prev_gain / period, prev_loss / period, cmo)
        out_idx += 1
        if today >= end:
            return out_idx
        today -= period
        prev_value = saved_prev_value

    prev_gain = 0.0
    prev_loss = 0.0
    today += 1
    for _ in range(period):
        current = float(values[today])
        today += 1
        delta = current - prev_value
        prev_value = current
        if delta < 0.0:
            prev_loss -= delta
        else:
            prev_gain += delta
    prev_loss /= period
    prev_gain /= period

    if today > start:
        out[out_idx] = _oscillator_value(prev_gain, prev_loss, cmo)
        out_idx += 1
    else:
        while today < start:
            current = float(values[today])
            delta = current - prev_value
            prev_value = current
            prev_loss *= period - 1
            prev_gain *= period - 1
            if delta < 0.0:
                prev_loss -= delta
            else:
                prev_gain += delta
            prev_loss /= period
            prev_gain /= period
            today += 1

    while today < end:
        current = float(values[today])
        today += 1
        delta = current - prev_value
        prev_value = current
        prev_loss *= period - 1
        prev_gain *= period - 1
        if delta < 0.0:
            prev_loss -= delta
        else:
            prev_gain += delta
        prev_loss /= period
        prev_gain /= period
        out[out_idx] = _oscillator_value(prev_gain, prev_loss, cmo)
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def true_range_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    out: np.ndarray,
) -> int:
    """
    Write the true range: the widest of high-low and the gaps to the prior close.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        start: First output index, `>= 1`.
        end: Exclusive end index.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        None.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    out_idx = 0
    for today in range(start, end):
        out[out_idx] = true_range_at(high, low, close, today)
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def average_true_range_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    period: int,
    unstable: int,
    normalize: bool,
    out: np.ndarray,
) -> int:
    """
    Write Wilder-smoothed average true range, optionally normalized by close (NATR).

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        start: First output index, `>= period + unstable`.
        end: Exclusive end index.
        period: Smoothing period, `>= 2`.
        unstable: Extra warm-up steps run without output.
        normalize: When True writes `100 * atr / close` (0 for a zero close).
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        True range is staged in a local scratch buffer sized to the output length plus
        the lookback, so `out` may alias any input.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    lookback = period + unstable
    scratch = np.empty(lookback + (end - start), dtype=np.float64)
    true_range_kernel(high, low, close, start - lookback + 1, end, scratch)

    total = 0.0
    for index in range(period):
        total += scratch[index]
    prev_atr = total / period

    today = period
    for _ in range(unstable):
        prev_atr = (prev_atr * (period - 1) + scratch[today]) / period
        today += 1

    out_idx = 0
    count = end - start
    while out_idx < count:
        if out_idx > 0:
            prev_atr = (prev_atr * (period - 1) + scratch[today]) / period
            today += 1
        if normalize:
            close_today = float(close[start + out_idx])
            if close_today != 0.0:
                out[out_idx] = (prev_atr / close_today) * PERCENT
            else:
                out[out_idx] = 0.0
        else:
            out[out_idx] = prev_atr
        out_idx += 1
    return out_idx


__all__ = [
    "average_true_range_kernel",
    "true_range_kernel",
    "wilder_oscillator_kernel",
]
