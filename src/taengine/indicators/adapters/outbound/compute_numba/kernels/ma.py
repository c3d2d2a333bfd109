"""
Numba kernels for the moving-average family.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.overlap,
  taengine.indicators.adapters.outbound.compute_numba.kernels._common

Recursive kernels take `begin`, the first sample they read, separately from `start`,
the first sample they write. The gap `start - begin` is the lookback including any
unstable period, so warm-up runs the recurrence without emitting output.
"""

from __future__ import annotations

import math

import numba as nb
import numpy as np

_KAMA_FAST_SC = 2.0 / (2.0 + 1.0)
_KAMA_SLOW_SC = 2.0 / (30.0 + 1.0)

_HT_A = 0.0962
_HT_B = 0.5769
_RAD_TO_DEG = 180.0 / math.pi
_MAMA_PRICE_WARMUP = 9


@nb.njit(cache=True)
def sma_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write simple moving averages using an O(1) running sum.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length, `>= 1`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        The outgoing sample is read before the output slot is written.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
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
        out[out_idx] = current / period
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def ema_kernel(
    values: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    k: float,
    seed_with_first: bool,
    out: np.ndarray,
) -> int:
    """
    Write exponential moving averages `prev + k * (x - prev)`.

    Args:
        values: Input series.
        begin: First sample of the warm-up window, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Seed window length, `>= 1`.
        k: Smoothing factor, normally `2 / (period + 1)`.
        seed_with_first: Seed with `values[begin]` instead of the mean of the first
            `period` samples (legacy charting alignment).
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        `start - begin >= period - 1`.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    if seed_with_first:
        prev = float(values[begin])
        today = begin + 1
    else:
        seed_total = 0.0
        for index in range(begin, begin + period):
            seed_total += values[index]
        prev = seed_total / period
        today = begin + period

    while today <= start:
        prev = (values[today] - prev) * k + prev
        today += 1

    out[0] = prev
    out_idx = 1
    while today < end:
        prev = (values[today] - prev) * k + prev
        today += 1
        out[out_idx] = prev
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def wma_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write linearly weighted moving averages, recomputing each window.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Oldest sample in the window has weight 1, newest has weight `period`.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    divider = period * (period + 1) / 2.0
    out_idx = 0
    for today in range(start, end):
        weighted = 0.0
        weight = 1
        for index in range(today - period + 1, today + 1):
            weighted += values[index] * weight
            weight += 1
        out[out_idx] = weighted / divider
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def _kama_smoothing(period_roc: float, sum_roc1: float) -> float:
    if sum_roc1 <= period_roc or sum_roc1 == 0.0:
        efficiency = 1.0
    else:
        efficiency = abs(period_roc / sum_roc1)
    constant = efficiency * (_KAMA_FAST_SC - _KAMA_SLOW_SC) + _KAMA_SLOW_SC
    return constant * constant


@nb.njit(cache=True)
def kama_kernel(
    values: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write Kaufman adaptive moving averages.

    Args:
        values: Input series.
        begin: First sample read, `start - period - unstable`.
        start: First output index.
        end: Exclusive end index.
        period: Efficiency-ratio window.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        The efficiency ratio compares net change over `period` samples with the sum of
        absolute one-step changes; it is 1 when that sum is zero or does not exceed the
        net change.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    today = begin
    trailing_idx = begin
    sum_roc1 = 0.0
    for _ in range(period):
        step = values[today] - values[today + 1]
        sum_roc1 += abs(step)
        today += 1

    prev_kama = float(values[today - 1])
    current = float(values[today])
    trailing_value = float(values[trailing_idx])
    trailing_idx += 1
    smoothing = _kama_smoothing(current - trailing_value, sum_roc1)
    prev_kama = (current - prev_kama) * smoothing + prev_kama
    today += 1

    while today <= start:
        current = float(values[today])
        oldest = float(values[trailing_idx])
        trailing_idx += 1
        sum_roc1 -= abs(trailing_value - oldest)
        sum_roc1 += abs(current - values[today - 1])
        trailing_value = oldest
        smoothing = _kama_smoothing(current - oldest, sum_roc1)
        prev_kama = (current - prev_kama) * smoothing + prev_kama
        today += 1

    out[0] = prev_kama
    out_idx = 1
    while today < end:
        current = float(values[today])
        oldest = float(values[trailing_idx])
        trailing_idx += 1
        sum_roc1 -= abs(trailing_value - oldest)
        sum_roc1 += abs(current - values[today - 1])
        trailing_value = oldest
        smoothing = _kama_smoothing(current - oldest, sum_roc1)
        prev_kama = (current - prev_kama) * smoothing + prev_kama
        today += 1
        out[out_idx] = prev_kama
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def t3_kernel(
    values: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    vfactor: float,
    out: np.ndarray,
) -> int:
    """
    Write T3: six cascaded EMAs combined with volume-factor coefficients.

    Args:
        values: Input series.
        begin: First sample read, `start - 6 * (period - 1) - unstable`.
        start: First output index.
        end: Exclusive end index.
        period: Period of every cascade stage.
        vfactor: Volume factor in `[0, 1]`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Each stage is seeded by the average of its first `period` inputs, which are the
        previous stage's outputs; all six states stay in local scalars.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    k = 2.0 / (period + 1.0)
    one_minus_k = 1.0 - k
    today = begin

    total = 0.0
    for _ in range(period):
        total += values[today]
        today += 1
    e1 = total / period

    total = e1
    for _ in range(period - 1):
        e1 = k * values[today] + one_minus_k * e1
        today += 1
        total += e1
    e2 = total / period

    total = e2
    for _ in range(period - 1):
        e1 = k * values[today] + one_minus_k * e1
        e2 = k * e1 + one_minus_k * e2
        today += 1
        total += e2
    e3 = total / period

    total = e3
    for _ in range(period - 1):
        e1 = k * values[today] + one_minus_k * e1
        e2 = k * e1 + one_minus_k * e2
        e3 = k * e2 + one_minus_k * e3
        today += 1
        total += e3
    e4 = total / period

    total = e4
    for _ in range(period - 1):
        e1 = k * values[today] + one_minus_k * e1
        e2 = k * e1 + one_minus_k * e2
        e3 = k * e2 + one_minus_k * e3
        e4 = k * e3 + one_minus_k * e4
        today += 1
        total += e4
    e5 = total / period

    total = e5
    for _ in range(period - 1):
        e1 = k * values[today] + one_minus_k * e1
        e2 = k * e1 + one_minus_k * e2
        e3 = k * e2 + one_minus_k * e3
        e4 = k * e3 + one_minus_k * e4
        e5 = k * e4 + one_minus_k * e5
        today += 1
        total += e5
    e6 = total / period

    while today <= start:
        e1 = k * values[today] + one_minus_k * e1
        e2 = k * e1 + one_minus_k * e2
        e3 = k * e2 + one_minus_k * e3
        e4 = k * e3 + one_minus_k * e4
        e5 = k * e4 + one_minus_k * e5
        e6 = k * e5 + one_minus_k * e6
        today += 1

    squared = vfactor * vfactor
    c1 = -(squared * vfactor)
    c2 = 3.0 * (squared - c1)
    c3 = -6.0 * squared - 3.0 * (vfactor - c1)
    c4 = 1.0 + 3.0 * vfactor - c1 + 3.0 * squared

    out[0] = c1 * e6 + c2 * e5 + c3 * e4 + c4 * e3
    out_idx = 1
    while today < end:
        e1 = k * values[today] + one_minus_k * e1
        e2 = k * e1 + one_minus_k * e2
        e3 = k * e2 + one_minus_k * e3
        e4 = k * e3 + one_minus_k * e4
        e5 = k * e4 + one_minus_k * e5
        e6 = k * e5 + one_minus_k * e6
        today += 1
        out[out_idx] = c1 * e6 + c2 * e5 + c3 * e4 + c4 * e3
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def _hilbert(history: np.ndarray, position: int, adjusted_period: float) -> float:
    """
    Apply the four-tap Hilbert transform to `history` at `position`.

    Args:
        history: Per-step history of the transformed series, zero before step 0.
        position: Current step.
        adjusted_period: `0.075 * previous_period + 0.54`.
    Returns:
        float: Transformed value.
    Assumptions:
        Taps at lags 2, 4 and 6 read as zero before the history begins.
    Raises:
        None.
    Side Effects:
        None.
    """
    lag2 = history[position - 2] if position >= 2 else 0.0
    lag4 = history[position - 4] if position >= 4 else 0.0
    lag6 = history[position - 6] if position >= 6 else 0.0
    value = _HT_A * history[position] + _HT_B * lag2 - _HT_B * lag4 - _HT_A * lag6
    return value * adjusted_period


@nb.njit(cache=True)
def mama_kernel(
    values: np.ndarray,
    begin: int,
    start: int,
    end: int,
    fast_limit: float,
    slow_limit: float,
    out_mama: np.ndarray,
    out_fama: np.ndarray,
) -> int:
    """
    Write MESA adaptive moving average (MAMA) and following average (FAMA).

    Args:
        values: Input series.
        begin: First sample read, `start - 32 - unstable`.
        start: First output index.
        end: Exclusive end index.
        fast_limit: Upper bound of the adaptive alpha.
        slow_limit: Lower bound of the adaptive alpha.
        out_mama: MAMA output buffer.
        out_fama: FAMA output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Price is pre-smoothed with a 4-3-2-1 weighted average; the dominant cycle
        period comes from homodyne discrimination of Hilbert-transformed components and
        is clamped to `[0.67, 1.5]` times its previous value and to `[6, 50]`.
        Component histories are local scratch arrays sized to the processed span.
    Raises:
        None.
    Side Effects:
        Writes into both output buffers.
    """
    today = begin
    trailing_wma_idx = begin

    price = float(values[today])
    today += 1
    wma_sub = price
    wma_sum = price
    price = float(values[today])
    today += 1
    wma_sub += price
    wma_sum += price * 2.0
    price = float(values[today])
    today += 1
    wma_sub += price
    wma_sum += price * 3.0
    trailing_wma_value = 0.0

    for _ in range(_MAMA_PRICE_WARMUP):
        price = float(values[today])
        today += 1
        wma_sub += price
        wma_sub -= trailing_wma_value
        wma_sum += price * 4.0
        trailing_wma_value = float(values[trailing_wma_idx])
        trailing_wma_idx += 1
        wma_sum -= wma_sub

    loop_begin = today
    span = end - loop_begin
    smoothed = np.zeros(span, dtype=np.float64)
    detrender = np.zeros(span, dtype=np.float64)
    in_phase = np.zeros(span, dtype=np.float64)
    quadrature = np.zeros(span, dtype=np.float64)

    period = 0.0
    prev_i2 = 0.0
    prev_q2 = 0.0
    re = 0.0
    im = 0.0
    mama = 0.0
    fama = 0.0
    prev_phase = 0.0
    out_idx = 0

    while today < end:
        step = today - loop_begin
        adjusted_period = 0.075 * period + 0.54
        price = float(values[today])

        wma_sub += price
        wma_sub -= trailing_wma_value
        wma_sum += price * 4.0
        trailing_wma_value = float(values[trailing_wma_idx])
        trailing_wma_idx += 1
        smoothed[step] = wma_sum * 0.1
        wma_sum -= wma_sub

        detrender[step] = _hilbert(smoothed, step, adjusted_period)
        quadrature[step] = _hilbert(detrender, step, adjusted_period)
        in_phase[step] = detrender[step - 3] if step >= 3 else 0.0
        j_i = _hilbert(in_phase, step, adjusted_period)
        j_q = _hilbert(quadrature, step, adjusted_period)

        q2 = 0.2 * (quadrature[step] + j_i) + 0.8 * prev_q2
        i2 = 0.2 * (in_phase[step] - j_q) + 0.8 * prev_i2

        if in_phase[step] != 0.0:
            phase = math.atan(quadrature[step] / in_phase[step]) * _RAD_TO_DEG
        else:
            phase = 0.0
        delta_phase = prev_phase - phase
        prev_phase = phase
        if delta_phase < 1.0:
            delta_phase = 1.0

        if delta_phase > 1.0:
            alpha = fast_limit / delta_phase
            if alpha < slow_limit:
                alpha = slow_limit
        else:
            alpha = fast_limit

        mama = alpha * price + (1.0 - alpha) * mama
        half_alpha = alpha * 0.5
        fama = half_alpha * mama + (1.0 - half_alpha) * fama
        if today >= start:
            out_mama[out_idx] = mama
            out_fama[out_idx] = fama
            out_idx += 1

        re = 0.2 * (i2 * prev_i2 + q2 * prev_q2) + 0.8 * re
        im = 0.2 * (i2 * prev_q2 - q2 * prev_i2) + 0.8 * im
        prev_q2 = q2
        prev_i2 = i2

        previous_period = period
        if im != 0.0 and re != 0.0:
            period = 360.0 / (math.atan(im / re) * _RAD_TO_DEG)
        upper = 1.5 * previous_period
        if period > upper:
            period = upper
        lower = 0.67 * previous_period
        if period < lower:
            period = lower
        if period < 6.0:
            period = 6.0
        elif period > 50.0:
            period = 50.0
        period = 0.2 * period + 0.8 * previous_period
        today += 1

    return out_idx


__all__ = [
    "ema_kernel",
    "kama_kernel",
    "mama_kernel",
    "sma_kernel",
    "t3_kernel",
    "wma_kernel",
]
