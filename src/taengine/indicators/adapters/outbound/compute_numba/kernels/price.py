"""
Numba kernels over combined price bars: price transforms, MFI and CCI.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.price_transform,
  taengine.indicators.functions.momentum

The typical price of a bar is `(high + low + close) / 3`.
"""

from __future__ import annotations

import numba as nb
import numpy as np

from ._common import PERCENT

CCI_SCALE = 0.015


@nb.njit(cache=True)
def _typical_price(high: np.ndarray, low: np.ndarray, close: np.ndarray, today: int) -> float:
    return (float(high[today]) + float(low[today]) + float(close[today])) / 3.0


@nb.njit(cache=True)
def avgprice_kernel(
    open_: np.ndarray,
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    out: np.ndarray,
) -> int:
    out_idx = 0
    for today in range(start, end):
        total = float(open_[today]) + float(high[today]) + float(low[today]) + float(close[today])
        out[out_idx] = total / 4.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def medprice_kernel(
    high: np.ndarray,
    low: np.ndarray,
    start: int,
    end: int,
    out: np.ndarray,
) -> int:
    out_idx = 0
    for today in range(start, end):
        out[out_idx] = (float(high[today]) + float(low[today])) / 2.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def typprice_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    out: np.ndarray,
) -> int:
    out_idx = 0
    for today in range(start, end):
        out[out_idx] = _typical_price(high, low, close, today)
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def wclprice_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    out: np.ndarray,
) -> int:
    out_idx = 0
    for today in range(start, end):
        weighted = float(high[today]) + float(low[today]) + float(close[today]) * 2.0
        out[out_idx] = weighted / 4.0
        out_idx += 1
    return out_idx


@nb.njit(cache=True)
def mfi_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    volume: np.ndarray,
    begin: int,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write the money flow index over the last `period` typical-price changes.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        volume: Volume series.
        begin: First bar read, `start - lookback`.
        start: First output index.
        end: Exclusive end index.
        period: Window of money-flow terms, `>= 2`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        A bar whose typical price rises adds `tp * volume` to the positive flow, a
        falling one to the negative flow, an unchanged one to neither. The output is
        `100 * positive / (positive + negative)`, or 0 while the combined flow is
        below 1.
    Raises:
        None.
    Side Effects:
        Writes into `out` and allocates two ring buffers.
    """
    positive_ring = np.zeros(period, dtype=np.float64)
    negative_ring = np.zeros(period, dtype=np.float64)
    ring_idx = 0
    positive_total = 0.0
    negative_total = 0.0
    prev_typical = _typical_price(high, low, close, begin)
    out_idx = 0
    for today in range(begin + 1, end):
        positive_total -= positive_ring[ring_idx]
        negative_total -= negative_ring[ring_idx]
        typical = _typical_price(high, low, close, today)
        flow = typical * float(volume[today])
        positive = 0.0
        negative = 0.0
        if typical > prev_typical:
            positive = flow
        elif typical < prev_typical:
            negative = flow
        prev_typical = typical
        positive_ring[ring_idx] = positive
        negative_ring[ring_idx] = negative
        positive_total += positive
        negative_total += negative
        ring_idx += 1
        if ring_idx == period:
            ring_idx = 0
        if today >= start:
            total = positive_total + negative_total
            if total >= 1.0:
                out[out_idx] = PERCENT * (positive_total / total)
            else:
                out[out_idx] = 0.0
            out_idx += 1
    return out_idx


@nb.njit(cache=True)
def cci_kernel(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write the commodity channel index of the typical price.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Window length, `>= 2`.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        `cci = (tp - mean) / (0.015 * mean_abs_dev)`; 0 when either term is 0.
        Mean and deviation are recomputed over the window for every output.
    Raises:
        None.
    Side Effects:
        Writes into `out` and allocates one ring buffer.
    """
    ring = np.empty(period, dtype=np.float64)
    ring_idx = 0
    for index in range(start - period + 1, start):
        ring[ring_idx] = _typical_price(high, low, close, index)
        ring_idx += 1

    out_idx = 0
    for today in range(start, end):
        last = _typical_price(high, low, close, today)
        ring[ring_idx] = last
        ring_idx += 1
        if ring_idx == period:
            ring_idx = 0
        total = 0.0
        for slot in range(period):
            total += ring[slot]
        average = total / period
        deviation = 0.0
        for slot in range(period):
            deviation += abs(ring[slot] - average)
        distance = last - average
        if distance != 0.0 and deviation != 0.0:
            out[out_idx] = distance / (CCI_SCALE * (deviation / period))
        else:
            out[out_idx] = 0.0
        out_idx += 1
    return out_idx


__all__ = [
    "CCI_SCALE",
    "avgprice_kernel",
    "cci_kernel",
    "medprice_kernel",
    "mfi_kernel",
    "typprice_kernel",
    "wclprice_kernel",
]
