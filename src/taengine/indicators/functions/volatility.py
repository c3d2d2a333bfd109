"""
Volatility indicators: true range and Wilder average true range.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.wilder
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    average_true_range_kernel,
    true_range_kernel,
)
from taengine.indicators.domain.entities import RangeLike, UnstableFunc
from taengine.indicators.engine.lookback import atr_lookback, natr_lookback, trange_lookback
from taengine.indicators.engine.numeric import scratch_buffer
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

from ._base import CallWindow, ComputeResult, open_window
from ._stages import expect_written

_HLC = ("high", "low", "close")


def trange(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=trange_lookback(),
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(true_range_kernel(high, low, close, window.start, window.end, out))


def _normalized_true_range(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    window: CallWindow,
    out: np.ndarray,
) -> int:
    count = window.length
    true_range = scratch_buffer(window.dtype, output_length=count, lookback=0)
    expect_written(
        "natr.trange",
        true_range_kernel(high, low, close, window.start, window.end, true_range),
        count,
    )
    closes = close[window.start : window.end]
    result = np.zeros(count, dtype=window.dtype)
    nonzero = closes != 0.0
    result[nonzero] = true_range[nonzero] / closes[nonzero] * 100.0
    out[:count] = result
    return count


def _average_true_range(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int,
    lookback: int,
    func: UnstableFunc,
    settings: CompatibilitySettings,
) -> ComputeResult:
    normalize = func is UnstableFunc.NATR
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early

    if int(period) == 1:
        if normalize:
            return window.finish(_normalized_true_range(high, low, close, window, out))
        return window.finish(
            true_range_kernel(high, low, close, window.start, window.end, out)
        )
    written = average_true_range_kernel(
        high,
        low,
        close,
        window.start,
        window.end,
        int(period),
        settings.unstable_period(func),
        normalize,
        out,
    )
    return window.finish(written)


def atr(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the Wilder-smoothed average true range.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out: Output buffer.
        period: Smoothing period, `>= 1`; 1 returns the true range itself.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        The seed is the plain mean of the first `period` true ranges of the warm-up.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    return _average_true_range(
        high,
        low,
        close,
        in_range,
        out,
        period=period,
        lookback=atr_lookback(period, settings=snapshot),
        func=UnstableFunc.ATR,
        settings=snapshot,
    )


def natr(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the average true range as a percentage of the close at the same index.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out: Output buffer.
        period: Smoothing period, `>= 1`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        A zero close yields 0.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    return _average_true_range(
        high,
        low,
        close,
        in_range,
        out,
        period=period,
        lookback=natr_lookback(period, settings=snapshot),
        func=UnstableFunc.NATR,
        settings=snapshot,
    )


__all__ = ["atr", "natr", "trange"]
