"""
Stochastic oscillators: slow and fast %K/%D and stochastic RSI.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.extrema,
  taengine.indicators.functions._stages

Raw %K is the position of the close inside the `fastk_period` high-low range, in
[0, 100]. Every smoothing line goes through `ma_stage`, so any `MAType` can be used.
Raw %K is staged in scratch from `start` minus the downstream smoothing lookbacks;
the %K output is the tail of that staged line.
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import stoch_fast_k_kernel
from taengine.indicators.domain.entities import MAType, RangeLike
from taengine.indicators.engine.lookback import (
    ma_lookback,
    stoch_lookback,
    stochf_lookback,
    stochrsi_lookback,
)
from taengine.indicators.engine.numeric import scratch_buffer
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

from ._base import ComputeResult, open_window
from ._stages import expect_written, ma_stage, resolved_ma_type, rsi_stage

_HLC = ("high", "low", "close")


def _fast_stochastic(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    start: int,
    end: int,
    fastk_period: int,
    fastd_period: int,
    fastd_ma_type: MAType,
    settings: CompatibilitySettings,
    out_fastk: np.ndarray,
    out_fastd: np.ndarray,
) -> int:
    """
    Write fast %K and its `fastd_period` average over `[start, end)`.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        start: First output index, at or past the fast stochastic lookback.
        end: Exclusive end index.
        fastk_period: Raw %K window.
        fastd_period: %D period.
        fastd_ma_type: %D variant.
        settings: Call snapshot.
        out_fastk: %K output buffer.
        out_fastd: %D output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        The inputs may all be one series (stochastic RSI).
    Raises:
        InternalInvariantError: If a stage misaligns.
    Side Effects:
        Writes into both output buffers.
    """
    count = end - start
    smoothing = ma_lookback(fastd_period, fastd_ma_type, settings=settings)
    raw_k = scratch_buffer(out_fastk.dtype, output_length=count, lookback=smoothing)
    expect_written(
        "stochf.fastk",
        stoch_fast_k_kernel(high, low, close, start - smoothing, end, fastk_period, raw_k),
        count + smoothing,
    )
    expect_written(
        "stochf.fastd",
        ma_stage(
            raw_k,
            smoothing,
            smoothing + count,
            fastd_period,
            fastd_ma_type,
            settings,
            out_fastd,
        ),
        count,
    )
    out_fastk[:count] = raw_k[smoothing:]
    return count


def stochf(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out_fastk: np.ndarray,
    out_fastd: np.ndarray,
    *,
    fastk_period: int = 5,
    fastd_period: int = 3,
    fastd_ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the fast stochastic: raw %K and its moving average %D.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out_fastk: Raw %K buffer.
        out_fastd: %D buffer.
        fastk_period: Raw %K window, `>= 1`.
        fastd_period: %D period, `>= 1`; 1 copies %K.
        fastd_ma_type: %D variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        A flat high-low window yields a %K of 0.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If a stage misaligns.
    Side Effects:
        Writes into both output buffers.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=stochf_lookback(fastk_period, fastd_period, fastd_ma_type, settings=snapshot),
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out_fastk", out_fastk), ("out_fastd", out_fastd)),
    )
    if window.early is not None:
        return window.early
    written = _fast_stochastic(
        high,
        low,
        close,
        window.start,
        window.end,
        int(fastk_period),
        int(fastd_period),
        resolved_ma_type(fastd_ma_type),
        snapshot,
        out_fastk,
        out_fastd,
    )
    return window.finish(written)


def stoch(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out_slowk: np.ndarray,
    out_slowd: np.ndarray,
    *,
    fastk_period: int = 5,
    slowk_period: int = 3,
    slowk_ma_type: MAType | str = MAType.SMA,
    slowd_period: int = 3,
    slowd_ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the slow stochastic: smoothed %K and its moving average %D.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out_slowk: Slow %K buffer.
        out_slowd: Slow %D buffer.
        fastk_period: Raw %K window, `>= 1`.
        slowk_period: Slow %K period, `>= 1`.
        slowk_ma_type: Slow %K variant.
        slowd_period: Slow %D period, `>= 1`.
        slowd_ma_type: Slow %D variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Raw %K is staged from `start - lookback(slow %K) - lookback(slow %D)`, slow %K
        from `start - lookback(slow %D)`.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If a stage misaligns.
    Side Effects:
        Writes into both output buffers.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=stoch_lookback(
            fastk_period,
            slowk_period,
            slowk_ma_type,
            slowd_period,
            slowd_ma_type,
            settings=snapshot,
        ),
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out_slowk", out_slowk), ("out_slowd", out_slowd)),
    )
    if window.early is not None:
        return window.early

    k_type = resolved_ma_type(slowk_ma_type)
    d_type = resolved_ma_type(slowd_ma_type)
    k_period, d_period = int(slowk_period), int(slowd_period)
    k_lookback = ma_lookback(k_period, k_type, settings=snapshot)
    d_lookback = ma_lookback(d_period, d_type, settings=snapshot)
    count = window.length

    raw_k = scratch_buffer(window.dtype, output_length=count, lookback=k_lookback + d_lookback)
    expect_written(
        "stoch.fastk",
        stoch_fast_k_kernel(
            high,
            low,
            close,
            window.start - k_lookback - d_lookback,
            window.end,
            int(fastk_period),
            raw_k,
        ),
        count + k_lookback + d_lookback,
    )
    slow_k = scratch_buffer(window.dtype, output_length=count, lookback=d_lookback)
    expect_written(
        "stoch.slowk",
        ma_stage(raw_k, k_lookback, raw_k.shape[0], k_period, k_type, snapshot, slow_k),
        count + d_lookback,
    )
    expect_written(
        "stoch.slowd",
        ma_stage(slow_k, d_lookback, slow_k.shape[0], d_period, d_type, snapshot, out_slowd),
        count,
    )
    out_slowk[:count] = slow_k[d_lookback:]
    return window.finish(count)


def stochrsi(
    values: np.ndarray,
    in_range: RangeLike,
    out_fastk: np.ndarray,
    out_fastd: np.ndarray,
    *,
    period: int = 14,
    fastk_period: int = 5,
    fastd_period: int = 3,
    fastd_ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the fast stochastic of RSI.

    Args:
        values: Input series.
        in_range: Requested range.
        out_fastk: %K of RSI buffer.
        out_fastd: %D of RSI buffer.
        period: RSI period, `>= 2`.
        fastk_period: %K window over RSI, `>= 1`.
        fastd_period: %D period, `>= 1`.
        fastd_ma_type: %D variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        RSI is staged from `start - stochf_lookback` and then used as high, low and
        close of the fast stochastic.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If a stage misaligns.
    Side Effects:
        Writes into both output buffers.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=stochrsi_lookback(
            period, fastk_period, fastd_period, fastd_ma_type, settings=snapshot
        ),
        inputs=(("values", values),),
        outputs=(("out_fastk", out_fastk), ("out_fastd", out_fastd)),
    )
    if window.early is not None:
        return window.early

    stochastic_lookback = stochf_lookback(
        fastk_period, fastd_period, fastd_ma_type, settings=snapshot
    )
    rsi_start = window.start - stochastic_lookback
    count = window.length
    rsi_values = scratch_buffer(window.dtype, output_length=count, lookback=stochastic_lookback)
    expect_written(
        "stochrsi.rsi",
        rsi_stage(values, rsi_start, window.end, int(period), snapshot, rsi_values),
        count + stochastic_lookback,
    )
    written = _fast_stochastic(
        rsi_values,
        rsi_values,
        rsi_values,
        stochastic_lookback,
        stochastic_lookback + count,
        int(fastk_period),
        int(fastd_period),
        resolved_ma_type(fastd_ma_type),
        snapshot,
        out_fastk,
        out_fastd,
    )
    return window.finish(written)


__all__ = ["stoch", "stochf", "stochrsi"]
