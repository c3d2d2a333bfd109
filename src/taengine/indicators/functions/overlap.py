"""
Overlap studies: moving averages, Bollinger bands and window midpoints.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.engine.lookback,
  taengine.indicators.adapters.outbound.compute_numba.kernels.ma,
  taengine.indicators.functions._stages

Every function follows the buffer contract: inputs, requested range, caller-owned
outputs, keyword parameters and an optional per-call `settings` snapshot. Results are
written from offset 0 of each output; `ComputeResult.out_range` names the input indices
they belong to.
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    midpoint_kernel,
    midprice_kernel,
    sma_kernel,
    stddev_around_mean_kernel,
    stddev_kernel,
    wma_kernel,
)
from taengine.indicators.domain.entities import MAType, RangeLike
from taengine.indicators.engine.lookback import (
    bbands_lookback,
    dema_lookback,
    ema_lookback,
    kama_lookback,
    ma_lookback,
    mama_lookback,
    midpoint_lookback,
    midprice_lookback,
    sma_lookback,
    t3_lookback,
    tema_lookback,
    trima_lookback,
    wma_lookback,
)
from taengine.indicators.engine.numeric import scratch_buffer
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

from ._base import ComputeResult, open_window
from ._stages import (
    dema_stage,
    ema_stage,
    expect_written,
    kama_stage,
    ma_stage,
    mama_stage,
    resolved_ma_type,
    t3_stage,
    tema_stage,
    trima_stage,
)


def ma(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the moving average selected by `ma_type`.

    Args:
        values: Input series.
        in_range: Requested half-open range, tuple, or `None`.
        out: Output buffer of at least the requested length.
        period: Averaging period; 1 copies the input verbatim for every variant.
        ma_type: Variant selector.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        MAMA uses limits 0.5/0.05 and ignores `period`; T3 uses volume factor 0.7.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=ma_lookback(period, ma_type, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    resolved_type = resolved_ma_type(ma_type)
    return window.finish(
        ma_stage(values, window.start, window.end, int(period), resolved_type, snapshot, out)
    )


def sma(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=sma_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(sma_kernel(values, window.start, window.end, int(period), out))


def ema(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the exponential moving average with `k = 2 / (period + 1)`.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Period, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        DEFAULT seeds with the mean of the first `period` warm-up samples; METASTOCK
        seeds with the first warm-up sample. The unstable period extends the warm-up.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=ema_lookback(period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(ema_stage(values, window.start, window.end, int(period), snapshot, out))


def wma(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=wma_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(wma_kernel(values, window.start, window.end, int(period), out))


def dema(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=dema_lookback(period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(dema_stage(values, window.start, window.end, int(period), snapshot, out))


def tema(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=tema_lookback(period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(tema_stage(values, window.start, window.end, int(period), snapshot, out))


def trima(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=trima_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(trima_stage(values, window.start, window.end, int(period), out))


def kama(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=kama_lookback(period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(kama_stage(values, window.start, window.end, int(period), snapshot, out))


def mama(
    values: np.ndarray,
    in_range: RangeLike,
    out_mama: np.ndarray,
    out_fama: np.ndarray,
    *,
    fast_limit: float = 0.5,
    slow_limit: float = 0.05,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the MESA adaptive moving average and its following average.

    Args:
        values: Input series.
        in_range: Requested range.
        out_mama: MAMA output buffer.
        out_fama: FAMA output buffer.
        fast_limit: Upper bound of the adaptive factor, in `[0.01, 0.99]`.
        slow_limit: Lower bound of the adaptive factor, in `[0.01, 0.99]`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range shared by both outputs.
    Assumptions:
        Lookback is fixed at 32 plus the MAMA unstable period.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into both output buffers.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=mama_lookback(fast_limit, slow_limit, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out_mama", out_mama), ("out_fama", out_fama)),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        mama_stage(
            values,
            window.start,
            window.end,
            fast_limit,
            slow_limit,
            snapshot,
            out_mama,
            out_fama,
        )
    )


def t3(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 5,
    vfactor: float = 0.7,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=t3_lookback(period, vfactor, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        t3_stage(values, window.start, window.end, int(period), vfactor, snapshot, out)
    )


def bbands(
    values: np.ndarray,
    in_range: RangeLike,
    out_upper: np.ndarray,
    out_middle: np.ndarray,
    out_lower: np.ndarray,
    *,
    period: int = 5,
    nbdev_up: float = 2.0,
    nbdev_dn: float = 2.0,
    ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute Bollinger bands around a moving average.

    Args:
        values: Input series.
        in_range: Requested range.
        out_upper: Upper band buffer.
        out_middle: Middle band buffer.
        out_lower: Lower band buffer.
        period: Window of both the average and the deviation, `>= 2`.
        nbdev_up: Deviation multiplier of the upper band, `>= 0`.
        nbdev_dn: Deviation multiplier of the lower band, `>= 0`.
        ma_type: Middle band variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range shared by all bands.
    Assumptions:
        With SMA the deviation is taken around the middle band itself; other variants
        use the window's own mean.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If middle band and deviation misalign.
    Side Effects:
        Writes into the three band buffers after both stages completed in scratch.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=bbands_lookback(period, nbdev_up, nbdev_dn, ma_type, settings=snapshot),
        inputs=(("values", values),),
        outputs=(
            ("out_upper", out_upper),
            ("out_middle", out_middle),
            ("out_lower", out_lower),
        ),
    )
    if window.early is not None:
        return window.early

    resolved_type = resolved_ma_type(ma_type)
    count = window.length
    middle = scratch_buffer(window.dtype, output_length=count, lookback=0)
    expect_written(
        "bbands.middle",
        ma_stage(values, window.start, window.end, int(period), resolved_type, snapshot, middle),
        count,
    )
    deviation = scratch_buffer(window.dtype, output_length=count, lookback=0)
    if resolved_type is MAType.SMA:
        written = stddev_around_mean_kernel(
            values, window.start, window.end, int(period), middle, deviation
        )
    else:
        written = stddev_kernel(values, window.start, window.end, int(period), 1.0, deviation)
    expect_written("bbands.deviation", written, count)

    out_middle[:count] = middle
    out_upper[:count] = middle + float(nbdev_up) * deviation
    out_lower[:count] = middle - float(nbdev_dn) * deviation
    return window.finish(count)


def midpoint(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=midpoint_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(midpoint_kernel(values, window.start, window.end, int(period), out))


def midprice(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=midprice_lookback(period),
        inputs=(("high", high), ("low", low)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(midprice_kernel(high, low, window.start, window.end, int(period), out))


__all__ = [
    "bbands",
    "dema",
    "ema",
    "kama",
    "ma",
    "mama",
    "midpoint",
    "midprice",
    "sma",
    "t3",
    "tema",
    "trima",
    "wma",
]
