"""
Wilder's directional movement system: +DM/-DM, +DI/-DI, DX, ADX and ADXR.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.directional

Every indicator here is recursive and takes its own unstable period. Kernels seed at
`start - lookback`, so results for a later requested start differ from a whole-series
run by the warm-up effect only.
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    adx_kernel,
    directional_index_kernel,
    directional_movement_kernel,
    dx_kernel,
)
from taengine.indicators.domain.entities import RangeLike
from taengine.indicators.engine.lookback import (
    adx_lookback,
    adxr_lookback,
    dx_lookback,
    minus_di_lookback,
    minus_dm_lookback,
    plus_di_lookback,
    plus_dm_lookback,
)
from taengine.indicators.engine.numeric import scratch_buffer
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

from ._base import ComputeResult, open_window
from ._stages import expect_written

_HL = ("high", "low")
_HLC = ("high", "low", "close")


def _movement(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int,
    lookback: int,
    minus: bool,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=tuple(zip(_HL, (high, low))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    written = directional_movement_kernel(
        high, low, window.start - lookback, window.start, window.end, int(period), minus, out
    )
    return window.finish(written)


def _indicator(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int,
    lookback: int,
    minus: bool,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    written = directional_index_kernel(
        high,
        low,
        close,
        window.start - lookback,
        window.start,
        window.end,
        int(period),
        minus,
        out,
    )
    return window.finish(written)


def plus_dm(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the Wilder-smoothed up movement +DM.

    Args:
        high: High series.
        low: Low series.
        in_range: Requested range.
        out: Output buffer.
        period: Smoothing period, `>= 1`; 1 returns the one-bar movement.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        The smoothed value is a running sum scale, not an average: it settles near
        `period` times the typical one-bar movement.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    return _movement(
        high,
        low,
        in_range,
        out,
        period=period,
        lookback=plus_dm_lookback(period, settings=snapshot),
        minus=False,
    )


def minus_dm(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    return _movement(
        high,
        low,
        in_range,
        out,
        period=period,
        lookback=minus_dm_lookback(period, settings=snapshot),
        minus=True,
    )


def plus_di(
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
    Compute the positive directional indicator `100 * +DM / TR`.

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
        A zero smoothed true range yields 0. Period 1 yields the unscaled one-bar
        ratio `+DM1 / TR1`.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    return _indicator(
        high,
        low,
        close,
        in_range,
        out,
        period=period,
        lookback=plus_di_lookback(period, settings=snapshot),
        minus=False,
    )


def minus_di(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    return _indicator(
        high,
        low,
        close,
        in_range,
        out,
        period=period,
        lookback=minus_di_lookback(period, settings=snapshot),
        minus=True,
    )


def dx(
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
    Compute the directional movement index `100 * |+DI - -DI| / (+DI + -DI)`.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out: Output buffer.
        period: Smoothing period, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Where the index is undefined (zero range or zero DI sum) the previous value
        repeats; a first undefined value is 0.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    lookback = dx_lookback(period, settings=snapshot)
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    written = dx_kernel(
        high, low, close, window.start - lookback, window.start, window.end, int(period), out
    )
    return window.finish(written)


def adx(
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
    Compute the average directional movement index, a Wilder average of DX.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out: Output buffer.
        period: Smoothing period for movement and for DX, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Output stays within [0, 100].
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    lookback = adx_lookback(period, settings=snapshot)
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    written = adx_kernel(
        high, low, close, window.start - lookback, window.start, window.end, int(period), out
    )
    return window.finish(written)


def adxr(
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
    Compute the ADX rating: mean of today's ADX and the ADX `period - 1` bars earlier.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out: Output buffer.
        period: ADX period and rating distance, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        ADX is staged in scratch from `start - (period - 1)`.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If the ADX stage misaligns.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=adxr_lookback(period, settings=snapshot),
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early

    distance = int(period) - 1
    adx_start = window.start - distance
    staged_lookback = adx_lookback(period, settings=snapshot)
    count = window.length
    adx_values = scratch_buffer(window.dtype, output_length=count, lookback=distance)
    expect_written(
        "adxr.adx",
        adx_kernel(
            high,
            low,
            close,
            adx_start - staged_lookback,
            adx_start,
            window.end,
            int(period),
            adx_values,
        ),
        count + distance,
    )
    out[:count] = (adx_values[distance:] + adx_values[:count]) / 2.0
    return window.finish(count)


__all__ = ["adx", "adxr", "dx", "minus_di", "minus_dm", "plus_di", "plus_dm"]
