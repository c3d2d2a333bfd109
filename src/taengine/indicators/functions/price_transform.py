"""
Price transforms: one-bar averages of the open, high, low and close.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.price

None of these has a lookback; the output window is the requested range.
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    avgprice_kernel,
    medprice_kernel,
    typprice_kernel,
    wclprice_kernel,
)
from taengine.indicators.domain.entities import RangeLike
from taengine.indicators.engine.lookback import (
    avgprice_lookback,
    medprice_lookback,
    typprice_lookback,
    wclprice_lookback,
)
from taengine.platform.config.compatibility_settings import CompatibilitySettings

from ._base import ComputeResult, open_window

_HLC = ("high", "low", "close")


def avgprice(
    open_: np.ndarray,
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
        lookback=avgprice_lookback(),
        inputs=(("open", open_), ("high", high), ("low", low), ("close", close)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(avgprice_kernel(open_, high, low, close, window.start, window.end, out))


def medprice(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=medprice_lookback(),
        inputs=(("high", high), ("low", low)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(medprice_kernel(high, low, window.start, window.end, out))


def typprice(
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
        lookback=typprice_lookback(),
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(typprice_kernel(high, low, close, window.start, window.end, out))


def wclprice(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the weighted close `(high + low + 2 * close) / 4`.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        in_range: Requested range.
        out: Output buffer.
        settings: Accepted for contract uniformity; unused.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        None.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    window = open_window(
        in_range=in_range,
        lookback=wclprice_lookback(),
        inputs=tuple(zip(_HLC, (high, low, close))),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(wclprice_kernel(high, low, close, window.start, window.end, out))


__all__ = ["avgprice", "medprice", "typprice", "wclprice"]
