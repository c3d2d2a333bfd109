"""
Rolling extrema and sums over trailing windows.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.extrema,
  taengine.indicators.adapters.outbound.compute_numba.kernels.stats

Index outputs hold absolute input indices. Among equal extreme values the most recent
index wins.
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    max_index_kernel,
    min_index_kernel,
    min_max_index_kernel,
    min_max_kernel,
    rolling_max_kernel,
    rolling_min_kernel,
    rolling_sum_kernel,
)
from taengine.indicators.domain.entities import RangeLike
from taengine.indicators.engine.lookback import (
    max_index_lookback,
    min_index_lookback,
    min_max_index_lookback,
    min_max_lookback,
    rolling_max_lookback,
    rolling_min_lookback,
    rolling_sum_lookback,
)
from taengine.platform.config.compatibility_settings import CompatibilitySettings

from ._base import ComputeResult, open_window


def rolling_max(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the highest value over each trailing `period`-sample window.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Window length, `>= 2`.
        settings: Accepted for contract uniformity; unused.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        The tracked extreme is rescanned only when it leaves the window.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    window = open_window(
        in_range=in_range,
        lookback=rolling_max_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(rolling_max_kernel(values, window.start, window.end, int(period), out))


def rolling_min(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=rolling_min_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(rolling_min_kernel(values, window.start, window.end, int(period), out))


def max_index(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=max_index_lookback(period),
        inputs=(("values", values),),
        index_outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(max_index_kernel(values, window.start, window.end, int(period), out))


def min_index(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=min_index_lookback(period),
        inputs=(("values", values),),
        index_outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(min_index_kernel(values, window.start, window.end, int(period), out))


def min_max(
    values: np.ndarray,
    in_range: RangeLike,
    out_min: np.ndarray,
    out_max: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=min_max_lookback(period),
        inputs=(("values", values),),
        outputs=(("out_min", out_min), ("out_max", out_max)),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        min_max_kernel(values, window.start, window.end, int(period), out_min, out_max)
    )


def min_max_index(
    values: np.ndarray,
    in_range: RangeLike,
    out_min_idx: np.ndarray,
    out_max_idx: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=min_max_index_lookback(period),
        inputs=(("values", values),),
        index_outputs=(("out_min_idx", out_min_idx), ("out_max_idx", out_max_idx)),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        min_max_index_kernel(
            values, window.start, window.end, int(period), out_min_idx, out_max_idx
        )
    )


def rolling_sum(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=rolling_sum_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(rolling_sum_kernel(values, window.start, window.end, int(period), out))


__all__ = [
    "max_index",
    "min_index",
    "min_max",
    "min_max_index",
    "rolling_max",
    "rolling_min",
    "rolling_sum",
]
