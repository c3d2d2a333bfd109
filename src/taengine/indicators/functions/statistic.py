"""
Rolling dispersion statistics and least-squares linear regression.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels.stats
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    LINEARREG_ANGLE,
    LINEARREG_FORECAST,
    LINEARREG_INTERCEPT,
    LINEARREG_SLOPE,
    LINEARREG_VALUE,
    avgdev_kernel,
    linear_regression_kernel,
    stddev_kernel,
    variance_kernel,
)
from taengine.indicators.domain.entities import RangeLike
from taengine.indicators.engine.lookback import (
    avgdev_lookback,
    linearreg_angle_lookback,
    linearreg_intercept_lookback,
    linearreg_lookback,
    linearreg_slope_lookback,
    stddev_lookback,
    tsf_lookback,
    var_lookback,
)
from taengine.platform.config.compatibility_settings import CompatibilitySettings

from ._base import ComputeResult, open_window


def var(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 5,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=var_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(variance_kernel(values, window.start, window.end, int(period), out))


def stddev(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 5,
    nbdev: float = 1.0,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute `nbdev` times the rolling population standard deviation.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Window length, `>= 2`.
        nbdev: Multiplier, any finite real.
        settings: Accepted for contract uniformity; unused.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Non-positive variance from rounding reads as 0.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    window = open_window(
        in_range=in_range,
        lookback=stddev_lookback(period, nbdev),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        stddev_kernel(values, window.start, window.end, int(period), float(nbdev), out)
    )


def avgdev(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=avgdev_lookback(period),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(avgdev_kernel(values, window.start, window.end, int(period), out))


def _linear_regression(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int,
    lookback: int,
    mode: int,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        linear_regression_kernel(values, window.start, window.end, int(period), mode, out)
    )


def linearreg(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the end point of the least-squares line over each trailing window.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Window length, `>= 2`.
        settings: Accepted for contract uniformity; unused.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Bars are equally spaced; a linear input is reproduced exactly up to rounding.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    return _linear_regression(
        values,
        in_range,
        out,
        period=period,
        lookback=linearreg_lookback(period),
        mode=LINEARREG_VALUE,
    )


def linearreg_slope(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _linear_regression(
        values,
        in_range,
        out,
        period=period,
        lookback=linearreg_slope_lookback(period),
        mode=LINEARREG_SLOPE,
    )


def linearreg_intercept(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the fitted value at the oldest bar of each trailing window.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Window length, `>= 2`.
        settings: Accepted for contract uniformity; unused.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        `linearreg == intercept + slope * (period - 1)` at every index.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    return _linear_regression(
        values,
        in_range,
        out,
        period=period,
        lookback=linearreg_intercept_lookback(period),
        mode=LINEARREG_INTERCEPT,
    )


def linearreg_angle(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _linear_regression(
        values,
        in_range,
        out,
        period=period,
        lookback=linearreg_angle_lookback(period),
        mode=LINEARREG_ANGLE,
    )


def tsf(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the time series forecast: the fitted line extended one bar ahead.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Window length, `>= 2`.
        settings: Accepted for contract uniformity; unused.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        `tsf == linearreg + slope` at every index.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    return _linear_regression(
        values,
        in_range,
        out,
        period=period,
        lookback=tsf_lookback(period),
        mode=LINEARREG_FORECAST,
    )


__all__ = [
    "avgdev",
    "linearreg",
    "linearreg_angle",
    "linearreg_intercept",
    "linearreg_slope",
    "stddev",
    "tsf",
    "var",
]
