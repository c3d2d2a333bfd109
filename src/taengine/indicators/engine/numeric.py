"""
Numeric contract for indicator buffers: supported element types and buffer checks.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions._base,
  taengine.indicators.adapters.outbound.compute_numba.kernels

Kernels are compiled once per element type by numba, so single- and double-precision
series run the same algorithm without per-element dispatch. Every real input of one
call shares one dtype; real outputs must use it too; index outputs are signed integers.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

SUPPORTED_REAL_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))
INDEX_DTYPE = np.dtype(np.int64)


def series_dtype(series: Sequence[np.ndarray], *, names: Sequence[str]) -> np.dtype:
    """
    Validate input series and return their common element type.

    Args:
        series: Input arrays in positional order.
        names: Argument names for diagnostics.
    Returns:
        np.dtype: Shared `float32` or `float64` dtype.
    Assumptions:
        Lengths may differ; the range validator bounds against each of them.
    Raises:
        TypeError: If an input is not a numpy array, not real floating point, or the
            inputs disagree on dtype.
        ValueError: If an input is not one-dimensional.
    Side Effects:
        None.
    """
    dtype: np.dtype | None = None
    for name, array in zip(names, series):
        _ensure_array(array, name=name)
        if array.dtype not in SUPPORTED_REAL_DTYPES:
            raise TypeError(
                f"{name} must be float32 or float64, got {array.dtype}"
            )
        if dtype is None:
            dtype = array.dtype
        elif array.dtype != dtype:
            raise TypeError(
                f"all input series must share one dtype, got {dtype} and {array.dtype} ({name})"
            )
    if dtype is None:
        raise TypeError("at least one input series is required")
    return dtype


def check_real_output(out: np.ndarray, *, name: str, dtype: np.dtype) -> None:
    """
    Validate a real-valued output buffer against the input dtype.

    Args:
        out: Caller-allocated output buffer.
        name: Argument name for diagnostics.
        dtype: Input dtype the output must match.
    Returns:
        None.
    Assumptions:
        Length is checked later against the requested range and reported as a status.
    Raises:
        TypeError: If `out` is not an array of `dtype`.
        ValueError: If `out` is not one-dimensional or not writeable.
    Side Effects:
        None.
    """
    _ensure_array(out, name=name)
    if out.dtype != dtype:
        raise TypeError(f"{name} must have dtype {dtype} to match inputs, got {out.dtype}")
    _ensure_writeable(out, name=name)


def check_index_output(out: np.ndarray, *, name: str) -> None:
    _ensure_array(out, name=name)
    if not np.issubdtype(out.dtype, np.signedinteger):
        raise TypeError(f"{name} must be a signed integer array, got {out.dtype}")
    _ensure_writeable(out, name=name)


def scratch_buffer(dtype: np.dtype, *, output_length: int, lookback: int) -> np.ndarray:
    """
    Allocate a staging buffer for composed computations.

    Args:
        dtype: Element type of the call.
        output_length: Number of outputs the call will produce.
        lookback: Leading samples the consuming stage needs in addition.
    Returns:
        np.ndarray: Uninitialized buffer of `output_length + lookback` elements.
    Assumptions:
        Owned by a single call; never shared.
    Raises:
        None.
    Side Effects:
        Allocates memory.
    """
    return np.empty(output_length + lookback, dtype=dtype)


def _ensure_array(array: object, *, name: str) -> None:
    if not isinstance(array, np.ndarray):
        raise TypeError(f"{name} must be a numpy.ndarray, got {type(array).__name__}")
    if array.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got ndim={array.ndim}")


def _ensure_writeable(array: np.ndarray, *, name: str) -> None:
    if not array.flags.writeable:
        raise ValueError(f"{name} must be writeable")


__all__ = [
    "INDEX_DTYPE",
    "SUPPORTED_REAL_DTYPES",
    "check_index_output",
    "check_real_output",
    "scratch_buffer",
    "series_dtype",
]
