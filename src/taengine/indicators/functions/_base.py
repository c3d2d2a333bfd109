"""
Call protocol shared by buffer-level indicator functions.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.engine.range_validator,
  taengine.indicators.engine.lookback, taengine.indicators.engine.numeric

Order of checks for every call: argument types (raise), requested range
(`OUT_OF_RANGE_PARAM`), parameters (`BAD_PARAM`), output capacity
(`OUT_OF_RANGE_PARAM`), then the effective window `[max(start, lookback), end)`.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np

from taengine.indicators.domain.entities import IndexRange, RangeLike, RetCode
from taengine.indicators.domain.errors import InternalInvariantError
from taengine.indicators.engine.numeric import (
    check_index_output,
    check_real_output,
    series_dtype,
)
from taengine.indicators.engine.range_validator import validate_input_range


class ComputeResult(NamedTuple):
    """
    Status and written range of one indicator call.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.indicators.domain.entities.ret_code
    """

    ret_code: RetCode
    out_range: IndexRange

    @property
    def ok(self) -> bool:
        return self.ret_code is RetCode.SUCCESS


def failure(ret_code: RetCode) -> ComputeResult:
    return ComputeResult(ret_code, IndexRange.empty_at(0))


class CallWindow(NamedTuple):
    """
    Effective output window of a call, or the early result that ends it.

    `early` is set when the call must return without running a kernel: an error status,
    or success with an empty window because lookback consumed the whole request.
    `requested_start` keeps the caller start for stages that seed below the window.
    """

    start: int
    end: int
    dtype: np.dtype
    early: ComputeResult | None
    requested_start: int = 0

    @property
    def length(self) -> int:
        return self.end - self.start

    def finish(self, written: int) -> ComputeResult:
        """
        Build the success result after a kernel wrote `written` samples.

        Args:
            written: Count reported by the kernel.
        Returns:
            ComputeResult: Success with `[start, start + written)`.
        Assumptions:
            Kernels write exactly one sample per index of the window.
        Raises:
            InternalInvariantError: If the kernel disagrees with the window length.
        Side Effects:
            None.
        """
        if written != self.length:
            raise InternalInvariantError(
                "kernel output count does not match the effective window",
                start=self.start,
                end=self.end,
                written=written,
            )
        return ComputeResult(RetCode.SUCCESS, IndexRange(self.start, self.start + written))


def open_window(
    *,
    in_range: RangeLike,
    lookback: int,
    inputs: Sequence[tuple[str, np.ndarray]],
    outputs: Sequence[tuple[str, np.ndarray]] = (),
    index_outputs: Sequence[tuple[str, np.ndarray]] = (),
) -> CallWindow:
    """
    Validate a call and compute its effective output window.

    Args:
        in_range: Requested half-open range, tuple, or `None` for the whole series.
        lookback: Lookback of the configuration, `-1` when parameters are invalid.
        inputs: `(name, array)` pairs of real input series.
        outputs: `(name, array)` pairs of real output buffers.
        index_outputs: `(name, array)` pairs of integer output buffers.
    Returns:
        CallWindow: Effective window; `early` is set when no kernel should run.
    Assumptions:
        Nothing is written to outputs here.
    Raises:
        TypeError: On wrong array types or dtypes.
        ValueError: On non-1-D or read-only arrays.
    Side Effects:
        None.
    """
    dtype = series_dtype([array for _, array in inputs], names=[name for name, _ in inputs])
    for name, array in outputs:
        check_real_output(array, name=name, dtype=dtype)
    for name, array in index_outputs:
        check_index_output(array, name=name)

    bounds = validate_input_range(in_range, *(array.shape[0] for _, array in inputs))
    if bounds is None:
        return CallWindow(0, 0, dtype, failure(RetCode.OUT_OF_RANGE_PARAM))
    requested_start, end = bounds

    if lookback < 0:
        return CallWindow(0, 0, dtype, failure(RetCode.BAD_PARAM))

    requested_length = end - requested_start
    for _, array in (*outputs, *index_outputs):
        if array.shape[0] < requested_length:
            return CallWindow(0, 0, dtype, failure(RetCode.OUT_OF_RANGE_PARAM))

    start = max(requested_start, lookback)
    if start >= end:
        empty = ComputeResult(RetCode.SUCCESS, IndexRange.empty_at(start))
        return CallWindow(start, start, dtype, empty, requested_start)
    return CallWindow(start, end, dtype, None, requested_start)


__all__ = ["CallWindow", "ComputeResult", "failure", "open_window"]
