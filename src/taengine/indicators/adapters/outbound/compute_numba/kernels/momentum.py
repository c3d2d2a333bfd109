"""
Numba kernels for momentum and rate-of-change indicators.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.momentum
"""

from __future__ import annotations

import numba as nb
import numpy as np

from ._common import PERCENT

CHANGE_DIFF = 0
CHANGE_ROC = 1
CHANGE_ROCP = 2
CHANGE_ROCR = 3
CHANGE_ROCR100 = 4


@nb.njit(cache=True)
def change_kernel(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    mode: int,
    out: np.ndarray,
) -> int:
    """
    Write the change of each sample against the sample `period` steps earlier.

    Args:
        values: Input series.
        start: First output index, `>= period`.
        end: Exclusive end index.
        period: Distance to the reference sample.
        mode: One of `CHANGE_DIFF` (x - prev), `CHANGE_ROC` ((x / prev - 1) * 100),
            `CHANGE_ROCP` ((x - prev) / prev), `CHANGE_ROCR` (x / prev) or
            `CHANGE_ROCR100` (x / prev * 100).
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Ratio modes write 0 when the reference sample is 0.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    out_idx = 0
    for today in range(start, end):
        current = float(values[today])
        previous = float(values[today - period])
        if mode == CHANGE_DIFF:
            out[out_idx] = current - previous
        elif previous == 0.0:
            out[out_idx] = 0.0
        elif mode == CHANGE_ROC:
            out[out_idx] = (current / previous - 1.0) * PERCENT
        elif mode == CHANGE_ROCP:
            out[out_idx] = (current - previous) / previous
        elif mode == CHANGE_ROCR:
            out[out_idx] = current / previous
        else:
            out[out_idx] = (current / previous) * PERCENT
        out_idx += 1
    return out_idx


__all__ = [
    "CHANGE_DIFF",
    "CHANGE_ROC",
    "CHANGE_ROCP",
    "CHANGE_ROCR",
    "CHANGE_ROCR100",
    "change_kernel",
]
