from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    cci_kernel,
    directional_index_kernel,
    dx_kernel,
)


def test_dx_kernel_writes_zero_until_first_defined_value() -> None:
    """
    Verify DX over flat bars is 0 and switches to 100 once only up moves exist.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Period 2, begin 0: the first output is at index 2.
    Raises:
        AssertionError: If the undefined-DX convention regresses.
    Side Effects:
        None.
    """
    high = np.asarray([1.0, 1.0, 1.0, 1.0, 3.0, 4.0])
    low = np.asarray([1.0, 1.0, 1.0, 1.0, 2.0, 3.0])
    close = np.asarray([1.0, 1.0, 1.0, 1.0, 2.5, 3.5])
    out = np.full(4, np.nan)

    written = dx_kernel(high, low, close, 0, 2, 6, 2, out)

    assert written == 4
    np.testing.assert_array_equal(out, [0.0, 0.0, 100.0, 100.0])


def test_directional_index_kernel_smooths_range_and_movement_together() -> None:
    high = np.asarray([1.0, 1.0, 1.0, 1.0, 3.0, 4.0])
    low = np.asarray([1.0, 1.0, 1.0, 1.0, 2.0, 3.0])
    close = np.asarray([1.0, 1.0, 1.0, 1.0, 2.5, 3.5])
    plus = np.full(4, np.nan)
    minus = np.full(4, np.nan)

    directional_index_kernel(high, low, close, 0, 2, 6, 2, False, plus)
    directional_index_kernel(high, low, close, 0, 2, 6, 2, True, minus)

    np.testing.assert_allclose(plus, [0.0, 0.0, 100.0, 80.0])
    np.testing.assert_array_equal(minus, np.zeros(4))


def test_cci_kernel_scales_distance_by_mean_deviation() -> None:
    prices = np.asarray([1.0, 2.0, 6.0])
    out = np.full(1, np.nan)

    written = cci_kernel(prices, prices, prices, 2, 3, 3, out)

    assert written == 1
    # mean 3, mean deviation 2, distance 3
    assert out[0] == 3.0 / (0.015 * 2.0)
