from __future__ import annotations

import numpy as np
import pytest

from taengine.indicators.domain.entities import IndexRange
from taengine.indicators.engine.range_validator import normalize_range, validate_input_range


def test_normalize_range_accepts_index_range_tuple_and_none() -> None:
    assert normalize_range(IndexRange(1, 4), 10) == IndexRange(1, 4)
    assert normalize_range((np.int64(2), np.int64(5)), 10) == IndexRange(2, 5)
    assert normalize_range(None, 7, 5, 9) == IndexRange(0, 5)


def test_normalize_range_rejects_unsupported_shapes() -> None:
    with pytest.raises(TypeError):
        normalize_range([0, 3], 10)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        normalize_range((0.0, 3.0), 10)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("in_range", "lengths", "expected"),
    [
        ((0, 5), (5,), (0, 5)),
        ((2, 2), (5,), (2, 2)),
        ((5, 5), (5,), (5, 5)),
        ((1, 4), (5, 4), (1, 4)),
        (None, (6, 4), (0, 4)),
    ],
)
def test_validate_input_range_accepts_ranges_within_every_input(
    in_range: tuple[int, int] | None,
    lengths: tuple[int, ...],
    expected: tuple[int, int],
) -> None:
    """
    Verify valid half-open ranges pass through unchanged.

    Args:
        in_range: Requested range.
        lengths: Input series lengths.
        expected: Expected `(start, end)` pair.
    Returns:
        None.
    Assumptions:
        Empty ranges are valid; lookback is not applied here.
    Raises:
        AssertionError: If a valid range is rejected.
    Side Effects:
        None.
    """
    assert validate_input_range(in_range, *lengths) == expected


@pytest.mark.parametrize(
    ("in_range", "lengths"),
    [
        ((-1, 3), (5,)),
        ((3, 2), (5,)),
        ((0, 6), (5,)),
        ((0, 5), (5, 4)),
    ],
)
def test_validate_input_range_rejects_bounds_and_ordering_violations(
    in_range: tuple[int, int],
    lengths: tuple[int, ...],
) -> None:
    assert validate_input_range(in_range, *lengths) is None
