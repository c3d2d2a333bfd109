"""
Requested-range validation against raw input buffer lengths.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.domain.entities.index_range,
  taengine.indicators.functions._base
"""

from __future__ import annotations

from taengine.indicators.domain.entities import IndexRange, RangeLike


def normalize_range(in_range: RangeLike, *lengths: int) -> IndexRange:
    """
    Turn a caller range argument into an `IndexRange`.

    Args:
        in_range: `IndexRange`, `(start, end)` tuple, or `None` for the whole series.
        *lengths: Input series lengths; `None` expands to `[0, min(lengths))`.
    Returns:
        IndexRange: Unvalidated half-open range.
    Assumptions:
        At least one length is given when `in_range` is `None`.
    Raises:
        TypeError: If `in_range` has an unsupported shape or non-integral bounds.
    Side Effects:
        None.
    """
    if in_range is None:
        return IndexRange(0, min(lengths) if lengths else 0)
    if isinstance(in_range, IndexRange):
        return in_range
    if isinstance(in_range, tuple) and len(in_range) == 2:
        return IndexRange(in_range[0], in_range[1])
    raise TypeError(
        f"in_range must be IndexRange, (start, end) tuple or None, got {type(in_range).__name__}"
    )


def validate_input_range(in_range: RangeLike, *lengths: int) -> tuple[int, int] | None:
    """
    Bounds-check a half-open range against every input length.

    Args:
        in_range: Requested range, see `normalize_range`.
        *lengths: Lengths of every input series the indicator reads.
    Returns:
        tuple[int, int] | None: `(start, end)` when valid, otherwise `None`.
    Assumptions:
        Lookback is not applied here; an empty range (`start == end`) is valid.
    Raises:
        TypeError: If `in_range` has an unsupported shape.
    Side Effects:
        None.
    """
    requested = normalize_range(in_range, *lengths)
    start, end = requested.start, requested.end
    if start < 0 or start > end:
        return None
    for length in lengths:
        if end > length:
            return None
    return start, end


__all__ = ["normalize_range", "validate_input_range"]
