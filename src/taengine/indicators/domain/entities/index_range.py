from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IndexRange:
    """
    Half-open `[start, end)` range of series indices.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ...engine.range_validator, ...functions
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """
        Coerce bounds to plain ints.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Ordering is validated by the range validator, not here, so that invalid
            requests can still be represented and reported as a status.
        Raises:
            TypeError: If a bound is not integral.
        Side Effects:
            Normalizes numpy integer bounds into `int`.
        """
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, bool) or not hasattr(value, "__index__"):
                raise TypeError(f"IndexRange.{name} must be an int, got {type(value).__name__}")
            object.__setattr__(self, name, int(value.__index__()))

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def as_slice(self) -> slice:
        return slice(self.start, self.end)

    @classmethod
    def empty_at(cls, index: int) -> IndexRange:
        """
        Build an empty range positioned at `index`.

        Args:
            index: Position of the empty range.
        Returns:
            IndexRange: `[index, index)`.
        Assumptions:
            None.
        Raises:
            None.
        Side Effects:
            None.
        """
        return cls(start=index, end=index)


RangeLike = IndexRange | tuple[int, int] | None
