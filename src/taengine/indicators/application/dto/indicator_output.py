from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import numpy as np

from taengine.indicators.domain.entities import IndexRange, IndicatorId


@dataclass(frozen=True, slots=True)
class IndicatorOutput:
    """
    Whole-series indicator result aligned to input indices.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ..services.indicator_engine, ...domain.entities.output_spec
    """

    indicator_id: IndicatorId
    values: Mapping[str, np.ndarray]
    out_range: IndexRange
    lookback: int

    def __post_init__(self) -> None:
        """
        Validate output alignment invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Every output array spans the full input length; samples outside `out_range`
            hold NaN (real outputs) or -1 (index outputs).
        Raises:
            ValueError: If no outputs are given, arrays are not 1-D, or lengths differ.
        Side Effects:
            None.
        """
        if not self.values:
            raise ValueError("IndicatorOutput requires at least one output series")

        lengths = set()
        for name, array in self.values.items():
            if array.ndim != 1:
                raise ValueError(f"IndicatorOutput series {name!r} must be one-dimensional")
            lengths.add(array.shape[0])
        if len(lengths) != 1:
            raise ValueError("IndicatorOutput series must share one length")
        if self.out_range.end > lengths.pop():
            raise ValueError("IndicatorOutput out_range exceeds series length")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.values)

    def __getitem__(self, name: str) -> np.ndarray:
        return self.values[name]
