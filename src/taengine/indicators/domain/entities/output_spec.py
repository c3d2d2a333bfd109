from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class OutputSpec:
    """
    Named output buffers of an indicator and the padding written outside its range.

    Real outputs are padded with NaN; index outputs (`integer=True`) hold input
    positions and are padded with -1.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: .indicator_def, ...application.services.indicator_engine
    """

    names: tuple[str, ...]
    integer: bool = False

    def __post_init__(self) -> None:
        """
        Strip output names and reject empty or repeated ones.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Name order is the positional order of the function output buffers.
        Raises:
            ValueError: If no names are provided or a name is blank or duplicated.
        Side Effects:
            Replaces `names` with the stripped tuple.
        """
        stripped = tuple(name.strip() for name in self.names)
        if not stripped:
            raise ValueError("OutputSpec requires at least one output name")
        if not all(stripped):
            raise ValueError("OutputSpec names must be non-empty")
        if len(set(stripped)) != len(stripped):
            raise ValueError(f"OutputSpec names must be unique: {stripped}")
        object.__setattr__(self, "names", stripped)

    @property
    def fill_value(self) -> float | int:
        return -1 if self.integer else float("nan")

    def allocate(
        self,
        length: int,
        *,
        real_dtype: np.dtype,
        index_dtype: np.dtype,
    ) -> dict[str, np.ndarray]:
        """
        Allocate one padded full-length buffer per output name.

        Args:
            length: Input series length.
            real_dtype: Element type of real outputs, matching the inputs.
            index_dtype: Element type of index outputs.
        Returns:
            dict[str, np.ndarray]: Buffers keyed by output name, in declaration order.
        Assumptions:
            Callers write computed samples into a slice starting at the output range.
        Raises:
            None.
        Side Effects:
            Allocates memory.
        """
        dtype = index_dtype if self.integer else real_dtype
        return {name: np.full(length, self.fill_value, dtype=dtype) for name in self.names}
