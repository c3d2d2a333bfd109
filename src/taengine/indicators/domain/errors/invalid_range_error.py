from __future__ import annotations

from collections import OrderedDict
from typing import Mapping


class InvalidRangeError(ValueError):
    """
    Raised when a requested index range fails bounds or ordering checks.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ...engine.range_validator, ...application.services.indicator_engine
    """

    def __init__(
        self,
        *,
        indicator_id: str,
        start: int,
        end: int,
        series_length: int,
    ) -> None:
        """
        Build deterministic invalid-range payload and message.

        Args:
            indicator_id: Indicator identifier the range was requested for.
            start: Requested inclusive start index.
            end: Requested exclusive end index.
            series_length: Shortest input series length.
        Returns:
            None.
        Assumptions:
            Raised only by the facade; buffer-level functions report `RetCode` instead.
        Raises:
            None.
        Side Effects:
            Stores ordered details for diagnostics.
        """
        self._details: Mapping[str, object] = OrderedDict(
            [
                ("indicator_id", indicator_id),
                ("start", int(start)),
                ("end", int(end)),
                ("series_length", int(series_length)),
            ]
        )
        super().__init__(
            f"invalid range for {indicator_id}: [{start}, {end}) over {series_length} samples"
        )

    @property
    def details(self) -> Mapping[str, object]:
        return self._details
