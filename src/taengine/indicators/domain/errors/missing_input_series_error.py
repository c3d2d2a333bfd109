from __future__ import annotations

from collections import OrderedDict
from typing import Mapping


class MissingInputSeriesError(ValueError):
    """
    Raised when the facade is not given every input series an indicator requires.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ..entities.indicator_def, ...application.services.indicator_engine
    """

    def __init__(self, *, indicator_id: str, missing: tuple[str, ...]) -> None:
        """
        Build deterministic missing-series payload and message.

        Args:
            indicator_id: Indicator identifier.
            missing: Names of absent input series in definition order.
        Returns:
            None.
        Assumptions:
            `missing` is non-empty.
        Raises:
            None.
        Side Effects:
            Stores ordered details for diagnostics.
        """
        self._details: Mapping[str, object] = OrderedDict(
            [
                ("indicator_id", indicator_id),
                ("missing", tuple(missing)),
            ]
        )
        super().__init__(f"missing input series for {indicator_id}: {', '.join(missing)}")

    @property
    def details(self) -> Mapping[str, object]:
        return self._details
