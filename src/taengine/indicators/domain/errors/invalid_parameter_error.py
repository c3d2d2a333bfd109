from __future__ import annotations

from collections import OrderedDict
from typing import Any, Mapping


class InvalidParameterError(ValueError):
    """
    Raised when indicator parameters are outside their valid domain.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ...engine.lookback, ...application.services.indicator_engine
    """

    def __init__(self, *, indicator_id: str, params: Mapping[str, Any]) -> None:
        """
        Build deterministic invalid-parameter payload and message.

        Args:
            indicator_id: Indicator identifier.
            params: Effective parameter mapping that was rejected.
        Returns:
            None.
        Assumptions:
            Parameter keys are rendered in sorted order for stable messages.
        Raises:
            None.
        Side Effects:
            Stores ordered details for diagnostics.
        """
        ordered_params = OrderedDict((key, params[key]) for key in sorted(params))
        self._details: Mapping[str, Any] = OrderedDict(
            [
                ("indicator_id", indicator_id),
                ("params", ordered_params),
            ]
        )
        rendered = ", ".join(f"{key}={value!r}" for key, value in ordered_params.items())
        super().__init__(f"invalid parameters for {indicator_id}: {rendered}")

    @property
    def details(self) -> Mapping[str, Any]:
        return self._details
