from __future__ import annotations

from collections import OrderedDict
from typing import Mapping


class UnknownIndicatorError(LookupError):
    """
    Raised when an indicator id is not available in the definitions registry.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ..entities.indicator_id, ...application.services.indicator_engine
    """

    def __init__(self, *, indicator_id: str) -> None:
        self._details: Mapping[str, str] = OrderedDict([("indicator_id", indicator_id)])
        super().__init__(f"unknown indicator: {indicator_id}")

    @property
    def details(self) -> Mapping[str, str]:
        return self._details
