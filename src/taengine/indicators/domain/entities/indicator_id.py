from __future__ import annotations

import re
from dataclasses import dataclass

_ID_PATTERN = re.compile(r"(?P<family>[a-z][a-z0-9_]*)\.(?P<name>[a-z0-9][a-z0-9_]*)")


@dataclass(frozen=True, slots=True)
class IndicatorId:
    """
    Lowercase `family.name` key of an indicator, e.g. `momentum.rsi`.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: .indicator_def, ...application.services.indicator_engine
    """

    value: str

    def __post_init__(self) -> None:
        """
        Lowercase the key and check it has the `family.name` shape.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Family and name use letters, digits and underscores; the family starts with
            a letter.
        Raises:
            ValueError: If the normalized key does not match `family.name`.
        Side Effects:
            Replaces `value` with its stripped lowercase form.
        """
        normalized = self.value.strip().lower()
        if _ID_PATTERN.fullmatch(normalized) is None:
            raise ValueError(f"IndicatorId must look like 'family.name', got {self.value!r}")
        object.__setattr__(self, "value", normalized)

    @property
    def family(self) -> str:
        return self.value.partition(".")[0]

    @property
    def name(self) -> str:
        return self.value.partition(".")[2]

    def __str__(self) -> str:
        return self.value
