from __future__ import annotations

from collections import OrderedDict
from typing import Mapping


class InternalInvariantError(RuntimeError):
    """
    Raised when composed computation stages disagree on alignment or length.

    This is never an expected outcome of invalid user input; those are reported as
    `RetCode` values. Reaching it means a lookback or stage composition is broken.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ...functions._base, ...engine.lookback
    """

    def __init__(self, message: str, **details: int) -> None:
        """
        Build error with ordered integer diagnostics.

        Args:
            message: Human-readable invariant description.
            **details: Integer diagnostics such as stage begin indices and lengths.
        Returns:
            None.
        Assumptions:
            Keyword order is preserved by the interpreter.
        Raises:
            None.
        Side Effects:
            None.
        """
        self._details: Mapping[str, int] = OrderedDict(
            (key, int(value)) for key, value in details.items()
        )
        super().__init__(message)

    @property
    def details(self) -> Mapping[str, int]:
        return self._details
