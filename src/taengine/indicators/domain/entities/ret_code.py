from __future__ import annotations

from enum import Enum


class RetCode(str, Enum):
    """
    Status returned by every buffer-level indicator function.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: .index_range, ...engine.range_validator
    """

    SUCCESS = "success"
    BAD_PARAM = "bad_param"
    OUT_OF_RANGE_PARAM = "out_of_range_param"
