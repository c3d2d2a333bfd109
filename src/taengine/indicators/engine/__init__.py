"""
Windowed-computation engine core shared by every indicator function.

Docs: docs/architecture/indicators/windowed-engine-core.md
"""

from .lookback import INVALID_LOOKBACK, MAX_PERIOD, coerce_ma_type
from .numeric import (
    INDEX_DTYPE,
    SUPPORTED_REAL_DTYPES,
    check_index_output,
    check_real_output,
    scratch_buffer,
    series_dtype,
)
from .range_validator import normalize_range, validate_input_range

__all__ = [
    "INDEX_DTYPE",
    "INVALID_LOOKBACK",
    "MAX_PERIOD",
    "SUPPORTED_REAL_DTYPES",
    "check_index_output",
    "check_real_output",
    "coerce_ma_type",
    "normalize_range",
    "scratch_buffer",
    "series_dtype",
    "validate_input_range",
]
