"""
Windowed technical-analysis indicator engine on numpy buffers.

Docs: docs/architecture/indicators/windowed-engine-core.md
"""

from taengine.indicators.application.dto import IndicatorOutput
from taengine.indicators.application.services import IndicatorEngine
from taengine.indicators.domain.entities import (
    CompatibilityMode,
    IndexRange,
    MAType,
    RetCode,
    UnstableFunc,
)
from taengine.indicators.functions import ComputeResult
from taengine.platform.config import (
    CompatibilitySettings,
    get_compatibility_mode,
    get_unstable_period,
    set_compatibility_mode,
    set_unstable_period,
)

__all__ = [
    "CompatibilityMode",
    "CompatibilitySettings",
    "ComputeResult",
    "IndexRange",
    "IndicatorEngine",
    "IndicatorOutput",
    "MAType",
    "RetCode",
    "UnstableFunc",
    "get_compatibility_mode",
    "get_unstable_period",
    "set_compatibility_mode",
    "set_unstable_period",
]
