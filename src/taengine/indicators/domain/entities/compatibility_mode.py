from __future__ import annotations

from enum import Enum


class CompatibilityMode(str, Enum):
    """
    Warm-up alignment convention used by recursive smoothers.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.platform.config.compatibility_settings

    `METASTOCK` reproduces the legacy charting package: exponential averages are
    seeded with the first warm-up sample and RSI/CMO emit one sample earlier.
    """

    DEFAULT = "default"
    METASTOCK = "metastock"
