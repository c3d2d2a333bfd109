from __future__ import annotations

from enum import Enum


class MAType(str, Enum):
    """
    Moving-average variants reachable through the `ma` dispatch function.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: ...functions.overlap, ...engine.lookback
    """

    SMA = "sma"
    EMA = "ema"
    WMA = "wma"
    DEMA = "dema"
    TEMA = "tema"
    TRIMA = "trima"
    KAMA = "kama"
    MAMA = "mama"
    T3 = "t3"
