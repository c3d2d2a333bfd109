from __future__ import annotations

from enum import Enum


class UnstableFunc(str, Enum):
    """
    Indicator families whose lookback can be extended by an unstable period.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.platform.config.compatibility_settings, ...engine.lookback

    `ALL` is accepted only by setters and addresses every family at once.
    """

    ADX = "adx"
    ATR = "atr"
    CMO = "cmo"
    DX = "dx"
    EMA = "ema"
    KAMA = "kama"
    MAMA = "mama"
    MFI = "mfi"
    MINUS_DI = "minus_di"
    MINUS_DM = "minus_dm"
    NATR = "natr"
    PLUS_DI = "plus_di"
    PLUS_DM = "plus_dm"
    RSI = "rsi"
    T3 = "t3"
    ALL = "all"

    @classmethod
    def families(cls) -> tuple["UnstableFunc", ...]:
        """
        Return concrete families in declaration order, without `ALL`.

        Args:
            None.
        Returns:
            tuple[UnstableFunc, ...]: Concrete indicator families.
        Assumptions:
            `ALL` is the only aggregate member.
        Raises:
            None.
        Side Effects:
            None.
        """
        return tuple(member for member in cls if member is not cls.ALL)
