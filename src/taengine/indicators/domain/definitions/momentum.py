"""
Hard indicator definitions for momentum indicators.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.domain.entities.indicator_def,
  taengine.indicators.functions.momentum
"""

from __future__ import annotations

from taengine.indicators.domain.entities import (
    IndicatorDef,
    IndicatorId,
    InputSeries,
    OutputSpec,
)

from ._params import ma_type_param, period_param, sorted_defs

_REAL = (InputSeries.REAL,)
_HLC = (InputSeries.HIGH, InputSeries.LOW, InputSeries.CLOSE)
_VALUE = OutputSpec(names=("value",))
_MACD_OUTPUT = OutputSpec(names=("macd", "signal", "hist"))
_FAST_STOCH_OUTPUT = OutputSpec(names=("fastk", "fastd"))


def defs() -> tuple[IndicatorDef, ...]:
    """
    Return hard momentum definitions sorted by indicator_id.

    Args:
        None.
    Returns:
        tuple[IndicatorDef, ...]: Immutable ordered definitions.
    Assumptions:
        Parameter names match keyword arguments of `taengine.indicators.functions.momentum`.
    Raises:
        ValueError: If any definition violates domain invariants.
    Side Effects:
        None.
    """
    fast = period_param(name="fast_period", default=12)
    slow = period_param(name="slow_period", default=26)
    signal = period_param(name="signal_period", default=9, minimum=1)

    items = (
        IndicatorDef(
            indicator_id=IndicatorId("momentum.apo"),
            title="Absolute Price Oscillator",
            inputs=_REAL,
            params=(fast, slow, ma_type_param()),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.ppo"),
            title="Percentage Price Oscillator",
            inputs=_REAL,
            params=(fast, slow, ma_type_param()),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.macd"),
            title="Moving Average Convergence/Divergence",
            inputs=_REAL,
            params=(fast, slow, signal),
            output=_MACD_OUTPUT,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.macdext"),
            title="MACD with controllable MA type",
            inputs=_REAL,
            params=(
                fast,
                ma_type_param(name="fast_ma_type"),
                slow,
                ma_type_param(name="slow_ma_type"),
                signal,
                ma_type_param(name="signal_ma_type"),
            ),
            output=_MACD_OUTPUT,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.macdfix"),
            title="Moving Average Convergence/Divergence Fix 12/26",
            inputs=_REAL,
            params=(signal,),
            output=_MACD_OUTPUT,
        ),
        _real_period("momentum.trix", "1-day Rate-Of-Change of a Triple Smooth EMA", 30, 1),
        _real_period("momentum.rsi", "Relative Strength Index", 14, 2),
        _real_period("momentum.cmo", "Chande Momentum Oscillator", 14, 2),
        _real_period("momentum.mom", "Momentum", 10, 1),
        _real_period("momentum.roc", "Rate of change: ((price/prevPrice)-1)*100", 10, 1),
        _real_period("momentum.rocp", "Rate of change Percentage: (price-prevPrice)/prevPrice", 10, 1),
        _real_period("momentum.rocr", "Rate of change ratio: (price/prevPrice)", 10, 1),
        _real_period("momentum.rocr100", "Rate of change ratio 100 scale: (price/prevPrice)*100", 10, 1),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.willr"),
            title="Williams' %R",
            inputs=_HLC,
            params=(period_param(default=14),),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.aroon"),
            title="Aroon",
            inputs=(InputSeries.HIGH, InputSeries.LOW),
            params=(period_param(default=14),),
            output=OutputSpec(names=("down", "up")),
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.aroonosc"),
            title="Aroon Oscillator",
            inputs=(InputSeries.HIGH, InputSeries.LOW),
            params=(period_param(default=14),),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.stochf"),
            title="Stochastic Fast",
            inputs=_HLC,
            params=(
                period_param(name="fastk_period", default=5, minimum=1),
                period_param(name="fastd_period", default=3, minimum=1),
                ma_type_param(name="fastd_ma_type"),
            ),
            output=_FAST_STOCH_OUTPUT,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.stoch"),
            title="Stochastic",
            inputs=_HLC,
            params=(
                period_param(name="fastk_period", default=5, minimum=1),
                period_param(name="slowk_period", default=3, minimum=1),
                ma_type_param(name="slowk_ma_type"),
                period_param(name="slowd_period", default=3, minimum=1),
                ma_type_param(name="slowd_ma_type"),
            ),
            output=OutputSpec(names=("slowk", "slowd")),
        ),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.stochrsi"),
            title="Stochastic Relative Strength Index",
            inputs=_REAL,
            params=(
                period_param(default=14),
                period_param(name="fastk_period", default=5, minimum=1),
                period_param(name="fastd_period", default=3, minimum=1),
                ma_type_param(name="fastd_ma_type"),
            ),
            output=_FAST_STOCH_OUTPUT,
        ),
        _hlc_period("momentum.cci", "Commodity Channel Index", minimum=2),
        IndicatorDef(
            indicator_id=IndicatorId("momentum.mfi"),
            title="Money Flow Index",
            inputs=(*_HLC, InputSeries.VOLUME),
            params=(period_param(default=14),),
            output=_VALUE,
        ),
        _hl_period("momentum.plus_dm", "Plus Directional Movement"),
        _hl_period("momentum.minus_dm", "Minus Directional Movement"),
        _hlc_period("momentum.plus_di", "Plus Directional Indicator", minimum=1),
        _hlc_period("momentum.minus_di", "Minus Directional Indicator", minimum=1),
        _hlc_period("momentum.dx", "Directional Movement Index", minimum=2),
        _hlc_period("momentum.adx", "Average Directional Movement Index", minimum=2),
        _hlc_period("momentum.adxr", "Average Directional Movement Index Rating", minimum=2),
    )
    return sorted_defs(items)


def _real_period(indicator_id: str, title: str, default: int, minimum: int) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=_REAL,
        params=(period_param(default=default, minimum=minimum),),
        output=_VALUE,
    )


def _hl_period(indicator_id: str, title: str) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=(InputSeries.HIGH, InputSeries.LOW),
        params=(period_param(default=14, minimum=1),),
        output=_VALUE,
    )


def _hlc_period(indicator_id: str, title: str, *, minimum: int) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=_HLC,
        params=(period_param(default=14, minimum=minimum),),
        output=_VALUE,
    )


__all__ = ["defs"]
