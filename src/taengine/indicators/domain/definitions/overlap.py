"""
Hard indicator definitions for overlap studies.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.domain.entities.indicator_def,
  taengine.indicators.functions.overlap
"""

from __future__ import annotations

from taengine.indicators.domain.entities import (
    IndicatorDef,
    IndicatorId,
    InputSeries,
    OutputSpec,
)

from ._params import ma_type_param, period_param, real_param, sorted_defs

_REAL = (InputSeries.REAL,)
_VALUE = OutputSpec(names=("value",))


def defs() -> tuple[IndicatorDef, ...]:
    """
    Return hard overlap-study definitions sorted by indicator_id.

    Args:
        None.
    Returns:
        tuple[IndicatorDef, ...]: Immutable ordered definitions.
    Assumptions:
        Parameter names match keyword arguments of `taengine.indicators.functions.overlap`.
    Raises:
        ValueError: If any definition violates domain invariants.
    Side Effects:
        None.
    """
    items = (
        IndicatorDef(
            indicator_id=IndicatorId("overlap.ma"),
            title="Moving Average",
            inputs=_REAL,
            params=(period_param(default=30, minimum=1), ma_type_param()),
            output=_VALUE,
        ),
        _single_period("overlap.sma", "Simple Moving Average", default=30),
        _single_period("overlap.ema", "Exponential Moving Average", default=30),
        _single_period("overlap.wma", "Weighted Moving Average", default=30),
        _single_period("overlap.dema", "Double Exponential Moving Average", default=30),
        _single_period("overlap.tema", "Triple Exponential Moving Average", default=30),
        _single_period("overlap.trima", "Triangular Moving Average", default=30),
        _single_period("overlap.kama", "Kaufman Adaptive Moving Average", default=30),
        IndicatorDef(
            indicator_id=IndicatorId("overlap.mama"),
            title="MESA Adaptive Moving Average",
            inputs=_REAL,
            params=(
                real_param(name="fast_limit", default=0.5, hard_min=0.01, hard_max=0.99),
                real_param(name="slow_limit", default=0.05, hard_min=0.01, hard_max=0.99),
            ),
            output=OutputSpec(names=("mama", "fama")),
        ),
        IndicatorDef(
            indicator_id=IndicatorId("overlap.t3"),
            title="Triple Exponential Moving Average (T3)",
            inputs=_REAL,
            params=(
                period_param(default=5),
                real_param(name="vfactor", default=0.7, hard_min=0.0, hard_max=1.0),
            ),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("overlap.bbands"),
            title="Bollinger Bands",
            inputs=_REAL,
            params=(
                period_param(default=5),
                real_param(name="nbdev_up", default=2.0, hard_min=0.0),
                real_param(name="nbdev_dn", default=2.0, hard_min=0.0),
                ma_type_param(),
            ),
            output=OutputSpec(names=("upper", "middle", "lower")),
        ),
        _single_period("overlap.midpoint", "MidPoint over period", default=14),
        IndicatorDef(
            indicator_id=IndicatorId("overlap.midprice"),
            title="Midpoint Price over period",
            inputs=(InputSeries.HIGH, InputSeries.LOW),
            params=(period_param(default=14),),
            output=_VALUE,
        ),
    )
    return sorted_defs(items)


def _single_period(indicator_id: str, title: str, *, default: int) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=_REAL,
        params=(period_param(default=default),),
        output=_VALUE,
    )


__all__ = ["defs"]
