"""
Hard indicator definitions for rolling statistics and volatility.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.statistic,
  taengine.indicators.functions.volatility
"""

from __future__ import annotations

from taengine.indicators.domain.entities import (
    IndicatorDef,
    IndicatorId,
    InputSeries,
    OutputSpec,
)

from ._params import period_param, real_param, sorted_defs

_HLC = (InputSeries.HIGH, InputSeries.LOW, InputSeries.CLOSE)
_VALUE = OutputSpec(names=("value",))


def statistic_defs() -> tuple[IndicatorDef, ...]:
    items = (
        IndicatorDef(
            indicator_id=IndicatorId("statistic.var"),
            title="Variance",
            inputs=(InputSeries.REAL,),
            params=(period_param(default=5, minimum=1),),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("statistic.stddev"),
            title="Standard Deviation",
            inputs=(InputSeries.REAL,),
            params=(period_param(default=5), real_param(name="nbdev", default=1.0)),
            output=_VALUE,
        ),
        _real_period("statistic.avgdev", "Average Deviation"),
        _real_period("statistic.linearreg", "Linear Regression"),
        _real_period("statistic.linearreg_slope", "Linear Regression Slope"),
        _real_period("statistic.linearreg_intercept", "Linear Regression Intercept"),
        _real_period("statistic.linearreg_angle", "Linear Regression Angle"),
        _real_period("statistic.tsf", "Time Series Forecast"),
    )
    return sorted_defs(items)


def volatility_defs() -> tuple[IndicatorDef, ...]:
    """
    Return hard volatility definitions sorted by indicator_id.

    Args:
        None.
    Returns:
        tuple[IndicatorDef, ...]: Immutable ordered definitions.
    Assumptions:
        ATR and NATR accept period 1, which degenerates to the true range.
    Raises:
        ValueError: If any definition violates domain invariants.
    Side Effects:
        None.
    """
    items = (
        IndicatorDef(
            indicator_id=IndicatorId("volatility.trange"),
            title="True Range",
            inputs=_HLC,
            params=(),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("volatility.atr"),
            title="Average True Range",
            inputs=_HLC,
            params=(period_param(default=14, minimum=1),),
            output=_VALUE,
        ),
        IndicatorDef(
            indicator_id=IndicatorId("volatility.natr"),
            title="Normalized Average True Range",
            inputs=_HLC,
            params=(period_param(default=14, minimum=1),),
            output=_VALUE,
        ),
    )
    return sorted_defs(items)


def _real_period(indicator_id: str, title: str) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=(InputSeries.REAL,),
        params=(period_param(default=14),),
        output=_VALUE,
    )


__all__ = ["statistic_defs", "volatility_defs"]
