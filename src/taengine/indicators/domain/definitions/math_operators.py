"""
Hard indicator definitions for rolling extrema and sums.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.math_operators
"""

from __future__ import annotations

from taengine.indicators.domain.entities import (
    IndicatorDef,
    IndicatorId,
    InputSeries,
    OutputSpec,
)

from ._params import period_param, sorted_defs


def defs() -> tuple[IndicatorDef, ...]:
    items = (
        _rolling("math.max", "Highest value over a specified period", ("value",)),
        _rolling("math.min", "Lowest value over a specified period", ("value",)),
        _rolling(
            "math.maxindex",
            "Index of highest value over a specified period",
            ("value",),
            integer=True,
        ),
        _rolling(
            "math.minindex",
            "Index of lowest value over a specified period",
            ("value",),
            integer=True,
        ),
        _rolling("math.minmax", "Lowest and highest values over a specified period", ("min", "max")),
        _rolling(
            "math.minmaxindex",
            "Indexes of lowest and highest values over a specified period",
            ("min_idx", "max_idx"),
            integer=True,
        ),
        _rolling("math.sum", "Summation", ("value",)),
    )
    return sorted_defs(items)


def _rolling(
    indicator_id: str,
    title: str,
    names: tuple[str, ...],
    *,
    integer: bool = False,
) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=(InputSeries.REAL,),
        params=(period_param(default=30),),
        output=OutputSpec(names=names, integer=integer),
    )


__all__ = ["defs"]
