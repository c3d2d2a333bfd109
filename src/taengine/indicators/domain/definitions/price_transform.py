"""
Hard indicator definitions for price transforms.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.price_transform
"""

from __future__ import annotations

from taengine.indicators.domain.entities import (
    IndicatorDef,
    IndicatorId,
    InputSeries,
    OutputSpec,
)

from ._params import sorted_defs

_VALUE = OutputSpec(names=("value",))
_HIGH_LOW = (InputSeries.HIGH, InputSeries.LOW)


def defs() -> tuple[IndicatorDef, ...]:
    """
    Return hard price-transform definitions sorted by indicator_id.

    Args:
        None.
    Returns:
        tuple[IndicatorDef, ...]: Immutable ordered definitions.
    Assumptions:
        Price transforms take no parameters and have a zero lookback.
    Raises:
        ValueError: If any definition violates domain invariants.
    Side Effects:
        None.
    """
    items = (
        _transform(
            "price.avgprice",
            "Average Price",
            (InputSeries.OPEN, *_HIGH_LOW, InputSeries.CLOSE),
        ),
        _transform("price.medprice", "Median Price", _HIGH_LOW),
        _transform("price.typprice", "Typical Price", (*_HIGH_LOW, InputSeries.CLOSE)),
        _transform("price.wclprice", "Weighted Close Price", (*_HIGH_LOW, InputSeries.CLOSE)),
    )
    return sorted_defs(items)


def _transform(
    indicator_id: str,
    title: str,
    inputs: tuple[InputSeries, ...],
) -> IndicatorDef:
    return IndicatorDef(
        indicator_id=IndicatorId(indicator_id),
        title=title,
        inputs=inputs,
        params=(),
        output=_VALUE,
    )


__all__ = ["defs"]
