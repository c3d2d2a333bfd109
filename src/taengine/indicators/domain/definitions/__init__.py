"""
Indicators hard-definition registry grouped by function family.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.domain.entities.indicator_def
"""

from __future__ import annotations

from taengine.indicators.domain.entities import IndicatorDef

from .math_operators import defs as math_operator_defs
from .momentum import defs as momentum_defs
from .overlap import defs as overlap_defs
from .price_transform import defs as price_transform_defs
from .statistic import statistic_defs, volatility_defs


def all_defs() -> tuple[IndicatorDef, ...]:
    """
    Return the full hard-definition set in stable cross-group order.

    Args:
        None.
    Returns:
        tuple[IndicatorDef, ...]: Immutable concatenation ordered as
            overlap, momentum, math, statistic, volatility, price.
    Assumptions:
        Each group-level function already returns deterministic tuples.
    Raises:
        None.
    Side Effects:
        None.
    """
    return (
        *overlap_defs(),
        *momentum_defs(),
        *math_operator_defs(),
        *statistic_defs(),
        *volatility_defs(),
        *price_transform_defs(),
    )


__all__ = ["all_defs"]
