"""
Shared parameter builders for hard indicator definitions.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.domain.entities.param_def
"""

from __future__ import annotations

from taengine.indicators.domain.entities import IndicatorDef, MAType, ParamDef, ParamKind

MAX_PERIOD = 100_000
MA_TYPE_VALUES = tuple(member.value for member in MAType)


def period_param(*, default: int, minimum: int = 2, name: str = "period") -> ParamDef:
    """
    Build an integer period parameter.

    Args:
        default: Default period.
        minimum: Smallest accepted period.
        name: Parameter name as accepted by the indicator function.
    Returns:
        ParamDef: Integer parameter bounded by `[minimum, MAX_PERIOD]`.
    Assumptions:
        Bounds mirror the lookback functions, which report violations as `-1`.
    Raises:
        ValueError: If ParamDef invariants are violated.
    Side Effects:
        None.
    """
    return ParamDef(
        name=name,
        kind=ParamKind.INT,
        default=default,
        hard_min=minimum,
        hard_max=MAX_PERIOD,
    )


def real_param(
    *,
    name: str,
    default: float,
    hard_min: float | None = None,
    hard_max: float | None = None,
) -> ParamDef:
    return ParamDef(
        name=name,
        kind=ParamKind.FLOAT,
        default=default,
        hard_min=hard_min,
        hard_max=hard_max,
    )


def ma_type_param(*, name: str = "ma_type", default: MAType = MAType.SMA) -> ParamDef:
    return ParamDef(
        name=name,
        kind=ParamKind.ENUM,
        default=default.value,
        enum_values=MA_TYPE_VALUES,
    )


def sorted_defs(items: tuple[IndicatorDef, ...]) -> tuple[IndicatorDef, ...]:
    return tuple(sorted(items, key=lambda item: item.indicator_id.value))


__all__ = ["MAX_PERIOD", "ma_type_param", "period_param", "real_param", "sorted_defs"]
