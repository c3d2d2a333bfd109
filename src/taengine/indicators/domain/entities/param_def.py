from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real

ParamValue = float | int | str


class ParamKind(str, Enum):
    """
    Value kind of a declared parameter; selects the check done by `ParamDef.accepts`.

    `INT` and `FLOAT` are numeric kinds checked against optional bounds; `ENUM` takes
    one of the declared string choices such as moving-average selectors.
    """

    INT = "int"
    FLOAT = "float"
    ENUM = "enum"


@dataclass(frozen=True, slots=True)
class ParamDef:
    """
    Declared name, kind, default and documented domain of one indicator parameter.

    Integer and float parameters carry optional inclusive bounds; enum parameters carry
    the accepted string values. Indicator functions remain the final authority and
    report out-of-domain values as `RetCode.BAD_PARAM`.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: .indicator_def, ..definitions._params
    """

    name: str
    kind: ParamKind
    default: ParamValue
    hard_min: float | int | None = None
    hard_max: float | int | None = None
    enum_values: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """
        Normalize the declaration and reject inconsistent ones.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            The default must itself satisfy `accepts`.
        Raises:
            ValueError: On an empty name, inverted bounds, bounds on an enum, missing or
                duplicate enum values, enum values on a numeric kind, or a default
                outside the declared domain.
        Side Effects:
            Strips spaces from `name` and enum values.
        """
        name = self.name.strip()
        if not name:
            raise ValueError("ParamDef requires a non-empty name")
        object.__setattr__(self, "name", name)

        if self.kind is ParamKind.ENUM:
            if self.hard_min is not None or self.hard_max is not None:
                raise ValueError(f"enum parameter {name!r} cannot declare numeric bounds")
            object.__setattr__(self, "enum_values", _normalized_choices(name, self.enum_values))
        else:
            if self.enum_values is not None:
                raise ValueError(f"numeric parameter {name!r} cannot declare enum_values")
            if (
                self.hard_min is not None
                and self.hard_max is not None
                and self.hard_min > self.hard_max
            ):
                raise ValueError(f"parameter {name!r} requires hard_min <= hard_max")

        if not self.accepts(self.default):
            raise ValueError(f"default {self.default!r} of {name!r} is outside its domain")

    def accepts(self, value: object) -> bool:
        """
        Tell whether a caller-supplied value lies inside the declared domain.

        Args:
            value: Candidate parameter value.
        Returns:
            bool: `True` when the value has the right kind and respects the bounds.
        Assumptions:
            Booleans are never numeric parameters; numpy scalars count as numbers.
        Raises:
            None.
        Side Effects:
            None.
        """
        if isinstance(value, bool):
            return False
        if self.kind is ParamKind.ENUM:
            return isinstance(value, str) and value in (self.enum_values or ())
        numeric_type = Integral if self.kind is ParamKind.INT else Real
        if not isinstance(value, numeric_type):
            return False
        if self.hard_min is not None and value < self.hard_min:
            return False
        return self.hard_max is None or value <= self.hard_max


def _normalized_choices(name: str, raw: tuple[str, ...] | None) -> tuple[str, ...]:
    if not raw:
        raise ValueError(f"enum parameter {name!r} requires enum_values")
    choices = tuple(item.strip() for item in raw)
    if not all(choices):
        raise ValueError(f"enum parameter {name!r} has an empty choice")
    if len(set(choices)) != len(choices):
        raise ValueError(f"enum parameter {name!r} has duplicate choices")
    return choices
