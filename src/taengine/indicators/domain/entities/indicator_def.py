from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .indicator_id import IndicatorId
from .output_spec import OutputSpec
from .param_def import ParamDef


class InputSeries(str, Enum):
    """
    Named price series an indicator reads, keyed by the facade input mapping.

    The order of `IndicatorDef.inputs` is the positional order of the function
    arguments, so `(HIGH, LOW, CLOSE)` maps to `fn(high, low, close, ...)`.
    """

    REAL = "real"
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    VOLUME = "volume"


@dataclass(frozen=True, slots=True)
class IndicatorDef:
    """
    Full domain definition of an indicator: inputs, parameters and outputs.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: .param_def, ..definitions, ...application.services.indicator_engine
    """

    indicator_id: IndicatorId
    title: str
    inputs: tuple[InputSeries, ...]
    params: tuple[ParamDef, ...]
    output: OutputSpec

    def __post_init__(self) -> None:
        """
        Validate indicator definition consistency.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Input series order matches the positional input order of the indicator function.
        Raises:
            ValueError: If title is blank, inputs are empty or duplicated, or parameter
                names collide.
        Side Effects:
            Normalizes title by stripping spaces.
        """
        if self.indicator_id is None:  # type: ignore[truthy-bool]
            raise ValueError("IndicatorDef requires indicator_id")
        if self.output is None:  # type: ignore[truthy-bool]
            raise ValueError("IndicatorDef requires output")

        normalized_title = self.title.strip()
        object.__setattr__(self, "title", normalized_title)
        if not normalized_title:
            raise ValueError("IndicatorDef requires a non-empty title")

        if len(self.inputs) == 0:
            raise ValueError("IndicatorDef requires at least one input series")
        if len(set(self.inputs)) != len(self.inputs):
            raise ValueError("IndicatorDef input series must be unique")

        param_names = [param.name for param in self.params]
        if len(set(param_names)) != len(param_names):
            raise ValueError("IndicatorDef parameter names must be unique")

    def param(self, name: str) -> ParamDef:
        """
        Return the parameter definition with the given name.

        Args:
            name: Parameter name.
        Returns:
            ParamDef: Matching parameter definition.
        Assumptions:
            Names are unique within a definition.
        Raises:
            KeyError: If the definition has no such parameter.
        Side Effects:
            None.
        """
        for param in self.params:
            if param.name == name:
                return param
        raise KeyError(name)

    def defaults(self) -> dict[str, float | int | str]:
        return {param.name: param.default for param in self.params}
