"""
Whole-series facade running indicators by identifier.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.domain.definitions,
  taengine.indicators.functions,
  taengine.indicators.engine.lookback
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Mapping, NamedTuple

import numpy as np

from taengine.indicators import functions
from taengine.indicators.application.dto import IndicatorOutput
from taengine.indicators.domain.definitions import all_defs
from taengine.indicators.domain.entities import IndexRange, IndicatorDef, RangeLike, RetCode
from taengine.indicators.domain.errors import (
    InvalidParameterError,
    InvalidRangeError,
    MissingInputSeriesError,
    UnknownIndicatorError,
)
from taengine.indicators.engine import INDEX_DTYPE, SUPPORTED_REAL_DTYPES, lookback
from taengine.indicators.engine.range_validator import normalize_range, validate_input_range
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

log = logging.getLogger(__name__)


class _Binding(NamedTuple):
    compute: Callable[..., functions.ComputeResult]
    lookback: Callable[..., int]


_BINDINGS: Mapping[str, _Binding] = {
    "overlap.ma": _Binding(functions.ma, lookback.ma_lookback),
    "overlap.sma": _Binding(functions.sma, lookback.sma_lookback),
    "overlap.ema": _Binding(functions.ema, lookback.ema_lookback),
    "overlap.wma": _Binding(functions.wma, lookback.wma_lookback),
    "overlap.dema": _Binding(functions.dema, lookback.dema_lookback),
    "overlap.tema": _Binding(functions.tema, lookback.tema_lookback),
    "overlap.trima": _Binding(functions.trima, lookback.trima_lookback),
    "overlap.kama": _Binding(functions.kama, lookback.kama_lookback),
    "overlap.mama": _Binding(functions.mama, lookback.mama_lookback),
    "overlap.t3": _Binding(functions.t3, lookback.t3_lookback),
    "overlap.bbands": _Binding(functions.bbands, lookback.bbands_lookback),
    "overlap.midpoint": _Binding(functions.midpoint, lookback.midpoint_lookback),
    "overlap.midprice": _Binding(functions.midprice, lookback.midprice_lookback),
    "momentum.apo": _Binding(functions.apo, lookback.apo_lookback),
    "momentum.ppo": _Binding(functions.ppo, lookback.ppo_lookback),
    "momentum.macd": _Binding(functions.macd, lookback.macd_lookback),
    "momentum.macdext": _Binding(functions.macdext, lookback.macdext_lookback),
    "momentum.macdfix": _Binding(functions.macdfix, lookback.macdfix_lookback),
    "momentum.trix": _Binding(functions.trix, lookback.trix_lookback),
    "momentum.rsi": _Binding(functions.rsi, lookback.rsi_lookback),
    "momentum.cmo": _Binding(functions.cmo, lookback.cmo_lookback),
    "momentum.mom": _Binding(functions.mom, lookback.mom_lookback),
    "momentum.roc": _Binding(functions.roc, lookback.roc_lookback),
    "momentum.rocp": _Binding(functions.rocp, lookback.rocp_lookback),
    "momentum.rocr": _Binding(functions.rocr, lookback.rocr_lookback),
    "momentum.rocr100": _Binding(functions.rocr100, lookback.rocr100_lookback),
    "momentum.willr": _Binding(functions.willr, lookback.willr_lookback),
    "momentum.aroon": _Binding(functions.aroon, lookback.aroon_lookback),
    "momentum.aroonosc": _Binding(functions.aroonosc, lookback.aroonosc_lookback),
    "momentum.stoch": _Binding(functions.stoch, lookback.stoch_lookback),
    "momentum.stochf": _Binding(functions.stochf, lookback.stochf_lookback),
    "momentum.stochrsi": _Binding(functions.stochrsi, lookback.stochrsi_lookback),
    "momentum.cci": _Binding(functions.cci, lookback.cci_lookback),
    "momentum.mfi": _Binding(functions.mfi, lookback.mfi_lookback),
    "momentum.plus_dm": _Binding(functions.plus_dm, lookback.plus_dm_lookback),
    "momentum.minus_dm": _Binding(functions.minus_dm, lookback.minus_dm_lookback),
    "momentum.plus_di": _Binding(functions.plus_di, lookback.plus_di_lookback),
    "momentum.minus_di": _Binding(functions.minus_di, lookback.minus_di_lookback),
    "momentum.dx": _Binding(functions.dx, lookback.dx_lookback),
    "momentum.adx": _Binding(functions.adx, lookback.adx_lookback),
    "momentum.adxr": _Binding(functions.adxr, lookback.adxr_lookback),
    "math.max": _Binding(functions.rolling_max, lookback.rolling_max_lookback),
    "math.min": _Binding(functions.rolling_min, lookback.rolling_min_lookback),
    "math.maxindex": _Binding(functions.max_index, lookback.max_index_lookback),
    "math.minindex": _Binding(functions.min_index, lookback.min_index_lookback),
    "math.minmax": _Binding(functions.min_max, lookback.min_max_lookback),
    "math.minmaxindex": _Binding(functions.min_max_index, lookback.min_max_index_lookback),
    "math.sum": _Binding(functions.rolling_sum, lookback.rolling_sum_lookback),
    "statistic.var": _Binding(functions.var, lookback.var_lookback),
    "statistic.stddev": _Binding(functions.stddev, lookback.stddev_lookback),
    "statistic.avgdev": _Binding(functions.avgdev, lookback.avgdev_lookback),
    "statistic.linearreg": _Binding(functions.linearreg, lookback.linearreg_lookback),
    "statistic.linearreg_slope": _Binding(
        functions.linearreg_slope, lookback.linearreg_slope_lookback
    ),
    "statistic.linearreg_intercept": _Binding(
        functions.linearreg_intercept, lookback.linearreg_intercept_lookback
    ),
    "statistic.linearreg_angle": _Binding(
        functions.linearreg_angle, lookback.linearreg_angle_lookback
    ),
    "statistic.tsf": _Binding(functions.tsf, lookback.tsf_lookback),
    "volatility.trange": _Binding(functions.trange, lookback.trange_lookback),
    "volatility.atr": _Binding(functions.atr, lookback.atr_lookback),
    "volatility.natr": _Binding(functions.natr, lookback.natr_lookback),
    "price.avgprice": _Binding(functions.avgprice, lookback.avgprice_lookback),
    "price.medprice": _Binding(functions.medprice, lookback.medprice_lookback),
    "price.typprice": _Binding(functions.typprice, lookback.typprice_lookback),
    "price.wclprice": _Binding(functions.wclprice, lookback.wclprice_lookback),
}


class IndicatorEngine:
    """
    Run indicator functions on whole series and return outputs aligned to input indices.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.indicators.functions._base,
      taengine.indicators.application.dto.indicator_output
    """

    def __init__(self, *, defs: Iterable[IndicatorDef] | None = None) -> None:
        """
        Index definitions and bind each to its indicator function.

        Args:
            defs: Indicator definitions; defaults to `all_defs()`.
        Returns:
            None.
        Assumptions:
            Every definition id has a function binding.
        Raises:
            ValueError: If ids are duplicated or a definition has no binding.
        Side Effects:
            None.
        """
        definitions = tuple(all_defs() if defs is None else defs)
        by_id: dict[str, IndicatorDef] = {}
        for definition in definitions:
            key = definition.indicator_id.value
            if key in by_id:
                raise ValueError(f"duplicate indicator definition: {key}")
            if key not in _BINDINGS:
                raise ValueError(f"indicator definition has no function binding: {key}")
            by_id[key] = definition
        self._defs = by_id

    def list_defs(self, family: str | None = None) -> tuple[IndicatorDef, ...]:
        """
        Return registered definitions sorted by id, optionally of one family.

        Args:
            family: Id prefix such as `momentum`; `None` lists every definition.
        Returns:
            tuple[IndicatorDef, ...]: Matching definitions.
        Assumptions:
            Family matching is case-insensitive; an unknown family yields an empty tuple.
        Raises:
            None.
        Side Effects:
            None.
        """
        wanted = None if family is None else family.strip().lower()
        return tuple(
            self._defs[key]
            for key in sorted(self._defs)
            if wanted is None or self._defs[key].indicator_id.family == wanted
        )

    def get_def(self, indicator_id: str) -> IndicatorDef:
        key = str(indicator_id).strip().lower()
        definition = self._defs.get(key)
        if definition is None:
            raise UnknownIndicatorError(indicator_id=key)
        return definition

    def lookback(
        self,
        indicator_id: str,
        params: Mapping[str, Any] | None = None,
        settings: CompatibilitySettings | None = None,
    ) -> int:
        """
        Return the lookback of an indicator configuration.

        Args:
            indicator_id: Indicator identifier.
            params: Parameter overrides on top of definition defaults.
            settings: Per-call settings or `None` for the installed snapshot.
        Returns:
            int: Lookback, `-1` when parameters are outside their domain.
        Assumptions:
            Unknown parameter names are invalid rather than ignored.
        Raises:
            UnknownIndicatorError: If the id is not registered.
            InvalidParameterError: If a parameter name is not declared.
        Side Effects:
            None.
        """
        definition = self.get_def(indicator_id)
        effective = _effective_params(definition, params)
        binding = _BINDINGS[definition.indicator_id.value]
        return binding.lookback(**effective, settings=resolve_compatibility_settings(settings))

    def compute(
        self,
        indicator_id: str,
        inputs: Mapping[str, Any],
        params: Mapping[str, Any] | None = None,
        settings: CompatibilitySettings | None = None,
        *,
        in_range: RangeLike = None,
    ) -> IndicatorOutput:
        """
        Compute one indicator over whole input series.

        Args:
            indicator_id: Indicator identifier.
            inputs: Input series by name (`real`, `open`, `high`, `low`, `close`, `volume`).
            params: Parameter overrides on top of definition defaults.
            settings: Per-call settings or `None` for the installed snapshot.
            in_range: Optional requested range; `None` computes the whole series.
        Returns:
            IndicatorOutput: Full-length outputs with NaN (or -1 for index outputs)
                outside the computed range.
        Assumptions:
            One settings snapshot drives both the lookback and the computation.
        Raises:
            UnknownIndicatorError: If the id is not registered.
            MissingInputSeriesError: If a declared input is absent.
            InvalidParameterError: If parameters are outside their domain.
            InvalidRangeError: If the requested range does not fit the inputs.
            TypeError: On non-float or mixed-dtype inputs.
            ValueError: On non-1-D inputs.
        Side Effects:
            Allocates output arrays; emits one DEBUG log record.
        """
        started = time.perf_counter()
        definition = self.get_def(indicator_id)
        key = definition.indicator_id.value
        effective = _effective_params(definition, params)
        rejected = {
            name: value
            for name, value in effective.items()
            if not definition.param(name).accepts(value)
        }
        if rejected:
            raise InvalidParameterError(indicator_id=key, params=rejected)
        series = _collect_inputs(definition, inputs)
        snapshot = resolve_compatibility_settings(settings)
        binding = _BINDINGS[key]

        series_length = min(array.shape[0] for array in series)
        bounds = validate_input_range(in_range, *(array.shape[0] for array in series))
        if bounds is None:
            requested = normalize_range(in_range, series_length)
            raise InvalidRangeError(
                indicator_id=key,
                start=requested.start,
                end=requested.end,
                series_length=series_length,
            )
        requested_start, end = bounds

        indicator_lookback = binding.lookback(**effective, settings=snapshot)
        if indicator_lookback < 0:
            raise InvalidParameterError(indicator_id=key, params=effective)
        start = min(max(requested_start, indicator_lookback), end)

        dtype = _output_dtype(series)
        buffers = definition.output.allocate(
            series_length, real_dtype=dtype, index_dtype=INDEX_DTYPE
        )
        result = binding.compute(
            *series,
            (start, end),
            *(buffer[start:] for buffer in buffers.values()),
            **effective,
            settings=snapshot,
        )
        if result.ret_code is RetCode.BAD_PARAM:
            raise InvalidParameterError(indicator_id=key, params=effective)
        if result.ret_code is RetCode.OUT_OF_RANGE_PARAM:
            raise InvalidRangeError(
                indicator_id=key,
                start=start,
                end=end,
                series_length=series_length,
            )

        out_range = result.out_range
        if out_range.is_empty:
            # lookback may point past the series end; keep the empty range inside it
            out_range = IndexRange.empty_at(start)

        log.debug(
            "indicator computed",
            extra={
                "indicator_id": key,
                "lookback": indicator_lookback,
                "series_length": series_length,
                "out_start": out_range.start,
                "out_end": out_range.end,
                "compute_ms": round((time.perf_counter() - started) * 1000.0, 3),
            },
        )
        return IndicatorOutput(
            indicator_id=definition.indicator_id,
            values=buffers,
            out_range=out_range,
            lookback=indicator_lookback,
        )


def _effective_params(
    definition: IndicatorDef,
    params: Mapping[str, Any] | None,
) -> dict[str, Any]:
    effective: dict[str, Any] = definition.defaults()
    if not params:
        return effective
    unknown = sorted(set(params) - set(effective))
    if unknown:
        raise InvalidParameterError(
            indicator_id=definition.indicator_id.value,
            params={name: params[name] for name in unknown},
        )
    effective.update(params)
    return effective


def _collect_inputs(definition: IndicatorDef, inputs: Mapping[str, Any]) -> tuple[np.ndarray, ...]:
    """
    Pick declared input series in definition order.

    Args:
        definition: Indicator definition.
        inputs: Caller mapping from series name to array-like values.
    Returns:
        tuple[np.ndarray, ...]: Arrays in positional input order.
    Assumptions:
        Array-likes are converted with `np.asarray`; dtype checks happen in functions.
    Raises:
        MissingInputSeriesError: If any declared series is absent.
    Side Effects:
        None.
    """
    missing = tuple(series.value for series in definition.inputs if series.value not in inputs)
    if missing:
        raise MissingInputSeriesError(
            indicator_id=definition.indicator_id.value,
            missing=missing,
        )
    return tuple(np.asarray(inputs[series.value]) for series in definition.inputs)


def _output_dtype(series: tuple[np.ndarray, ...]) -> np.dtype:
    dtype = series[0].dtype
    if dtype in SUPPORTED_REAL_DTYPES:
        return dtype
    return np.dtype(np.float64)


__all__ = ["IndicatorEngine"]
