from __future__ import annotations

import logging

import numpy as np
import pytest

from taengine.indicators import functions
from taengine.indicators.application.services import IndicatorEngine
from taengine.indicators.domain.entities import CompatibilityMode, IndexRange
from taengine.indicators.domain.errors import (
    InvalidParameterError,
    InvalidRangeError,
    MissingInputSeriesError,
    UnknownIndicatorError,
)
from taengine.platform.config import CompatibilitySettings


def _prices(size: int = 60) -> np.ndarray:
    rng = np.random.default_rng(20260211)
    return np.ascontiguousarray(100.0 + np.cumsum(rng.normal(0.0, 1.0, size)))


def test_compute_aligns_outputs_to_input_indices() -> None:
    """
    Verify facade outputs span the input and pad the lookback prefix with NaN.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Array-like inputs are converted to float64.
    Raises:
        AssertionError: If alignment, padding, or lookback reporting regress.
    Side Effects:
        None.
    """
    engine = IndicatorEngine()

    output = engine.compute("overlap.sma", {"real": [1.0, 2.0, 3.0, 4.0, 5.0]}, {"period": 3})

    assert output.indicator_id.value == "overlap.sma"
    assert output.names == ("value",)
    assert output.out_range == IndexRange(2, 5)
    assert output.lookback == 2
    values = output["value"]
    assert values.shape == (5,)
    assert np.all(np.isnan(values[:2]))
    np.testing.assert_allclose(values[2:], [2.0, 3.0, 4.0])


def test_compute_matches_buffer_level_function() -> None:
    values = _prices()
    out = np.empty(values.shape[0])
    result = functions.ema(values, None, out, period=10)

    output = IndicatorEngine().compute("overlap.ema", {"real": values}, {"period": 10})

    assert output.out_range == result.out_range
    aligned = output["value"][output.out_range.as_slice()]
    np.testing.assert_array_equal(aligned, out[: len(result.out_range)])


def test_compute_multi_output_indicator() -> None:
    size = 200
    values = _prices(size)

    output = IndicatorEngine().compute("momentum.macd", {"real": values})

    assert output.names == ("macd", "signal", "hist")
    assert output.out_range == IndexRange(33, size)
    for name in output.names:
        assert np.all(np.isnan(output[name][:33]))
        assert np.all(np.isfinite(output[name][33:]))


def test_index_outputs_are_padded_with_minus_one() -> None:
    values = _prices(20)

    output = IndicatorEngine().compute("math.minmaxindex", {"real": values}, {"period": 5})

    assert output["min_idx"].dtype == np.int64
    np.testing.assert_array_equal(output["min_idx"][:4], [-1, -1, -1, -1])
    np.testing.assert_array_equal(output["max_idx"][:4], [-1, -1, -1, -1])
    assert np.all(output["max_idx"][4:] >= 0)


def test_compute_with_partial_range_keeps_full_length() -> None:
    values = _prices(40)

    output = IndicatorEngine().compute(
        "overlap.sma",
        {"real": values},
        {"period": 5},
        in_range=(20, 30),
    )

    assert output.out_range == IndexRange(20, 30)
    series = output["value"]
    assert series.shape == (40,)
    assert np.all(np.isnan(series[:20]))
    assert np.all(np.isnan(series[30:]))
    np.testing.assert_allclose(series[20:30], [values[i - 4 : i + 1].mean() for i in range(20, 30)])


def test_compute_when_lookback_exceeds_series_returns_empty_range() -> None:
    values = _prices(10)

    output = IndicatorEngine().compute("overlap.sma", {"real": values}, {"period": 30})

    assert output.out_range.is_empty
    assert output.out_range.start <= values.shape[0]
    assert np.all(np.isnan(output["value"]))


def test_compute_hlc_indicator_reads_named_inputs() -> None:
    close = _prices(50)
    high = close + 1.0
    low = close - 1.0

    output = IndicatorEngine().compute(
        "volatility.atr",
        {"high": high, "low": low, "close": close, "real": np.zeros(50)},
        {"period": 5},
    )

    assert output.out_range == IndexRange(5, 50)
    assert np.all(output["value"][5:] >= 2.0 - 1e-12)


def test_compute_float32_inputs_produce_float32_outputs() -> None:
    values = _prices(30).astype(np.float32)

    output = IndicatorEngine().compute("statistic.stddev", {"real": values})

    assert output["value"].dtype == np.float32


def test_unknown_indicator_raises() -> None:
    engine = IndicatorEngine()

    with pytest.raises(UnknownIndicatorError):
        engine.compute("overlap.hull", {"real": _prices()})
    with pytest.raises(UnknownIndicatorError):
        engine.get_def("overlap.sar")


def test_missing_input_series_raises_with_details() -> None:
    with pytest.raises(MissingInputSeriesError) as error:
        IndicatorEngine().compute("volatility.trange", {"high": _prices(), "close": _prices()})

    assert error.value.details["missing"] == ("low",)


def test_compute_reads_open_and_volume_inputs() -> None:
    """
    Verify the facade feeds `open` and `volume` series to indicators declaring them.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Extra series in the input mapping are ignored.
    Raises:
        AssertionError: If input routing or output naming regress.
    Side Effects:
        None.
    """
    close = _prices(40)
    bars = {
        "open": close - 0.5,
        "high": close + 1.0,
        "low": close - 1.0,
        "close": close,
        "volume": np.full(40, 2_500.0),
    }
    engine = IndicatorEngine()

    average = engine.compute("price.avgprice", bars)
    money_flow = engine.compute("momentum.mfi", bars, {"period": 10})
    stochastic = engine.compute("momentum.stoch", bars)

    np.testing.assert_allclose(average["value"], close - 0.125)
    assert money_flow.out_range == IndexRange(10, 40)
    assert np.all((money_flow["value"][10:] >= 0.0) & (money_flow["value"][10:] <= 100.0))
    assert stochastic.names == ("slowk", "slowd")
    assert stochastic.out_range == IndexRange(8, 40)


def test_missing_volume_series_raises() -> None:
    close = _prices(20)

    with pytest.raises(MissingInputSeriesError) as error:
        IndicatorEngine().compute("momentum.mfi", {"high": close, "low": close, "close": close})

    assert error.value.details["missing"] == ("volume",)


@pytest.mark.parametrize(
    ("indicator_id", "params"),
    [
        ("overlap.sma", {"period": 1}),
        ("overlap.sma", {"window": 5}),
        ("overlap.t3", {"vfactor": 1.5}),
        ("overlap.ma", {"ma_type": "hull"}),
        ("momentum.macd", {"signal_period": 0}),
    ],
)
def test_invalid_parameters_raise(indicator_id: str, params: dict) -> None:
    """
    Verify unknown names and out-of-domain values raise `InvalidParameterError`.

    Args:
        indicator_id: Indicator under test.
        params: Offending parameter overrides.
    Returns:
        None.
    Assumptions:
        Unknown parameter names are rejected rather than ignored.
    Raises:
        AssertionError: If no error or a different error is raised.
    Side Effects:
        None.
    """
    with pytest.raises(InvalidParameterError) as error:
        IndicatorEngine().compute(indicator_id, {"real": _prices()}, params)

    assert error.value.details["indicator_id"] == indicator_id


@pytest.mark.parametrize("in_range", [(-1, 10), (10, 5), (0, 61)])
def test_invalid_range_raises(in_range: tuple[int, int]) -> None:
    with pytest.raises(InvalidRangeError) as error:
        IndicatorEngine().compute(
            "overlap.sma", {"real": _prices()}, {"period": 5}, in_range=in_range
        )

    assert error.value.details["series_length"] == 60


def test_lookback_respects_explicit_settings() -> None:
    engine = IndicatorEngine()
    metastock = CompatibilitySettings(mode=CompatibilityMode.METASTOCK)

    assert engine.lookback("momentum.rsi") == 14
    assert engine.lookback("momentum.rsi", settings=metastock) == 13
    assert engine.lookback("overlap.sma", {"period": 1}) == -1
    with pytest.raises(InvalidParameterError):
        engine.lookback("overlap.sma", {"length": 3})


def test_list_defs_is_sorted_by_id() -> None:
    ids = [definition.indicator_id.value for definition in IndicatorEngine().list_defs()]

    assert ids == sorted(ids)
    assert "overlap.bbands" in ids
    assert "volatility.natr" in ids


def test_list_defs_filters_by_family() -> None:
    engine = IndicatorEngine()

    volatility = engine.list_defs(" Volatility ")

    assert [definition.indicator_id.name for definition in volatility] == ["atr", "natr", "trange"]
    assert engine.list_defs("candles") == ()


def test_engine_rejects_duplicate_definitions() -> None:
    engine = IndicatorEngine()
    definition = engine.get_def("overlap.sma")

    with pytest.raises(ValueError):
        IndicatorEngine(defs=(definition, definition))


def test_compute_emits_debug_record(caplog: pytest.LogCaptureFixture) -> None:
    logger = "taengine.indicators.application.services.indicator_engine"
    with caplog.at_level(logging.DEBUG, logger=logger):
        IndicatorEngine().compute("momentum.rsi", {"real": _prices()})

    records = [record for record in caplog.records if record.getMessage() == "indicator computed"]
    assert len(records) == 1
    assert records[0].indicator_id == "momentum.rsi"
    assert records[0].out_start == 14
    assert records[0].out_end == 60
