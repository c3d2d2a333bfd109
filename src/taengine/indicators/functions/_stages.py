"""
Unchecked moving-average and RSI stages composed by public indicator functions.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions.overlap, taengine.indicators.functions.momentum,
  taengine.indicators.functions.stochastic

Stage contract: `stage(values, start, end, ..., settings, out) -> written`, where
`start` is already at or past the stage lookback and `out` receives `end - start`
samples from offset 0. Cascades stage their intermediate results in scratch buffers
sized to the output length plus the downstream lookback, so `out` may alias `values`.
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    copy_window,
    ema_kernel,
    kama_kernel,
    mama_kernel,
    per_to_k,
    sma_kernel,
    t3_kernel,
    wilder_oscillator_kernel,
    wma_kernel,
)
from taengine.indicators.domain.entities import MAType, UnstableFunc
from taengine.indicators.domain.errors import InternalInvariantError
from taengine.indicators.engine.lookback import (
    MA_DISPATCH_MAMA_FAST_LIMIT,
    MA_DISPATCH_MAMA_SLOW_LIMIT,
    MA_DISPATCH_T3_VFACTOR,
    MAMA_FIXED_LOOKBACK,
    coerce_ma_type,
    ema_stage_lookback,
    rsi_lookback,
)
from taengine.indicators.engine.numeric import scratch_buffer
from taengine.platform.config.compatibility_settings import CompatibilitySettings


def expect_written(stage: str, written: int, expected: int) -> None:
    """
    Assert that a composed stage produced the number of samples its caller aligned on.

    Args:
        stage: Stage name for diagnostics.
        written: Count reported by the stage.
        expected: Count required by the composition.
    Returns:
        None.
    Assumptions:
        Stage lookbacks were computed from the same settings snapshot.
    Raises:
        InternalInvariantError: If counts differ.
    Side Effects:
        None.
    """
    if written != expected:
        raise InternalInvariantError(
            f"{stage} stage is misaligned with its composition",
            written=written,
            expected=expected,
        )


def resolved_ma_type(selector: MAType | str) -> MAType:
    """
    Resolve a moving-average selector that already passed lookback validation.

    Args:
        selector: `MAType` member or its string value.
    Returns:
        MAType: Resolved variant.
    Assumptions:
        The matching lookback function returned a non-negative value for `selector`.
    Raises:
        InternalInvariantError: If validation and resolution disagree.
    Side Effects:
        None.
    """
    ma_type = coerce_ma_type(selector)
    if ma_type is None:
        raise InternalInvariantError(
            f"moving-average selector {selector!r} passed validation but does not resolve"
        )
    return ma_type


def ema_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    settings: CompatibilitySettings,
    out: np.ndarray,
    *,
    k: float | None = None,
) -> int:
    lookback = ema_stage_lookback(period, settings)
    smoothing = per_to_k(period) if k is None else k
    return ema_kernel(
        values,
        start - lookback,
        start,
        end,
        period,
        smoothing,
        settings.is_metastock,
        out,
    )


def dema_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    settings: CompatibilitySettings,
    out: np.ndarray,
) -> int:
    """
    Write `2 * EMA - EMA(EMA)`.

    Args:
        values: Input series.
        start: First output index, `>= 2 * ema lookback`.
        end: Exclusive end index.
        period: EMA period.
        settings: Call snapshot.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        The first EMA starts one EMA lookback before `start` so the second EMA has
        exactly its own warm-up available.
    Raises:
        InternalInvariantError: If stage lengths disagree.
    Side Effects:
        Writes into `out`; allocates two scratch buffers.
    """
    lookback = ema_stage_lookback(period, settings)
    count = end - start
    first = scratch_buffer(values.dtype, output_length=count, lookback=lookback)
    written = ema_stage(values, start - lookback, end, period, settings, first)
    expect_written("dema.ema1", written, count + lookback)
    second = scratch_buffer(values.dtype, output_length=count, lookback=0)
    written = ema_stage(first, lookback, lookback + count, period, settings, second)
    expect_written("dema.ema2", written, count)
    np.subtract(2.0 * first[lookback:], second, out=out[:count])
    return count


def tema_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    settings: CompatibilitySettings,
    out: np.ndarray,
) -> int:
    lookback = ema_stage_lookback(period, settings)
    count = end - start
    first = scratch_buffer(values.dtype, output_length=count, lookback=2 * lookback)
    expect_written(
        "tema.ema1",
        ema_stage(values, start - 2 * lookback, end, period, settings, first),
        count + 2 * lookback,
    )
    second = scratch_buffer(values.dtype, output_length=count, lookback=lookback)
    expect_written(
        "tema.ema2",
        ema_stage(first, lookback, 2 * lookback + count, period, settings, second),
        count + lookback,
    )
    third = scratch_buffer(values.dtype, output_length=count, lookback=0)
    expect_written(
        "tema.ema3",
        ema_stage(second, lookback, lookback + count, period, settings, third),
        count,
    )
    out[:count] = 3.0 * first[2 * lookback :] - 3.0 * second[lookback:] + third
    return count


def trima_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    out: np.ndarray,
) -> int:
    """
    Write the triangular average as a simple average of a simple average.

    Args:
        values: Input series.
        start: First output index, `>= period - 1`.
        end: Exclusive end index.
        period: Triangle width.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Passes of `period // 2 + 1` and `(period + 1) // 2` samples give the symmetric
        triangular weights with total lookback `period - 1`.
    Raises:
        InternalInvariantError: If stage lengths disagree.
    Side Effects:
        Writes into `out`; allocates one scratch buffer.
    """
    first_period = period // 2 + 1
    second_period = (period + 1) // 2
    second_lookback = second_period - 1
    count = end - start
    first = scratch_buffer(values.dtype, output_length=count, lookback=second_lookback)
    expect_written(
        "trima.sma1",
        sma_kernel(values, start - second_lookback, end, first_period, first),
        count + second_lookback,
    )
    return sma_kernel(first, second_lookback, second_lookback + count, second_period, out)


def kama_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    settings: CompatibilitySettings,
    out: np.ndarray,
) -> int:
    lookback = period + settings.unstable_period(UnstableFunc.KAMA)
    return kama_kernel(values, start - lookback, start, end, period, out)


def t3_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    vfactor: float,
    settings: CompatibilitySettings,
    out: np.ndarray,
) -> int:
    lookback = 6 * (period - 1) + settings.unstable_period(UnstableFunc.T3)
    return t3_kernel(values, start - lookback, start, end, period, float(vfactor), out)


def mama_stage(
    values: np.ndarray,
    start: int,
    end: int,
    fast_limit: float,
    slow_limit: float,
    settings: CompatibilitySettings,
    out_mama: np.ndarray,
    out_fama: np.ndarray,
) -> int:
    lookback = MAMA_FIXED_LOOKBACK + settings.unstable_period(UnstableFunc.MAMA)
    return mama_kernel(
        values,
        start - lookback,
        start,
        end,
        float(fast_limit),
        float(slow_limit),
        out_mama,
        out_fama,
    )


def ma_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    ma_type: MAType,
    settings: CompatibilitySettings,
    out: np.ndarray,
) -> int:
    """
    Dispatch one moving-average stage by variant.

    Args:
        values: Input series.
        start: First output index, at or past `ma_lookback(period, ma_type)`.
        end: Exclusive end index.
        period: Averaging period; 1 copies the input verbatim.
        ma_type: Variant.
        settings: Call snapshot.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Parameters were validated through the matching lookback function.
    Raises:
        InternalInvariantError: If a composed variant misaligns.
    Side Effects:
        Writes into `out`.
    """
    if period == 1:
        return copy_window(values, start, end, out)
    if ma_type is MAType.SMA:
        return sma_kernel(values, start, end, period, out)
    if ma_type is MAType.EMA:
        return ema_stage(values, start, end, period, settings, out)
    if ma_type is MAType.WMA:
        return wma_kernel(values, start, end, period, out)
    if ma_type is MAType.DEMA:
        return dema_stage(values, start, end, period, settings, out)
    if ma_type is MAType.TEMA:
        return tema_stage(values, start, end, period, settings, out)
    if ma_type is MAType.TRIMA:
        return trima_stage(values, start, end, period, out)
    if ma_type is MAType.KAMA:
        return kama_stage(values, start, end, period, settings, out)
    if ma_type is MAType.MAMA:
        fama = scratch_buffer(values.dtype, output_length=end - start, lookback=0)
        return mama_stage(
            values,
            start,
            end,
            MA_DISPATCH_MAMA_FAST_LIMIT,
            MA_DISPATCH_MAMA_SLOW_LIMIT,
            settings,
            out,
            fama,
        )
    return t3_stage(values, start, end, period, MA_DISPATCH_T3_VFACTOR, settings, out)



def rsi_stage(
    values: np.ndarray,
    start: int,
    end: int,
    period: int,
    settings: CompatibilitySettings,
    out: np.ndarray,
) -> int:
    """
    Run one RSI stage seeded at `start - rsi_lookback(period)`.

    Args:
        values: Input series.
        start: First output index, at or past the RSI lookback.
        end: Exclusive end index.
        period: Wilder period, `>= 2`.
        settings: Call snapshot; METASTOCK without an unstable period selects the
            legacy first sample.
        out: Output buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        `period` was validated through `rsi_lookback`.
    Raises:
        None.
    Side Effects:
        Writes into `out`.
    """
    lookback = rsi_lookback(period, settings=settings)
    legacy_first_output = (
        settings.is_metastock and settings.unstable_period(UnstableFunc.RSI) == 0
    )
    return wilder_oscillator_kernel(
        values, start - lookback, start, end, period, legacy_first_output, False, out
    )


__all__ = [
    "dema_stage",
    "ema_stage",
    "expect_written",
    "kama_stage",
    "ma_stage",
    "mama_stage",
    "resolved_ma_type",
    "rsi_stage",
    "t3_stage",
    "tema_stage",
    "trima_stage",
]
