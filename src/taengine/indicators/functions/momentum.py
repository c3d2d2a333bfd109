"""
Momentum indicators: price oscillators, MACD family, TRIX, Wilder oscillators,
rate-of-change family, Williams %R, Aroon, CCI and MFI.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.functions._stages,
  taengine.indicators.adapters.outbound.compute_numba.kernels.wilder,
  taengine.indicators.adapters.outbound.compute_numba.kernels.momentum,
  taengine.indicators.adapters.outbound.compute_numba.kernels.price
"""

from __future__ import annotations

import numpy as np

from taengine.indicators.adapters.outbound.compute_numba.kernels import (
    CHANGE_DIFF,
    CHANGE_ROC,
    CHANGE_ROCP,
    CHANGE_ROCR,
    CHANGE_ROCR100,
    aroon_kernel,
    cci_kernel,
    change_kernel,
    mfi_kernel,
    per_to_k,
    wilder_oscillator_kernel,
    willr_kernel,
)
from taengine.indicators.domain.entities import MAType, RangeLike, UnstableFunc
from taengine.indicators.engine.lookback import (
    MACDFIX_FAST_PERIOD,
    MACDFIX_SLOW_PERIOD,
    apo_lookback,
    aroon_lookback,
    aroonosc_lookback,
    cci_lookback,
    cmo_lookback,
    ema_stage_lookback,
    ma_lookback,
    macd_lookback,
    macdext_lookback,
    macdfix_lookback,
    mfi_lookback,
    mom_lookback,
    ppo_lookback,
    roc_lookback,
    rocp_lookback,
    rocr100_lookback,
    rocr_lookback,
    rsi_lookback,
    trix_lookback,
    willr_lookback,
)
from taengine.indicators.engine.numeric import scratch_buffer
from taengine.platform.config.compatibility_settings import (
    CompatibilitySettings,
    resolve_compatibility_settings,
)

from ._base import CallWindow, ComputeResult, open_window
from ._stages import ema_stage, expect_written, ma_stage, resolved_ma_type

MACDFIX_FAST_K = 0.15
MACDFIX_SLOW_K = 0.075


# Price oscillators


def _price_oscillator(
    values: np.ndarray,
    window: CallWindow,
    fast_period: int,
    slow_period: int,
    ma_type: MAType | str,
    settings: CompatibilitySettings,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Stage both averages of APO/PPO and align them on the effective window.

    Args:
        values: Input series.
        window: Open call window.
        fast_period: Fast period.
        slow_period: Slow period; periods are swapped when slow < fast.
        ma_type: Variant used by both averages.
        settings: Resolved settings snapshot.
    Returns:
        tuple[np.ndarray, np.ndarray]: Fast and slow averages over `[start, end)`.
    Assumptions:
        Each average seeds at its own effective start, so the fast average of a
        recursive variant starts from `max(requested_start, fast_lookback)` and is
        then sliced to the slow window.
    Raises:
        InternalInvariantError: If a stage writes an unexpected count.
    Side Effects:
        None.
    """
    resolved_type = resolved_ma_type(ma_type)
    fast, slow = int(fast_period), int(slow_period)
    if slow < fast:
        fast, slow = slow, fast

    count = window.length
    fast_start = max(window.requested_start, ma_lookback(fast, resolved_type, settings=settings))
    offset = window.start - fast_start
    fast_ma = scratch_buffer(window.dtype, output_length=count, lookback=offset)
    slow_ma = scratch_buffer(window.dtype, output_length=count, lookback=0)
    expect_written(
        "price_oscillator.fast",
        ma_stage(values, fast_start, window.end, fast, resolved_type, settings, fast_ma),
        count + offset,
    )
    expect_written(
        "price_oscillator.slow",
        ma_stage(values, window.start, window.end, slow, resolved_type, settings, slow_ma),
        count,
    )
    return fast_ma[offset:], slow_ma


def apo(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    fast_period: int = 12,
    slow_period: int = 26,
    ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the absolute price oscillator `MA(fast) - MA(slow)`.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        fast_period: Fast period, `>= 2`.
        slow_period: Slow period, `>= 2`; periods are swapped when slow < fast.
        ma_type: Variant used by both averages.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Each average seeds at its own start; the fast one is aligned on the slow window.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If the averages misalign.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=apo_lookback(fast_period, slow_period, ma_type, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    fast_ma, slow_ma = _price_oscillator(
        values, window, fast_period, slow_period, ma_type, snapshot
    )
    np.subtract(fast_ma, slow_ma, out=out[: window.length])
    return window.finish(window.length)


def ppo(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    fast_period: int = 12,
    slow_period: int = 26,
    ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the percentage price oscillator `100 * (fast - slow) / slow`.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        fast_period: Fast period, `>= 2`.
        slow_period: Slow period, `>= 2`.
        ma_type: Variant used by both averages.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Output is 0 wherever the slow average is 0.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If the averages misalign.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=ppo_lookback(fast_period, slow_period, ma_type, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    fast_ma, slow_ma = _price_oscillator(
        values, window, fast_period, slow_period, ma_type, snapshot
    )
    result = np.zeros(window.length, dtype=window.dtype)
    nonzero = slow_ma != 0.0
    result[nonzero] = (fast_ma[nonzero] - slow_ma[nonzero]) / slow_ma[nonzero] * 100.0
    out[: window.length] = result
    return window.finish(window.length)


# MACD family


def _macd_from_ema(
    values: np.ndarray,
    window: CallWindow,
    fast_period: int,
    fast_k: float,
    slow_period: int,
    slow_k: float,
    signal_period: int,
    settings: CompatibilitySettings,
    out_macd: np.ndarray,
    out_signal: np.ndarray,
    out_hist: np.ndarray,
) -> int:
    """
    Run the exponential MACD cascade for an opened call window.

    Args:
        values: Input series.
        window: Effective window of the call.
        fast_period: Fast EMA period.
        fast_k: Fast smoothing factor.
        slow_period: Slow EMA period.
        slow_k: Slow smoothing factor.
        signal_period: Signal EMA period, `>= 1`.
        settings: Call snapshot.
        out_macd: MACD line buffer.
        out_signal: Signal line buffer.
        out_hist: Histogram buffer.
    Returns:
        int: Number of written samples.
    Assumptions:
        Both EMAs start `signal lookback` samples before the effective start so the
        signal EMA has its warm-up; the MACD line output skips that prefix.
    Raises:
        InternalInvariantError: If the fast and slow stages disagree on length.
    Side Effects:
        Writes into the three output buffers.
    """
    count = window.length
    signal_lookback = ema_stage_lookback(signal_period, settings)
    stage_start = window.start - signal_lookback
    staged = count + signal_lookback

    slow_line = scratch_buffer(window.dtype, output_length=count, lookback=signal_lookback)
    fast_line = scratch_buffer(window.dtype, output_length=count, lookback=signal_lookback)
    expect_written(
        "macd.slow",
        ema_stage(values, stage_start, window.end, slow_period, settings, slow_line, k=slow_k),
        staged,
    )
    expect_written(
        "macd.fast",
        ema_stage(values, stage_start, window.end, fast_period, settings, fast_line, k=fast_k),
        staged,
    )
    fast_line -= slow_line

    signal_line = scratch_buffer(window.dtype, output_length=count, lookback=0)
    expect_written(
        "macd.signal",
        ema_stage(fast_line, signal_lookback, staged, signal_period, settings, signal_line),
        count,
    )
    macd_line = fast_line[signal_lookback:]
    out_macd[:count] = macd_line
    out_signal[:count] = signal_line
    out_hist[:count] = macd_line - signal_line
    return count


def macd(
    values: np.ndarray,
    in_range: RangeLike,
    out_macd: np.ndarray,
    out_signal: np.ndarray,
    out_hist: np.ndarray,
    *,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute MACD line, signal line and histogram from exponential averages.

    Args:
        values: Input series.
        in_range: Requested range.
        out_macd: MACD line buffer.
        out_signal: Signal line buffer.
        out_hist: Histogram buffer.
        fast_period: Fast period, `>= 2`.
        slow_period: Slow period, `>= 2`; swapped with `fast_period` when smaller.
        signal_period: Signal period, `>= 1`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range shared by all three outputs.
    Assumptions:
        One settings snapshot drives every stage.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If composed stages misalign.
    Side Effects:
        Writes into the three output buffers.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=macd_lookback(fast_period, slow_period, signal_period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out_macd", out_macd), ("out_signal", out_signal), ("out_hist", out_hist)),
    )
    if window.early is not None:
        return window.early
    fast, slow = int(fast_period), int(slow_period)
    if slow < fast:
        fast, slow = slow, fast
    written = _macd_from_ema(
        values,
        window,
        fast,
        per_to_k(fast),
        slow,
        per_to_k(slow),
        int(signal_period),
        snapshot,
        out_macd,
        out_signal,
        out_hist,
    )
    return window.finish(written)


def macdfix(
    values: np.ndarray,
    in_range: RangeLike,
    out_macd: np.ndarray,
    out_signal: np.ndarray,
    out_hist: np.ndarray,
    *,
    signal_period: int = 9,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=macdfix_lookback(signal_period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out_macd", out_macd), ("out_signal", out_signal), ("out_hist", out_hist)),
    )
    if window.early is not None:
        return window.early
    written = _macd_from_ema(
        values,
        window,
        MACDFIX_FAST_PERIOD,
        MACDFIX_FAST_K,
        MACDFIX_SLOW_PERIOD,
        MACDFIX_SLOW_K,
        int(signal_period),
        snapshot,
        out_macd,
        out_signal,
        out_hist,
    )
    return window.finish(written)


def macdext(
    values: np.ndarray,
    in_range: RangeLike,
    out_macd: np.ndarray,
    out_signal: np.ndarray,
    out_hist: np.ndarray,
    *,
    fast_period: int = 12,
    fast_ma_type: MAType | str = MAType.SMA,
    slow_period: int = 26,
    slow_ma_type: MAType | str = MAType.SMA,
    signal_period: int = 9,
    signal_ma_type: MAType | str = MAType.SMA,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute MACD with a selectable moving-average variant per line.

    Args:
        values: Input series.
        in_range: Requested range.
        out_macd: MACD line buffer.
        out_signal: Signal line buffer.
        out_hist: Histogram buffer.
        fast_period: Fast period, `>= 2`.
        fast_ma_type: Fast line variant.
        slow_period: Slow period, `>= 2`; swapped together with its variant when
            smaller than `fast_period`.
        slow_ma_type: Slow line variant.
        signal_period: Signal period, `>= 1`.
        signal_ma_type: Signal line variant.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Fast and slow lines both start at `effective start - signal lookback`.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If composed stages misalign.
    Side Effects:
        Writes into the three output buffers.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=macdext_lookback(
            fast_period,
            fast_ma_type,
            slow_period,
            slow_ma_type,
            signal_period,
            signal_ma_type,
            settings=snapshot,
        ),
        inputs=(("values", values),),
        outputs=(("out_macd", out_macd), ("out_signal", out_signal), ("out_hist", out_hist)),
    )
    if window.early is not None:
        return window.early

    fast = (int(fast_period), resolved_ma_type(fast_ma_type))
    slow = (int(slow_period), resolved_ma_type(slow_ma_type))
    if slow[0] < fast[0]:
        fast, slow = slow, fast
    signal_type = resolved_ma_type(signal_ma_type)

    count = window.length
    signal_lookback = ma_lookback(signal_period, signal_type, settings=snapshot)
    stage_start = window.start - signal_lookback
    staged = count + signal_lookback

    slow_line = scratch_buffer(window.dtype, output_length=count, lookback=signal_lookback)
    fast_line = scratch_buffer(window.dtype, output_length=count, lookback=signal_lookback)
    expect_written(
        "macdext.slow",
        ma_stage(values, stage_start, window.end, slow[0], slow[1], snapshot, slow_line),
        staged,
    )
    expect_written(
        "macdext.fast",
        ma_stage(values, stage_start, window.end, fast[0], fast[1], snapshot, fast_line),
        staged,
    )
    fast_line -= slow_line

    signal_line = scratch_buffer(window.dtype, output_length=count, lookback=0)
    expect_written(
        "macdext.signal",
        ma_stage(
            fast_line,
            signal_lookback,
            staged,
            int(signal_period),
            signal_type,
            snapshot,
            signal_line,
        ),
        count,
    )
    macd_line = fast_line[signal_lookback:]
    out_macd[:count] = macd_line
    out_signal[:count] = signal_line
    out_hist[:count] = macd_line - signal_line
    return window.finish(count)


def trix(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 30,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute TRIX: one-period rate of change of a triple exponential average.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: EMA period, `>= 1`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        The three EMA stages run in place on one scratch buffer that keeps one extra
        leading sample for the rate of change.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
        InternalInvariantError: If a stage misaligns.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    window = open_window(
        in_range=in_range,
        lookback=trix_lookback(period, settings=snapshot),
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early

    count = window.length
    stage_lookback = ema_stage_lookback(period, snapshot)
    buffer = scratch_buffer(window.dtype, output_length=count, lookback=2 * stage_lookback + 1)
    first_start = window.start - 2 * stage_lookback - 1
    staged = count + 2 * stage_lookback + 1
    expect_written(
        "trix.ema1",
        ema_stage(values, first_start, window.end, int(period), snapshot, buffer),
        staged,
    )
    for stage in ("trix.ema2", "trix.ema3"):
        staged -= stage_lookback
        expect_written(
            stage,
            ema_stage(buffer, stage_lookback, stage_lookback + staged, int(period), snapshot, buffer),
            staged,
        )
    return window.finish(change_kernel(buffer, 1, staged, 1, CHANGE_ROC, out))


# Wilder oscillators


def _wilder_oscillator(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int,
    lookback: int,
    func: UnstableFunc,
    settings: CompatibilitySettings,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    legacy_first_output = settings.is_metastock and settings.unstable_period(func) == 0
    written = wilder_oscillator_kernel(
        values,
        window.start - lookback,
        window.start,
        window.end,
        int(period),
        legacy_first_output,
        func is UnstableFunc.CMO,
        out,
    )
    return window.finish(written)


def rsi(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the relative strength index `100 * gain / (gain + loss)`.

    Args:
        values: Input series.
        in_range: Requested range.
        out: Output buffer.
        period: Wilder smoothing period, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Output is 0 when average gain and loss are both 0. METASTOCK with no unstable
        period reproduces the legacy first sample.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    return _wilder_oscillator(
        values,
        in_range,
        out,
        period=period,
        lookback=rsi_lookback(period, settings=snapshot),
        func=UnstableFunc.RSI,
        settings=snapshot,
    )


def cmo(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    snapshot = resolve_compatibility_settings(settings)
    return _wilder_oscillator(
        values,
        in_range,
        out,
        period=period,
        lookback=cmo_lookback(period, settings=snapshot),
        func=UnstableFunc.CMO,
        settings=snapshot,
    )


# Rate of change


def _change(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int,
    lookback: int,
    mode: int,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=(("values", values),),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(change_kernel(values, window.start, window.end, int(period), mode, out))


def mom(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 10,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _change(
        values,
        in_range,
        out,
        period=period,
        lookback=mom_lookback(period),
        mode=CHANGE_DIFF,
    )


def roc(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 10,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _change(
        values,
        in_range,
        out,
        period=period,
        lookback=roc_lookback(period),
        mode=CHANGE_ROC,
    )


def rocp(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 10,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _change(
        values,
        in_range,
        out,
        period=period,
        lookback=rocp_lookback(period),
        mode=CHANGE_ROCP,
    )


def rocr(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 10,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _change(
        values,
        in_range,
        out,
        period=period,
        lookback=rocr_lookback(period),
        mode=CHANGE_ROCR,
    )


def rocr100(
    values: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 10,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    return _change(
        values,
        in_range,
        out,
        period=period,
        lookback=rocr100_lookback(period),
        mode=CHANGE_ROCR100,
    )


# Range position


def willr(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=willr_lookback(period),
        inputs=(("high", high), ("low", low), ("close", close)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        willr_kernel(high, low, close, window.start, window.end, int(period), out)
    )


def aroon(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out_down: np.ndarray,
    out_up: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute Aroon down and up lines over `period + 1` samples.

    Args:
        high: High series.
        low: Low series.
        in_range: Requested range.
        out_down: Aroon down buffer.
        out_up: Aroon up buffer.
        period: Lookback window, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Ties resolve to the most recent extreme.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into both output buffers.
    """
    window = open_window(
        in_range=in_range,
        lookback=aroon_lookback(period),
        inputs=(("high", high), ("low", low)),
        outputs=(("out_down", out_down), ("out_up", out_up)),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        aroon_kernel(high, low, window.start, window.end, int(period), out_down, out_up, False)
    )


def aroonosc(
    high: np.ndarray,
    low: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=aroonosc_lookback(period),
        inputs=(("high", high), ("low", low)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(
        aroon_kernel(high, low, window.start, window.end, int(period), out, out, True)
    )


# Typical-price oscillators


def cci(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    window = open_window(
        in_range=in_range,
        lookback=cci_lookback(period),
        inputs=(("high", high), ("low", low), ("close", close)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    return window.finish(cci_kernel(high, low, close, window.start, window.end, int(period), out))


def mfi(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    volume: np.ndarray,
    in_range: RangeLike,
    out: np.ndarray,
    *,
    period: int = 14,
    settings: CompatibilitySettings | None = None,
) -> ComputeResult:
    """
    Compute the money flow index, a volume-weighted RSI of the typical price.

    Args:
        high: High series.
        low: Low series.
        close: Close series.
        volume: Volume series, same dtype as the prices.
        in_range: Requested range.
        out: Output buffer.
        period: Number of money-flow terms, `>= 2`.
        settings: Per-call settings or `None` for the installed snapshot.
    Returns:
        ComputeResult: Status and written range.
    Assumptions:
        Output is 0 while the combined money flow of the window is below 1.
    Raises:
        TypeError: On invalid buffer types.
        ValueError: On non-1-D or read-only buffers.
    Side Effects:
        Writes into `out`.
    """
    snapshot = resolve_compatibility_settings(settings)
    lookback = mfi_lookback(period, settings=snapshot)
    window = open_window(
        in_range=in_range,
        lookback=lookback,
        inputs=(("high", high), ("low", low), ("close", close), ("volume", volume)),
        outputs=(("out", out),),
    )
    if window.early is not None:
        return window.early
    written = mfi_kernel(
        high,
        low,
        close,
        volume,
        window.start - lookback,
        window.start,
        window.end,
        int(period),
        out,
    )
    return window.finish(written)


__all__ = [
    "apo",
    "aroon",
    "aroonosc",
    "cci",
    "cmo",
    "macd",
    "macdext",
    "macdfix",
    "mfi",
    "mom",
    "ppo",
    "roc",
    "rocp",
    "rocr",
    "rocr100",
    "rsi",
    "trix",
    "willr",
]
