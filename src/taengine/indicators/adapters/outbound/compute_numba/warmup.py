"""
Numba runtime configuration and warmup runner for indicator kernels.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels,
  taengine.platform.config.indicators_runtime_config
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Any, cast

import numba
import numpy as np

from taengine.platform.config import IndicatorsRuntimeConfig

from .kernels import (
    CHANGE_ROC,
    LINEARREG_VALUE,
    adx_kernel,
    aroon_kernel,
    average_true_range_kernel,
    avgdev_kernel,
    avgprice_kernel,
    cci_kernel,
    change_kernel,
    copy_window,
    directional_index_kernel,
    directional_movement_kernel,
    dx_kernel,
    ema_kernel,
    kama_kernel,
    linear_regression_kernel,
    mama_kernel,
    max_index_kernel,
    medprice_kernel,
    mfi_kernel,
    midpoint_kernel,
    midprice_kernel,
    min_index_kernel,
    min_max_index_kernel,
    min_max_kernel,
    per_to_k,
    rolling_max_kernel,
    rolling_min_kernel,
    rolling_sum_kernel,
    sma_kernel,
    stddev_around_mean_kernel,
    stddev_kernel,
    stoch_fast_k_kernel,
    t3_kernel,
    true_range_kernel,
    typprice_kernel,
    variance_kernel,
    wclprice_kernel,
    wilder_oscillator_kernel,
    willr_kernel,
    wma_kernel,
)

log = logging.getLogger(__name__)

_WARMUP_DTYPES = (np.float32, np.float64)
_WARMUP_KERNELS = (
    "copy_window",
    "rolling_max_kernel",
    "rolling_min_kernel",
    "max_index_kernel",
    "min_index_kernel",
    "min_max_kernel",
    "min_max_index_kernel",
    "midpoint_kernel",
    "midprice_kernel",
    "willr_kernel",
    "aroon_kernel",
    "stoch_fast_k_kernel",
    "sma_kernel",
    "ema_kernel",
    "wma_kernel",
    "kama_kernel",
    "t3_kernel",
    "mama_kernel",
    "change_kernel",
    "rolling_sum_kernel",
    "variance_kernel",
    "stddev_kernel",
    "stddev_around_mean_kernel",
    "avgdev_kernel",
    "linear_regression_kernel",
    "wilder_oscillator_kernel",
    "true_range_kernel",
    "average_true_range_kernel",
    "directional_movement_kernel",
    "directional_index_kernel",
    "dx_kernel",
    "adx_kernel",
    "avgprice_kernel",
    "medprice_kernel",
    "typprice_kernel",
    "wclprice_kernel",
    "mfi_kernel",
    "cci_kernel",
)


def apply_numba_runtime_config(*, config: IndicatorsRuntimeConfig) -> Path:
    """
    Point numba's on-disk cache at the configured directory.

    Args:
        config: Validated indicators runtime config.
    Returns:
        Path: Effective cache directory.
    Assumptions:
        Called before the first kernel compiles so cached artifacts land there.
    Raises:
        ValueError: If cache directory is not writable.
    Side Effects:
        Mutates process env (`NUMBA_CACHE_DIR`) and numba runtime config.
    """
    os.environ["NUMBA_CACHE_DIR"] = str(config.numba_cache_dir)

    cache_dir = ensure_numba_cache_dir_writable(path=config.numba_cache_dir)
    numba_config = cast(Any, numba.config)
    setattr(numba_config, "CACHE_DIR", str(cache_dir))
    return cache_dir


def ensure_numba_cache_dir_writable(*, path: Path) -> Path:
    """
    Create the kernel cache directory when missing and prove it accepts writes.

    Args:
        path: Candidate numba cache directory.
    Returns:
        Path: The same directory as a `Path`.
    Assumptions:
        Caller passes the directory resolved from runtime config.
    Raises:
        ValueError: If the directory cannot be created, written or cleaned up.
    Side Effects:
        Creates the directory tree and removes a per-process marker file.
    """
    cache_dir = Path(path)
    marker = cache_dir / f".taengine_write_check_{os.getpid()}"
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        marker.write_text("ok", encoding="utf-8")
        marker.unlink()
    except OSError as error:
        raise ValueError(f"numba cache directory is not writable: {cache_dir}") from error
    return cache_dir


class ComputeNumbaWarmupRunner:
    """
    Idempotent warmup runner compiling every indicator kernel for both float dtypes.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.indicators.adapters.outbound.compute_numba.kernels,
      taengine.indicators.application.services.indicator_engine
    """

    def __init__(self, *, config: IndicatorsRuntimeConfig) -> None:
        self._config = config
        self._is_warm = False

    @property
    def is_warm(self) -> bool:
        return self._is_warm

    def warmup(self) -> None:
        """
        Apply runtime config and eagerly compile indicator kernels.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Warmup inputs are deterministic and never reach callers.
        Raises:
            ValueError: If runtime config cannot be applied.
        Side Effects:
            JIT-compiles numba kernels and emits one structured log message.
        """
        if self._is_warm:
            return

        warmup_started = time.perf_counter()
        cache_dir = apply_numba_runtime_config(config=self._config)
        for dtype in _WARMUP_DTYPES:
            self._run_kernel_warmup(np.dtype(dtype))
        elapsed_seconds = time.perf_counter() - warmup_started
        log.info(
            "compute_numba warmup complete",
            extra={
                "warmup_done": True,
                "warmup_seconds": round(elapsed_seconds, 6),
                "numba_cache_dir": str(cache_dir),
                "dtypes": [np.dtype(dtype).name for dtype in _WARMUP_DTYPES],
                "kernels": list(_WARMUP_KERNELS),
            },
        )
        self._is_warm = True

    def _run_kernel_warmup(self, dtype: np.dtype) -> None:
        """
        Execute short deterministic workloads to trigger kernel compilation.

        Args:
            dtype: Element type to specialize kernels for.
        Returns:
            None.
        Assumptions:
            Window starts cover each kernel's lookback for period 5.
        Raises:
            None.
        Side Effects:
            Compiles numba kernels and allocates temporary arrays.
        """
        size = 256
        period = 5
        source = np.linspace(1.0, 2.0, size).astype(dtype)
        high = source + dtype.type(1.2)
        low = source - dtype.type(1.2)
        close = source + dtype.type(0.3)
        volume = np.linspace(1000.0, 5000.0, size).astype(dtype)
        out = np.empty(size, dtype=dtype)
        out_other = np.empty(size, dtype=dtype)
        out_idx = np.empty(size, dtype=np.int64)
        out_idx_other = np.empty(size, dtype=np.int64)
        first = period - 1

        copy_window(source, 0, size, out)

        rolling_max_kernel(source, first, size, period, out)
        rolling_min_kernel(source, first, size, period, out)
        max_index_kernel(source, first, size, period, out_idx)
        min_index_kernel(source, first, size, period, out_idx)
        min_max_kernel(source, first, size, period, out, out_other)
        min_max_index_kernel(source, first, size, period, out_idx, out_idx_other)
        midpoint_kernel(source, first, size, period, out)
        midprice_kernel(high, low, first, size, period, out)
        willr_kernel(high, low, close, first, size, period, out)
        stoch_fast_k_kernel(high, low, close, first, size, period, out)
        aroon_kernel(high, low, period, size, period, out, out_other, False)

        sma_kernel(source, first, size, period, out)
        ema_kernel(source, 0, first, size, period, per_to_k(period), False, out)
        wma_kernel(source, first, size, period, out)
        kama_kernel(source, 0, period, size, period, out)
        t3_kernel(source, 0, 6 * first, size, period, 0.7, out)
        mama_kernel(source, 0, 32, size, 0.5, 0.05, out, out_other)

        change_kernel(source, period, size, period, CHANGE_ROC, out)
        rolling_sum_kernel(source, first, size, period, out)
        variance_kernel(source, first, size, period, out)
        stddev_kernel(source, first, size, period, 1.0, out)
        sma_kernel(source, first, size, period, out_other)
        stddev_around_mean_kernel(source, first, size, period, out_other, out)
        avgdev_kernel(source, first, size, period, out)
        linear_regression_kernel(source, first, size, period, LINEARREG_VALUE, out)

        wilder_oscillator_kernel(source, 0, period, size, period, False, False, out)
        true_range_kernel(high, low, close, 1, size, out)
        average_true_range_kernel(high, low, close, period, size, period, 0, False, out)
        directional_movement_kernel(high, low, 0, first, size, period, False, out)
        directional_index_kernel(high, low, close, 0, period, size, period, True, out)
        dx_kernel(high, low, close, 0, period, size, period, out)
        adx_kernel(high, low, close, 0, 2 * period - 1, size, period, out)

        avgprice_kernel(source, high, low, close, 0, size, out)
        medprice_kernel(high, low, 0, size, out)
        typprice_kernel(high, low, close, 0, size, out)
        wclprice_kernel(high, low, close, 0, size, out)
        mfi_kernel(high, low, close, volume, 0, period, size, period, out)
        cci_kernel(high, low, close, first, size, period, out)


__all__ = [
    "ComputeNumbaWarmupRunner",
    "apply_numba_runtime_config",
    "ensure_numba_cache_dir_writable",
]
