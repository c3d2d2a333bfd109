"""
Numpy oracle adapters for indicator kernel validation.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.adapters.outbound.compute_numba.kernels
"""

from .ma import dema_f64, ema_f64, sma_f64, trima_f64, wma_f64
from .momentum import (
    aroon_f64,
    cci_f64,
    cmo_f64,
    mfi_f64,
    mom_f64,
    roc_f64,
    rsi_f64,
    stoch_fast_k_f64,
    willr_f64,
)
from .volatility import (
    atr_f64,
    avgdev_f64,
    linear_regression_f64,
    rolling_max_f64,
    rolling_min_f64,
    rolling_sum_f64,
    stddev_f64,
    true_range_f64,
    variance_f64,
)

__all__ = [
    "aroon_f64",
    "atr_f64",
    "avgdev_f64",
    "cci_f64",
    "cmo_f64",
    "dema_f64",
    "ema_f64",
    "linear_regression_f64",
    "mfi_f64",
    "mom_f64",
    "roc_f64",
    "rolling_max_f64",
    "rolling_min_f64",
    "rolling_sum_f64",
    "rsi_f64",
    "sma_f64",
    "stddev_f64",
    "stoch_fast_k_f64",
    "trima_f64",
    "true_range_f64",
    "variance_f64",
    "willr_f64",
    "wma_f64",
]
