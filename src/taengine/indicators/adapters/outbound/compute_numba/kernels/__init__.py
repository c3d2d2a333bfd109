from ._common import calc_highest, calc_lowest, copy_window, per_to_k, true_range_at
from .directional import (
    adx_kernel,
    directional_index_kernel,
    directional_movement_kernel,
    dx_kernel,
)
from .extrema import (
    aroon_kernel,
    max_index_kernel,
    midpoint_kernel,
    midprice_kernel,
    min_index_kernel,
    min_max_index_kernel,
    min_max_kernel,
    rolling_max_kernel,
    rolling_min_kernel,
    stoch_fast_k_kernel,
    willr_kernel,
)
from .ma import ema_kernel, kama_kernel, mama_kernel, sma_kernel, t3_kernel, wma_kernel
from .momentum import (
    CHANGE_DIFF,
    CHANGE_ROC,
    CHANGE_ROCP,
    CHANGE_ROCR,
    CHANGE_ROCR100,
    change_kernel,
)
from .price import (
    CCI_SCALE,
    avgprice_kernel,
    cci_kernel,
    medprice_kernel,
    mfi_kernel,
    typprice_kernel,
    wclprice_kernel,
)
from .stats import (
    LINEARREG_ANGLE,
    LINEARREG_FORECAST,
    LINEARREG_INTERCEPT,
    LINEARREG_SLOPE,
    LINEARREG_VALUE,
    avgdev_kernel,
    linear_regression_kernel,
    rolling_sum_kernel,
    stddev_around_mean_kernel,
    stddev_kernel,
    variance_kernel,
)
from .wilder import average_true_range_kernel, true_range_kernel, wilder_oscillator_kernel

__all__ = [
    "CCI_SCALE",
    "CHANGE_DIFF",
    "CHANGE_ROC",
    "CHANGE_ROCP",
    "CHANGE_ROCR",
    "CHANGE_ROCR100",
    "LINEARREG_ANGLE",
    "LINEARREG_FORECAST",
    "LINEARREG_INTERCEPT",
    "LINEARREG_SLOPE",
    "LINEARREG_VALUE",
    "adx_kernel",
    "aroon_kernel",
    "average_true_range_kernel",
    "avgdev_kernel",
    "avgprice_kernel",
    "calc_highest",
    "calc_lowest",
    "cci_kernel",
    "change_kernel",
    "copy_window",
    "directional_index_kernel",
    "directional_movement_kernel",
    "dx_kernel",
    "ema_kernel",
    "kama_kernel",
    "linear_regression_kernel",
    "mama_kernel",
    "max_index_kernel",
    "medprice_kernel",
    "mfi_kernel",
    "midpoint_kernel",
    "midprice_kernel",
    "min_index_kernel",
    "min_max_index_kernel",
    "min_max_kernel",
    "per_to_k",
    "rolling_max_kernel",
    "rolling_min_kernel",
    "rolling_sum_kernel",
    "sma_kernel",
    "stddev_around_mean_kernel",
    "stddev_kernel",
    "stoch_fast_k_kernel",
    "t3_kernel",
    "true_range_at",
    "true_range_kernel",
    "typprice_kernel",
    "variance_kernel",
    "wclprice_kernel",
    "wilder_oscillator_kernel",
    "willr_kernel",
    "wma_kernel",
]
