"""
Public buffer-oriented indicator functions.

Docs: docs/architecture/indicators/windowed-engine-core.md
"""

from ._base import ComputeResult
from .directional import adx, adxr, dx, minus_di, minus_dm, plus_di, plus_dm
from .math_operators import (
    max_index,
    min_index,
    min_max,
    min_max_index,
    rolling_max,
    rolling_min,
    rolling_sum,
)
from .momentum import (
    apo,
    aroon,
    aroonosc,
    cci,
    cmo,
    macd,
    macdext,
    macdfix,
    mfi,
    mom,
    ppo,
    roc,
    rocp,
    rocr,
    rocr100,
    rsi,
    trix,
    willr,
)
from .overlap import (
    bbands,
    dema,
    ema,
    kama,
    ma,
    mama,
    midpoint,
    midprice,
    sma,
    t3,
    tema,
    trima,
    wma,
)
from .price_transform import avgprice, medprice, typprice, wclprice
from .statistic import (
    avgdev,
    linearreg,
    linearreg_angle,
    linearreg_intercept,
    linearreg_slope,
    stddev,
    tsf,
    var,
)
from .stochastic import stoch, stochf, stochrsi
from .volatility import atr, natr, trange

__all__ = [
    "ComputeResult",
    "adx",
    "adxr",
    "apo",
    "aroon",
    "aroonosc",
    "atr",
    "avgdev",
    "avgprice",
    "bbands",
    "cci",
    "cmo",
    "dema",
    "dx",
    "ema",
    "kama",
    "linearreg",
    "linearreg_angle",
    "linearreg_intercept",
    "linearreg_slope",
    "ma",
    "macd",
    "macdext",
    "macdfix",
    "mama",
    "max_index",
    "medprice",
    "mfi",
    "midpoint",
    "midprice",
    "min_index",
    "min_max",
    "min_max_index",
    "minus_di",
    "minus_dm",
    "mom",
    "natr",
    "plus_di",
    "plus_dm",
    "ppo",
    "roc",
    "rocp",
    "rocr",
    "rocr100",
    "rolling_max",
    "rolling_min",
    "rolling_sum",
    "rsi",
    "sma",
    "stddev",
    "stoch",
    "stochf",
    "stochrsi",
    "t3",
    "tema",
    "trange",
    "trima",
    "trix",
    "tsf",
    "typprice",
    "var",
    "wclprice",
    "willr",
    "wma",
]
