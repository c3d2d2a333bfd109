from .internal_invariant_error import InternalInvariantError
from .invalid_parameter_error import InvalidParameterError
from .invalid_range_error import InvalidRangeError
from .missing_input_series_error import MissingInputSeriesError
from .unknown_indicator_error import UnknownIndicatorError

__all__ = [
    "InternalInvariantError",
    "InvalidParameterError",
    "InvalidRangeError",
    "MissingInputSeriesError",
    "UnknownIndicatorError",
]
