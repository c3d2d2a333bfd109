from .compatibility_mode import CompatibilityMode
from .index_range import IndexRange, RangeLike
from .indicator_def import IndicatorDef, InputSeries
from .indicator_id import IndicatorId
from .ma_type import MAType
from .output_spec import OutputSpec
from .param_def import ParamDef, ParamKind
from .ret_code import RetCode
from .unstable_func import UnstableFunc

__all__ = [
    "CompatibilityMode",
    "IndexRange",
    "IndicatorDef",
    "IndicatorId",
    "InputSeries",
    "MAType",
    "OutputSpec",
    "ParamDef",
    "ParamKind",
    "RangeLike",
    "RetCode",
    "UnstableFunc",
]
