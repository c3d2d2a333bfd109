from .indicator_output import IndicatorOutput

__all__ = ["IndicatorOutput"]
