from .indicator_engine import IndicatorEngine

__all__ = ["IndicatorEngine"]
