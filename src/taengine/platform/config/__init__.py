from .compatibility_settings import (
    CompatibilitySettings,
    current_compatibility_settings,
    get_compatibility_mode,
    get_unstable_period,
    install_compatibility_settings,
    reset_compatibility_settings,
    resolve_compatibility_settings,
    set_compatibility_mode,
    set_unstable_period,
)
from .indicators_runtime_config import IndicatorsRuntimeConfig, load_indicators_runtime_config

__all__ = [
    "CompatibilitySettings",
    "IndicatorsRuntimeConfig",
    "current_compatibility_settings",
    "get_compatibility_mode",
    "get_unstable_period",
    "install_compatibility_settings",
    "load_indicators_runtime_config",
    "reset_compatibility_settings",
    "resolve_compatibility_settings",
    "set_compatibility_mode",
    "set_unstable_period",
]
