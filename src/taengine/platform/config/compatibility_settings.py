"""
Process-wide compatibility settings: unstable periods and warm-up alignment mode.

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.indicators.engine.lookback,
  taengine.platform.config.indicators_runtime_config

Every indicator call snapshots the installed `CompatibilitySettings` exactly once at
entry (or uses the `settings=` it was given), so a call never observes two
configurations. Setters swap the snapshot under a lock; configure before use and avoid
mutating while other threads are computing.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from taengine.indicators.domain.entities import CompatibilityMode, UnstableFunc

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompatibilitySettings:
    """
    Immutable compatibility snapshot read by lookback and warm-up logic.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.indicators.engine.lookback,
      taengine.indicators.adapters.outbound.compute_numba.kernels.wilder
    """

    mode: CompatibilityMode = CompatibilityMode.DEFAULT
    unstable_periods: Mapping[UnstableFunc, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """
        Validate and freeze settings.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Families missing from `unstable_periods` default to zero.
        Raises:
            ValueError: If mode is unknown, a key is `ALL` or unknown, or a period is
                negative.
            TypeError: If a period is not an int.
        Side Effects:
            Normalizes `mode` to `CompatibilityMode` and freezes `unstable_periods` into a
            read-only mapping covering every family.
        """
        object.__setattr__(self, "mode", CompatibilityMode(self.mode))

        normalized: dict[UnstableFunc, int] = {func: 0 for func in UnstableFunc.families()}
        for raw_func, period in self.unstable_periods.items():
            func = UnstableFunc(raw_func)
            if func is UnstableFunc.ALL:
                raise ValueError("unstable_periods keys must be concrete families, not ALL")
            normalized[func] = _validate_unstable_period(period, func=func)
        object.__setattr__(self, "unstable_periods", MappingProxyType(normalized))

    @property
    def is_metastock(self) -> bool:
        return self.mode is CompatibilityMode.METASTOCK

    def unstable_period(self, func: UnstableFunc) -> int:
        """
        Return the unstable-period addend configured for one family.

        Args:
            func: Concrete indicator family.
        Returns:
            int: Non-negative extra warm-up sample count.
        Assumptions:
            None.
        Raises:
            ValueError: If `func` is `ALL`.
        Side Effects:
            None.
        """
        func = UnstableFunc(func)
        if func is UnstableFunc.ALL:
            raise ValueError("unstable period is defined per family; ALL has no single value")
        return self.unstable_periods[func]

    def with_mode(self, mode: CompatibilityMode | str) -> CompatibilitySettings:
        return replace(self, mode=CompatibilityMode(mode))

    def with_unstable_period(self, func: UnstableFunc | str, period: int) -> CompatibilitySettings:
        """
        Return a copy with one family (or every family for `ALL`) updated.

        Args:
            func: Target family or `UnstableFunc.ALL`.
            period: New non-negative unstable period.
        Returns:
            CompatibilitySettings: Updated snapshot; `self` is unchanged.
        Assumptions:
            None.
        Raises:
            ValueError: If `period` is negative.
            TypeError: If `period` is not an int.
        Side Effects:
            None.
        """
        func = UnstableFunc(func)
        value = _validate_unstable_period(period, func=func)
        updated = dict(self.unstable_periods)
        targets = UnstableFunc.families() if func is UnstableFunc.ALL else (func,)
        for target in targets:
            updated[target] = value
        return replace(self, unstable_periods=updated)


def _validate_unstable_period(period: int, *, func: UnstableFunc) -> int:
    if isinstance(period, bool) or not isinstance(period, int):
        raise TypeError(
            f"unstable period for {func.value} must be int, got {type(period).__name__}"
        )
    if period < 0:
        raise ValueError(f"unstable period for {func.value} must be >= 0, got {period}")
    return period


_DEFAULT_SETTINGS = CompatibilitySettings()
_lock = threading.Lock()
_current = _DEFAULT_SETTINGS


def current_compatibility_settings() -> CompatibilitySettings:
    """
    Return the currently installed snapshot.

    Args:
        None.
    Returns:
        CompatibilitySettings: Snapshot reference; immutable, safe to hold for a whole call.
    Assumptions:
        Reading a module global reference is atomic.
    Raises:
        None.
    Side Effects:
        None.
    """
    return _current


def resolve_compatibility_settings(
    settings: CompatibilitySettings | None,
) -> CompatibilitySettings:
    """
    Return explicit per-call settings, or snapshot the installed ones.

    Args:
        settings: Per-call settings or `None`.
    Returns:
        CompatibilitySettings: Settings to use for the whole call.
    Assumptions:
        Called once at indicator entry; the result is threaded into every stage.
    Raises:
        TypeError: If `settings` is neither `None` nor `CompatibilitySettings`.
    Side Effects:
        None.
    """
    if settings is None:
        return _current
    if not isinstance(settings, CompatibilitySettings):
        raise TypeError(
            f"settings must be CompatibilitySettings or None, got {type(settings).__name__}"
        )
    return settings


def install_compatibility_settings(settings: CompatibilitySettings) -> None:
    """
    Replace the process-wide snapshot.

    Args:
        settings: New snapshot.
    Returns:
        None.
    Assumptions:
        In-flight computations keep the snapshot they already took.
    Raises:
        TypeError: If `settings` is not `CompatibilitySettings`.
    Side Effects:
        Mutates module state and emits one INFO log record.
    """
    global _current
    if not isinstance(settings, CompatibilitySettings):
        raise TypeError(
            f"settings must be CompatibilitySettings, got {type(settings).__name__}"
        )
    with _lock:
        _current = settings
    log.info(
        "compatibility settings installed",
        extra={
            "compatibility_mode": settings.mode.value,
            "unstable_periods": {
                func.value: period for func, period in settings.unstable_periods.items()
            },
        },
    )


def reset_compatibility_settings() -> None:
    install_compatibility_settings(_DEFAULT_SETTINGS)


def get_compatibility_mode() -> CompatibilityMode:
    return _current.mode


def set_compatibility_mode(mode: CompatibilityMode | str) -> None:
    """
    Switch the process-wide warm-up alignment mode.

    Args:
        mode: `CompatibilityMode` member or its string value.
    Returns:
        None.
    Assumptions:
        Takes effect on the next indicator call that snapshots settings.
    Raises:
        ValueError: If `mode` is unknown.
    Side Effects:
        Mutates module state and emits one INFO log record.
    """
    global _current
    normalized = CompatibilityMode(mode)
    with _lock:
        _current = _current.with_mode(normalized)
    log.info("compatibility mode set", extra={"compatibility_mode": normalized.value})


def get_unstable_period(func: UnstableFunc | str) -> int:
    return _current.unstable_period(UnstableFunc(func))


def set_unstable_period(func: UnstableFunc | str, period: int) -> None:
    """
    Set the unstable-period addend for one family, or every family via `ALL`.

    Args:
        func: Target family or `UnstableFunc.ALL`.
        period: Non-negative extra warm-up sample count.
    Returns:
        None.
    Assumptions:
        Takes effect on the next indicator call that snapshots settings.
    Raises:
        ValueError: If `func` is unknown or `period` is negative.
        TypeError: If `period` is not an int.
    Side Effects:
        Mutates module state and emits one INFO log record.
    """
    global _current
    normalized = UnstableFunc(func)
    with _lock:
        _current = _current.with_unstable_period(normalized, period)
    log.info(
        "unstable period set",
        extra={"unstable_func": normalized.value, "unstable_period": period},
    )


__all__ = [
    "CompatibilitySettings",
    "current_compatibility_settings",
    "get_compatibility_mode",
    "get_unstable_period",
    "install_compatibility_settings",
    "reset_compatibility_settings",
    "resolve_compatibility_settings",
    "set_compatibility_mode",
    "set_unstable_period",
]
