"""
Runtime config loader for the indicators engine (numba cache and compatibility).

Docs: docs/architecture/indicators/windowed-engine-core.md
Related: taengine.platform.config.compatibility_settings,
  taengine.indicators.adapters.outbound.compute_numba.warmup
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from taengine.indicators.domain.entities import CompatibilityMode, UnstableFunc

from .compatibility_settings import CompatibilitySettings

_ENV_NAME_KEY = "TAENGINE_ENV"
_CONFIG_PATH_KEY = "TAENGINE_INDICATORS_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")

_CACHE_DIR_ENV_KEYS = ("TAENGINE_NUMBA_CACHE_DIR", "NUMBA_CACHE_DIR")
_MODE_ENV_KEYS = ("TAENGINE_COMPATIBILITY_MODE",)

_DEFAULT_NUMBA_CACHE_DIR = Path(".cache/numba")


@dataclass(frozen=True, slots=True)
class IndicatorsRuntimeConfig:
    """
    Immutable runtime config for the indicators engine.

    Docs: docs/architecture/indicators/windowed-engine-core.md
    Related: taengine.indicators.adapters.outbound.compute_numba.warmup,
      taengine.platform.config.compatibility_settings
    """

    numba_cache_dir: Path = _DEFAULT_NUMBA_CACHE_DIR
    compatibility: CompatibilitySettings = field(default_factory=CompatibilitySettings)

    def __post_init__(self) -> None:
        """
        Validate runtime config invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Compatibility settings validate themselves on construction.
        Raises:
            ValueError: If cache directory path is blank.
        Side Effects:
            Normalizes cache directory path to `Path`.
        """
        if not str(self.numba_cache_dir).strip():
            raise ValueError("numba_cache_dir must be a non-empty path")
        object.__setattr__(self, "numba_cache_dir", Path(self.numba_cache_dir))


def load_indicators_runtime_config(
    *,
    environ: Mapping[str, str],
) -> IndicatorsRuntimeConfig:
    """
    Load indicators runtime config from YAML and env overrides.

    Args:
        environ: Environment mapping used to resolve env and override values.
    Returns:
        IndicatorsRuntimeConfig: Validated runtime settings.
    Assumptions:
        Optional `compute.numba` and `compatibility` sections live in indicators YAML.
        Precedence is env, then YAML, then default.
    Raises:
        FileNotFoundError: If indicators YAML path does not exist.
        ValueError: If YAML or environment values are invalid.
    Side Effects:
        Reads one YAML file from disk.
    """
    config_path = _resolve_indicators_config_path(environ=environ)
    raw = _load_yaml_mapping(path=config_path)
    numba_payload = _optional_section(raw, "compute", "numba")
    compatibility_payload = _optional_section(raw, "compatibility")

    numba_cache_dir = _resolve_path_setting(
        environ=environ,
        env_keys=_CACHE_DIR_ENV_KEYS,
        payload=numba_payload,
        payload_key="numba_cache_dir",
        default=_DEFAULT_NUMBA_CACHE_DIR,
    )
    mode = _resolve_mode_setting(environ=environ, payload=compatibility_payload)
    unstable_periods = _resolve_unstable_periods(payload=compatibility_payload)

    return IndicatorsRuntimeConfig(
        numba_cache_dir=numba_cache_dir,
        compatibility=CompatibilitySettings(mode=mode, unstable_periods=unstable_periods),
    )


def _resolve_indicators_config_path(*, environ: Mapping[str, str]) -> Path:
    """
    Resolve indicators YAML path using explicit override or `TAENGINE_ENV`.

    Args:
        environ: Environment mapping.
    Returns:
        Path: Indicators YAML path.
    Assumptions:
        `TAENGINE_INDICATORS_CONFIG` has priority over env-derived path.
    Raises:
        ValueError: If env value is invalid.
    Side Effects:
        None.
    """
    override = environ.get(_CONFIG_PATH_KEY, "").strip()
    if override:
        return Path(override)

    env_name = _resolve_env_name(environ=environ)
    return Path("configs") / env_name / "indicators.yaml"


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    raw_env = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env!r}"
        )
    return raw_env


def _load_yaml_mapping(*, path: Path) -> Mapping[str, Any]:
    """
    Load top-level mapping from indicators YAML.

    Args:
        path: Indicators config path.
    Returns:
        Mapping[str, Any]: Parsed document, or empty mapping for an empty file.
    Assumptions:
        Unknown keys are ignored by this loader.
    Raises:
        FileNotFoundError: If YAML path does not exist.
        ValueError: If YAML top-level is not a mapping.
    Side Effects:
        Reads one UTF-8 file from disk.
    """
    if not path.exists():
        raise FileNotFoundError(f"indicators config not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("indicators config must be a mapping at top-level")
    return raw


def _optional_section(raw: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    """
    Walk nested optional mapping sections.

    Args:
        raw: Parsed YAML document.
        *keys: Section path, e.g. `("compute", "numba")`.
    Returns:
        Mapping[str, Any]: Section mapping or empty mapping when absent.
    Assumptions:
        Absent sections are allowed at every level.
    Raises:
        ValueError: If a present section is not a mapping.
    Side Effects:
        None.
    """
    current: Mapping[str, Any] = raw
    for depth, key in enumerate(keys):
        value = current.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            dotted = ".".join(keys[: depth + 1])
            raise ValueError(f"{dotted} section must be a mapping")
        current = value
    return current


def _resolve_path_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    default: Path,
) -> Path:
    """
    Resolve path setting from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        env_keys: Candidate env variable names by priority.
        payload: Parsed YAML subsection.
        payload_key: YAML key name.
        default: Fallback default path.
    Returns:
        Path: Resolved non-empty path.
    Assumptions:
        Relative paths are allowed and resolved by caller context.
    Raises:
        ValueError: If provided path is blank or non-string in YAML.
    Side Effects:
        None.
    """
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return Path(raw)

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default
    if not isinstance(payload_value, str):
        raise ValueError(
            f"expected string for compute.numba.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    normalized = payload_value.strip()
    if not normalized:
        raise ValueError(f"compute.numba.{payload_key} must be non-empty")
    return Path(normalized)


def _resolve_mode_setting(
    *,
    environ: Mapping[str, str],
    payload: Mapping[str, Any],
) -> CompatibilityMode:
    """
    Resolve compatibility mode from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        payload: Parsed `compatibility` section.
    Returns:
        CompatibilityMode: Resolved mode.
    Assumptions:
        Mode names are case-insensitive.
    Raises:
        ValueError: If the value is not a known mode.
    Side Effects:
        None.
    """
    for env_key in _MODE_ENV_KEYS:
        raw = environ.get(env_key, "").strip()
        if raw:
            return _parse_mode(raw, key=env_key)

    payload_value = payload.get("mode")
    if payload_value is None:
        return CompatibilityMode.DEFAULT
    if not isinstance(payload_value, str):
        raise ValueError(
            f"expected string for compatibility.mode, got {type(payload_value).__name__}"
        )
    return _parse_mode(payload_value, key="compatibility.mode")


def _parse_mode(raw: str, *, key: str) -> CompatibilityMode:
    normalized = raw.strip().lower()
    try:
        return CompatibilityMode(normalized)
    except ValueError as error:
        allowed = tuple(mode.value for mode in CompatibilityMode)
        raise ValueError(f"{key} must be one of {allowed}, got {raw!r}") from error


def _resolve_unstable_periods(*, payload: Mapping[str, Any]) -> dict[UnstableFunc, int]:
    """
    Parse `compatibility.unstable_periods` into a family mapping.

    Args:
        payload: Parsed `compatibility` section.
    Returns:
        dict[UnstableFunc, int]: Explicit per-family periods; `all` expands to every
            family and is applied before family-specific keys.
    Assumptions:
        Family names are case-insensitive.
    Raises:
        ValueError: If the section is not a mapping, a family is unknown, or a value is
            not a non-negative int.
    Side Effects:
        None.
    """
    section = payload.get("unstable_periods")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError("compatibility.unstable_periods section must be a mapping")

    parsed: dict[UnstableFunc, int] = {}
    for raw_name, raw_value in section.items():
        key = f"compatibility.unstable_periods.{raw_name}"
        try:
            func = UnstableFunc(str(raw_name).strip().lower())
        except ValueError as error:
            raise ValueError(f"unknown unstable family: {key}") from error
        if isinstance(raw_value, bool) or not isinstance(raw_value, int):
            raise ValueError(f"expected int for {key}, got {type(raw_value).__name__}")
        if raw_value < 0:
            raise ValueError(f"{key} must be >= 0, got {raw_value}")
        parsed[func] = raw_value

    resolved: dict[UnstableFunc, int] = {}
    if UnstableFunc.ALL in parsed:
        for func in UnstableFunc.families():
            resolved[func] = parsed[UnstableFunc.ALL]
    for func, value in parsed.items():
        if func is not UnstableFunc.ALL:
            resolved[func] = value
    return resolved


__all__ = [
    "IndicatorsRuntimeConfig",
    "load_indicators_runtime_config",
]
