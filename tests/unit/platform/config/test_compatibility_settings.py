from __future__ import annotations

import logging

import pytest

from taengine.indicators.domain.entities import CompatibilityMode, UnstableFunc
from taengine.platform.config import (
    CompatibilitySettings,
    current_compatibility_settings,
    get_compatibility_mode,
    get_unstable_period,
    install_compatibility_settings,
    resolve_compatibility_settings,
    set_compatibility_mode,
    set_unstable_period,
)


def test_default_settings_have_zero_unstable_periods_for_every_family() -> None:
    """
    Verify a default snapshot covers every family with zero and DEFAULT mode.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        `UnstableFunc.families()` excludes `ALL`.
    Raises:
        AssertionError: If defaults drift.
    Side Effects:
        None.
    """
    settings = CompatibilitySettings()

    assert settings.mode is CompatibilityMode.DEFAULT
    assert not settings.is_metastock
    assert set(settings.unstable_periods) == set(UnstableFunc.families())
    assert all(period == 0 for period in settings.unstable_periods.values())


def test_settings_reject_negative_and_non_int_unstable_periods() -> None:
    with pytest.raises(ValueError):
        CompatibilitySettings(unstable_periods={UnstableFunc.EMA: -1})
    with pytest.raises(TypeError):
        CompatibilitySettings(unstable_periods={UnstableFunc.EMA: 1.5})
    with pytest.raises(ValueError):
        CompatibilitySettings(unstable_periods={UnstableFunc.ALL: 3})


def test_with_unstable_period_all_updates_every_family_without_mutating_source() -> None:
    """
    Verify `ALL` fans out to each family and returns a new snapshot.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Snapshots are immutable value objects.
    Raises:
        AssertionError: If the source snapshot changes or a family is skipped.
    Side Effects:
        None.
    """
    source = CompatibilitySettings()

    updated = source.with_unstable_period(UnstableFunc.ALL, 7)

    assert all(updated.unstable_period(func) == 7 for func in UnstableFunc.families())
    assert source.unstable_period(UnstableFunc.RSI) == 0
    with pytest.raises(ValueError):
        updated.unstable_period(UnstableFunc.ALL)


def test_process_wide_setters_replace_snapshot_and_log(caplog: pytest.LogCaptureFixture) -> None:
    """
    Verify setters install a new snapshot while earlier references stay unchanged.

    Args:
        caplog: pytest log capture fixture.
    Returns:
        None.
    Assumptions:
        Setters log one INFO record each.
    Raises:
        AssertionError: If the holder mutates snapshots in place or skips logging.
    Side Effects:
        Mutates process-wide settings; restored by the autouse fixture.
    """
    before = current_compatibility_settings()

    with caplog.at_level(logging.INFO, logger="taengine.platform.config.compatibility_settings"):
        set_compatibility_mode("metastock")
        set_unstable_period(UnstableFunc.ATR, 4)

    assert get_compatibility_mode() is CompatibilityMode.METASTOCK
    assert get_unstable_period("atr") == 4
    assert get_unstable_period(UnstableFunc.NATR) == 0
    assert before.mode is CompatibilityMode.DEFAULT
    assert before.unstable_period(UnstableFunc.ATR) == 0
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["compatibility mode set", "unstable period set"]


def test_set_unstable_period_rejects_negative_value_and_keeps_snapshot() -> None:
    before = current_compatibility_settings()

    with pytest.raises(ValueError):
        set_unstable_period(UnstableFunc.EMA, -2)

    assert current_compatibility_settings() is before


def test_resolve_prefers_explicit_settings_over_installed_snapshot() -> None:
    """
    Verify per-call settings win and `None` resolves to the installed snapshot.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Resolution happens once per call.
    Raises:
        AssertionError: If resolution ignores explicit settings.
    Side Effects:
        Installs one snapshot; restored by the autouse fixture.
    """
    installed = CompatibilitySettings(mode=CompatibilityMode.METASTOCK)
    explicit = CompatibilitySettings(unstable_periods={UnstableFunc.EMA: 2})
    install_compatibility_settings(installed)

    assert resolve_compatibility_settings(None) is installed
    assert resolve_compatibility_settings(explicit) is explicit
    with pytest.raises(TypeError):
        resolve_compatibility_settings({"mode": "default"})  # type: ignore[arg-type]
