from __future__ import annotations

from typing import Iterator

import pytest

from taengine.platform.config import reset_compatibility_settings


@pytest.fixture(autouse=True)
def _reset_compatibility_settings() -> Iterator[None]:
    """
    Restore default process-wide compatibility settings around every test.

    Args:
        None.
    Returns:
        Iterator[None]: Fixture generator.
    Assumptions:
        Tests that mutate the holder never leak their snapshot into other tests.
    Raises:
        None.
    Side Effects:
        Installs the default snapshot before and after each test.
    """
    reset_compatibility_settings()
    yield
    reset_compatibility_settings()
