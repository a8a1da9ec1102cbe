"""
Shared pytest fixtures and configuration for continuator tests.

This module provides:
- Settings cache isolation
- Environment cleanup for ``CONTINUATOR_*`` variables
- Small step functions reused across pipeline tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.
"""

import os
from pathlib import Path
from typing import Any, Generator

import pytest

from continuator.core.settings import ContinuatorSettings, clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path: Path) -> Generator[None, None, None]:
    """
    Drop cached settings and any ``CONTINUATOR_*`` environment before each test.

    Tests run from an empty directory so a developer's ``.env`` never leaks in.
    """
    for key in list(os.environ):
        if key.startswith("CONTINUATOR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> ContinuatorSettings:
    """Default settings, independent of the environment."""
    return ContinuatorSettings()


@pytest.fixture
def debug_settings() -> ContinuatorSettings:
    """Settings with tracing turned on for every run."""
    return ContinuatorSettings(debug=True)


# =============================================================================
# Step Fixtures
# =============================================================================


def double(value: Any, advance, halt, jump) -> Any:
    return advance(value * 2)


def add_one(value: Any, advance, halt, jump) -> Any:
    return advance(value + 1)


def explode(value: Any, advance, halt, jump) -> Any:
    raise ValueError(f"boom at {value}")


@pytest.fixture
def double_step():
    return double


@pytest.fixture
def add_one_step():
    return add_one


@pytest.fixture
def exploding_step():
    return explode
