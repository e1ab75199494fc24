"""
Shared pytest fixtures and configuration for scenario tests.

This module provides:
- Auto-marking of tests by location (unit / integration)
- Settings isolation: SCENARIO_* env vars are cleared and the cached
  settings instance is reset around every test
- Structlog isolation: configuration reset after every test
- A recording spy for asserting callbacks were (not) invoked
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
import structlog
from structlog.testing import capture_logs

# Ensure scenario package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from scenario.core.settings import get_settings


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run every test with default settings and no stray .env file."""
    for key in [
        "SCENARIO_DEBUG",
        "SCENARIO_STRICT_SIGNAL_HANDLERS",
        "SCENARIO_LOG_LEVEL",
        "SCENARIO_LOG_JSON",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_structlog():
    """Reset structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch):
    """Set SCENARIO_* variables and refresh the cached settings.

    Usage:
        def test_x(settings_env):
            settings_env(debug="true")
    """

    def _set(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(f"SCENARIO_{key.upper()}", value)
        get_settings.cache_clear()

    return _set


@pytest.fixture
def captured_logs():
    """Capture structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs


# =============================================================================
# Spies
# =============================================================================


@pytest.fixture
def spy() -> Mock:
    """Callable that records every call; returns None."""
    return Mock(return_value=None)
