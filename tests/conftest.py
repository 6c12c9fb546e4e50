"""Pytest configuration and shared fixtures for scriptmark tests."""

import pytest

from tests.harness import ManualScheduler


@pytest.fixture
def scheduler():
    """Virtual clock; tests drive timers with scheduler.advance()."""
    return ManualScheduler()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    # Host settings and log env must not leak into tests.
    for name in ("SCRIPTMARK_LOG_LEVEL", "SCRIPTMARK_LOG_FILE", "SCRIPTMARK_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
