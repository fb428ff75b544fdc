# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import esmbridge.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL (test)
        before each test for isolation.

    The app logger is a module-level singleton; the CLI tests change its
    level, so it is reset before and after each test.
    """
    logger = mod_logs.getAppLogger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)  # test
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)  # test


@pytest.fixture(autouse=True)
def isolate_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> None:
    """Keep NODE_ENV and the scratch root from leaking into tests."""
    monkeypatch.delenv("NODE_ENV", raising=False)
    monkeypatch.setenv(
        "ESMBRIDGE_SCRATCH_DIR", str(tmp_path_factory.mktemp("scratch-root"))
    )
