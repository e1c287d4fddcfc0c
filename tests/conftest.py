"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from matchmaker.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"

MATCHMAKER_ENV_VARS = ("CATALOG_PATH", "CATALOG_URL", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Remove matchmaker environment variables so tests see only what they set."""
    for name in MATCHMAKER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def profiles_path() -> Path:
    return FIXTURES_DIR / "profiles.yaml"
