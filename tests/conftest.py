"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskpal.config import Config, ConfigModel  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config():
    """Never let a cached configuration leak between tests."""
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def config(tmp_path):
    """Configuration rooted in a temporary directory."""
    return ConfigModel(
        data_dir=str(tmp_path / "data"),
        backup_dir=str(tmp_path / "data" / "backups"),
    )
