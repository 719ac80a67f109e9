"""
Root conftest to ensure proper import paths.

This file exists at the project root so the project directory is on
sys.path before pytest starts collecting tests, which lets the tests import
capreg, bank_contracts, bank_plugins and bank_host without an install.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

# Ensure project root is in Python path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def mock_logger():
    """Create a mock structured logger.

    The logger supports:
    - bind(**kwargs) -> logger (returns itself with context)
    - debug/info/warning/error/critical methods
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo structlog.configure() calls made by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CAPREG_* variables so settings fall back to defaults."""
    for key in (
        "CAPREG_DUPLICATE_POLICY",
        "CAPREG_FREEZE",
        "CAPREG_PLUGINS_FILE",
        "CAPREG_LOG_LEVEL",
        "CAPREG_JSON_LOGS",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
