"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import logging
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from miscincome.core.config import reload_config
from tests.fixtures.deposits import FakeLedger, make_deposit


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests never reach a real QuickBooks company file
    monkeypatch.setenv("MISCINCOME_ENV", "test")
    monkeypatch.setenv("MISCINCOME_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LEDGER_BACKEND", "json")
    for name in ("LEDGER_JSON_FILE", "LOG_FILE", "LOG_LEVEL", "DEBUG", "DEPOSIT_TO_ACCOUNT", "DEFAULT_RECEIVED_FROM"):
        monkeypatch.delenv(name, raising=False)

    config = reload_config()
    yield config

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == str(config.logging.log_file):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def config(setup_test_environment):
    """The configuration loaded for this test."""
    return setup_test_environment


@pytest.fixture
def fake_ledger():
    """In-memory ledger holding one deposit that matches the sample source's C-100."""
    return FakeLedger(
        [
            make_deposit("C-100", lines=[("Sales", 125000), ("Rental", 25050)], txn_id="TXN-EXISTING"),
        ]
    )


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for currency handling and precision"
    )
    config.addinivalue_line(
        "markers", "reconcile: Tests for deposit reconciliation"
    )
    config.addinivalue_line(
        "markers", "ledger: Tests for ledger gateways"
    )
    config.addinivalue_line(
        "markers", "source: Tests for spreadsheet import"
    )
    config.addinivalue_line(
        "markers", "cli: Tests for the command-line interface"
    )
