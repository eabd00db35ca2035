"""
Pytest configuration and fixtures for file_provider tests.
"""

import tempfile
from pathlib import Path

import pytest

from file_provider.context import OperationContext
from file_provider.controller import FileController
from file_provider.settings import reload_settings


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from FP_* variables in the environment."""
    for var in ("FP_NAMESPACE", "FP_PLUGIN_NAME", "FP_VERSION", "FP_ENCODING",
                "FP_STATE_FILE", "FP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def controller():
    return FileController()


@pytest.fixture
def ctx():
    return OperationContext.apply("test")


@pytest.fixture
def preview():
    return OperationContext.preview("test")
