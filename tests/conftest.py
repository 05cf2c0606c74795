"""
ABOUTME: Pytest configuration and shared fixtures
ABOUTME: Provides isolated environments, readers and temporary .env files for all tests
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from envreader import Reader


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_env_vars():
    """Provide test environment variables."""
    return {
        "APP_NAME": "guardian",
        "APP_DEBUG": "true",
        "APP_WORKERS": "8",
        "APP_RATIO": "0.25",
        "APP_TIMEOUT": "1500ms",
        "APP_BROKEN_BOOL": "notabool",
        "APP_BROKEN_INT": "4.2",
        "APP_BROKEN_DURATION": "banana",
    }


@pytest.fixture
def mock_env_vars(test_env_vars):
    """Mock environment variables for testing."""
    with patch.dict(os.environ, test_env_vars, clear=False):
        yield test_env_vars


@pytest.fixture
def reader(mock_env_vars):
    """Provide a Reader over the mocked process environment with the APP_ prefix."""
    return Reader("APP_")


@pytest.fixture
def env_file(temp_dir):
    """Provide a .env file with a few variables."""
    path = temp_dir / ".env"
    path.write_text(
        "# sample configuration\n"
        "APP_NAME=from-file\n"
        "APP_PORT=8080\n"
        'APP_GREETING="hello world"\n'
        "APP_EMPTY_KEY\n"
    )
    return path
