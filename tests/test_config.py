"""
ABOUTME: Unit tests for .env file loading
ABOUTME: Tests that file variables are merged without modifying os.environ
"""

import os
from unittest.mock import patch

import pytest

from envreader import ConfigError, Reader
from envreader.config import build_environ, load_env_file


class TestLoadEnvFile:
    """Test reading .env files."""

    def test_loads_values(self, env_file):
        values = load_env_file(env_file)
        assert values["APP_NAME"] == "from-file"
        assert values["APP_PORT"] == "8080"
        assert values["APP_GREETING"] == "hello world"

    def test_skips_keys_without_value(self, env_file):
        assert "APP_EMPTY_KEY" not in load_env_file(env_file)

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            load_env_file(temp_dir / "nope.env")

    def test_does_not_modify_environment(self, env_file):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("APP_PORT", None)
            load_env_file(env_file)
            assert "APP_PORT" not in os.environ


class TestBuildEnviron:
    """Test merging a .env file with the process environment."""

    def test_without_file_copies_base(self):
        base = {"A": "1"}
        merged = build_environ(base=base)
        assert merged == base
        assert merged is not base

    def test_process_variables_take_precedence(self, env_file):
        merged = build_environ(env_file, base={"APP_NAME": "from-process"})
        assert merged["APP_NAME"] == "from-process"
        assert merged["APP_PORT"] == "8080"

    def test_defaults_to_os_environ(self, env_file):
        with patch.dict(os.environ, {"APP_NAME": "from-os"}):
            merged = build_environ(env_file)
            assert merged["APP_NAME"] == "from-os"
            assert merged["APP_GREETING"] == "hello world"

    def test_reader_over_merged_environ(self, env_file):
        reader = Reader("APP_", build_environ(env_file, base={}))
        assert reader.get_int("PORT") == 8080
        assert reader.get_str("EMPTY_KEY", "unset") == "unset"
        assert reader.err() is None
