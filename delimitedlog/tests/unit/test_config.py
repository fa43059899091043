"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest

from delimitedlog.utils.config import Config, get_config, reset_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove environment overrides and the global config."""
    for name in ("SEGMENT_COMPRESSION", "SEGMENT_COMPRESSION_LEVEL", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestConfig:
    """Test Config class."""

    def test_defaults(self):
        """Test built-in defaults."""
        config = Config()

        assert config.get("segment.compression") == "none"
        assert config.get("segment.compression_level") is None
        assert config.get("logging.level") == "INFO"
        assert config.get("logging.format") == "json"

    def test_missing_key_returns_default(self):
        """Test lookups of unknown keys."""
        config = Config()

        assert config.get("segment.unknown") is None
        assert config.get("nope.nope", "fallback") == "fallback"

    def test_load_file(self, temp_dir):
        """Test merging a YAML file over the defaults."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("segment:\n  compression: gzip\n")

        config = Config(str(config_file))

        assert config.get("segment.compression") == "gzip"
        assert config.get("logging.level") == "INFO"

    def test_empty_file(self, temp_dir):
        """Test that an empty YAML file changes nothing."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("")

        config = Config(str(config_file))

        assert config.get("segment.compression") == "none"

    def test_env_overrides(self, temp_dir, monkeypatch):
        """Test that environment variables win over files."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("segment:\n  compression: gzip\n")
        monkeypatch.setenv("SEGMENT_COMPRESSION", "lz4")
        monkeypatch.setenv("SEGMENT_COMPRESSION_LEVEL", "3")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = Config(str(config_file))

        assert config.get("segment.compression") == "lz4"
        assert config.get("segment.compression_level") == 3
        assert config.get("logging.level") == "DEBUG"

    def test_set_nested(self):
        """Test setting values with dot notation."""
        config = Config()

        config.set("tools.printer.values", True)

        assert config.get("tools.printer.values") is True

    def test_to_dict_is_a_copy(self):
        """Test that to_dict does not expose internal state."""
        config = Config()

        snapshot = config.to_dict()
        snapshot["segment"]["compression"] = "gzip"

        assert config.get("segment.compression") == "none"


class TestGlobalConfig:
    """Test the process-wide configuration."""

    def test_get_config_is_cached(self):
        """Test that get_config returns one instance."""
        assert get_config() is get_config()

    def test_reset_config(self):
        """Test that reset_config drops the instance."""
        first = get_config()
        reset_config()

        assert get_config() is not first
