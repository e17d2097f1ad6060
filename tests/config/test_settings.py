"""
Tests for flattree settings loading.
"""

import pytest

from flattree.config.settings import FlattenSettings, LoggingSettings, Settings, load_settings
from flattree.core.models import MatchMode
from flattree.shared.errors import ConfigurationError, ErrorCode


class TestDefaults:
    """Test default settings."""

    def test_defaults(self):
        """Test the built-in defaults."""
        settings = load_settings()

        assert settings.flatten.max_depth is None
        assert settings.flatten.match_mode is MatchMode.SUBSTRING
        assert settings.flatten.include == []
        assert settings.flatten.assume_yes is False
        assert settings.logging.level == "WARNING"
        assert settings.logging.file is None


class TestEnvironment:
    """Test FLATTREE_ environment overrides."""

    def test_nested_environment_variables(self, monkeypatch):
        """Test that nested fields are read with the __ delimiter."""
        monkeypatch.setenv("FLATTREE_FLATTEN__MAX_DEPTH", "2")
        monkeypatch.setenv("FLATTREE_FLATTEN__MATCH_MODE", "prefix")
        monkeypatch.setenv("FLATTREE_LOGGING__LEVEL", "debug")

        settings = load_settings()

        assert settings.flatten.max_depth == 2
        assert settings.flatten.match_mode is MatchMode.PREFIX
        assert settings.logging.level == "DEBUG"

    def test_invalid_environment_value(self, monkeypatch):
        """Test that invalid values become configuration errors."""
        monkeypatch.setenv("FLATTREE_FLATTEN__MAX_DEPTH", "-1")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert exc_info.value.code == ErrorCode.INVALID_CONFIG


class TestTomlFile:
    """Test TOML settings files."""

    def test_load_from_file(self, temp_dir):
        """Test that a TOML file is loaded."""
        config = temp_dir / "flattree.toml"
        config.write_text(
            '[flatten]\nmax_depth = 3\nexclude = ["node_modules"]\n'
            '[logging]\nlevel = "info"\n',
            encoding="utf-8",
        )

        settings = load_settings(config)

        assert settings.flatten.max_depth == 3
        assert settings.flatten.exclude == ["node_modules"]
        assert settings.logging.level == "INFO"

    def test_missing_file(self, temp_dir):
        """Test that a missing file is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(temp_dir / "missing.toml")

        assert exc_info.value.code == ErrorCode.CONFIG_NOT_FOUND

    def test_malformed_file(self, temp_dir):
        """Test that TOML syntax errors are reported."""
        config = temp_dir / "broken.toml"
        config.write_text("[flatten\nmax_depth = ", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config)

        assert exc_info.value.code == ErrorCode.INVALID_CONFIG

    def test_conflicting_filters_in_file(self, temp_dir):
        """Test that include and exclude cannot both be configured."""
        config = temp_dir / "both.toml"
        config.write_text(
            '[flatten]\ninclude = ["doc"]\nexclude = ["src"]\n',
            encoding="utf-8",
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config)

        assert exc_info.value.code == ErrorCode.INVALID_CONFIG
        assert "include and exclude" in exc_info.value.message

    def test_blank_pattern_list_in_file(self, temp_dir):
        """Test that a configured pattern list of blanks is rejected."""
        config = temp_dir / "blank.toml"
        config.write_text('[flatten]\ninclude = [" ", ""]\n', encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config)

        assert exc_info.value.code == ErrorCode.INVALID_CONFIG

    def test_save_and_reload(self, temp_dir):
        """Test that saved settings load back unchanged."""
        settings = Settings(
            flatten=FlattenSettings(max_depth=1, include=["doc"]),
            logging=LoggingSettings(level="ERROR"),
        )
        path = temp_dir / "out" / "flattree.toml"

        settings.to_toml_file(path)
        reloaded = load_settings(path)

        assert reloaded.flatten == settings.flatten
        assert reloaded.logging == settings.logging


class TestLoggingSettings:
    """Test logging settings validation."""

    def test_invalid_level(self):
        """Test that unknown levels are rejected."""
        with pytest.raises(ValueError):
            LoggingSettings(level="LOUD")
