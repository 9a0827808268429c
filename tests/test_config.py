"""
Tests for config module.

Locating, loading and merging the optional defaults file.
"""

import argparse
import os

import pytest

from ssm_edit.config import Settings, find_config_file, get_config_dir, load_config
from ssm_edit.exceptions import ConfigError


def _args(**overrides):
    values = dict(prefix=None, secure=None, quiet=None, debug=None,
                  profile=None, region=None, attempts=None, delay=None)
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def write_config(tmp_path):
    def _write(content, name="config.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write


class TestFindConfigFile:
    """Test config file discovery."""

    def test_xdg_config_respected(self, monkeypatch, tmp_path):
        """Test that XDG_CONFIG_HOME is respected."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "ssm-edit"

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        """Test that --config beats the environment variable."""
        monkeypatch.setenv("SSM_EDIT_CONFIG", str(tmp_path / "env.yaml"))

        assert find_config_file(str(tmp_path / "cli.yaml")) == tmp_path / "cli.yaml"

    def test_env_override(self, monkeypatch, tmp_path):
        """Test that SSM_EDIT_CONFIG is used when no flag is given."""
        monkeypatch.setenv("SSM_EDIT_CONFIG", str(tmp_path / "env.yaml"))

        assert find_config_file() == tmp_path / "env.yaml"

    def test_default_file_only_when_present(self, monkeypatch, tmp_path):
        """Test that the default location is used only if the file exists."""
        monkeypatch.delenv("SSM_EDIT_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert find_config_file() is None

        config_dir = tmp_path / "ssm-edit"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("secure: true\n")

        assert find_config_file() == config_dir / "config.yaml"


class TestLoadConfig:
    """Test reading and validating the file."""

    def test_no_file(self):
        """Test that no file means no configuration."""
        assert load_config(None) == {}

    def test_valid_file(self, write_config):
        """Test loading a valid file."""
        path = write_config("""
prefix: /app/test/
secure: true
retry:
  attempts: 3
  delay: 0.5
""")
        config = load_config(path)

        assert config["prefix"] == "/app/test/"
        assert config["secure"] is True
        assert config["retry"] == {"attempts": 3, "delay": 0.5}

    def test_empty_file(self, write_config):
        """Test that an empty file is an empty configuration."""
        assert load_config(write_config("")) == {}

    def test_missing_file(self, tmp_path):
        """Test that a missing explicit file is an error."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "nope.yaml")
        assert "Error loading config file" in str(exc_info.value)

    def test_malformed_yaml(self, write_config):
        """Test that unparsable YAML is an error."""
        with pytest.raises(ConfigError):
            load_config(write_config("prefix: [unclosed\n"))

    def test_schema_violation(self, write_config):
        """Test that schema errors are reported as ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(write_config("secure: maybe\n"))
        assert "Invalid config file" in str(exc_info.value)

    def test_non_mapping(self, write_config):
        """Test that a top-level list is rejected."""
        with pytest.raises(ConfigError):
            load_config(write_config("- /app/test/\n"))


class TestSettings:
    """Test merging flags with the file."""

    def test_defaults(self):
        """Test the defaults with neither flags nor file."""
        settings = Settings.resolve(_args(), {})

        assert settings == Settings()
        assert settings.attempts == 5
        assert settings.delay == 0.2
        assert settings.secure is False

    def test_file_values_used(self):
        """Test that file values fill in for missing flags."""
        config = {"prefix": "/app/", "secure": True, "profile": "staging",
                  "retry": {"attempts": 2}}

        settings = Settings.resolve(_args(), config)

        assert settings.prefix == "/app/"
        assert settings.secure is True
        assert settings.profile == "staging"
        assert settings.attempts == 2
        assert settings.delay == 0.2

    def test_flags_override_file(self):
        """Test that command-line values win over the file."""
        config = {"prefix": "/app/", "region": "us-east-1", "retry": {"attempts": 2, "delay": 1}}

        settings = Settings.resolve(
            _args(prefix="/other/", region="eu-west-1", attempts=7, delay=0.0), config
        )

        assert settings.prefix == "/other/"
        assert settings.region == "eu-west-1"
        assert settings.attempts == 7
        assert settings.delay == 0.0
