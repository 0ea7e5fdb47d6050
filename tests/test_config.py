"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from apnframe.config import (
    Settings,
    build_settings,
    expand_env_vars,
    flatten_config,
    get_settings,
    load_config_from_yaml,
    reset_settings,
)
from apnframe.exceptions import ConfigurationError


class TestExpandEnvVars:
    """Test ${VAR} expansion."""

    def test_expands_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Placeholders are replaced by environment values."""
        monkeypatch.setenv("FRAME_TOKEN", "secret-token")

        assert expand_env_vars("token: ${FRAME_TOKEN}") == "token: secret-token"

    def test_skips_comments(self) -> None:
        """Comment lines are left untouched even with unset variables."""
        config = "# token: ${NOT_SET_ANYWHERE}\nlevel: INFO"

        assert expand_env_vars(config) == config

    def test_missing_variable_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset variables raise KeyError naming the variable."""
        monkeypatch.delenv("FRAME_MISSING", raising=False)

        with pytest.raises(KeyError, match="FRAME_MISSING"):
            expand_env_vars("token: ${FRAME_MISSING}")


class TestLoadConfig:
    """Test YAML loading."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        """A missing config file means defaults."""
        assert load_config_from_yaml(str(tmp_path / "nope.yaml")) == {}

    def test_empty_file_returns_empty(self, tmp_path: Path) -> None:
        """An empty config file means defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_config_from_yaml(str(config_file)) == {}

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Malformed YAML raises ConfigurationError with the file path."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML") as exc_info:
            load_config_from_yaml(str(config_file))

        assert exc_info.value.context["config_file"] == str(config_file)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        """The root of config.yaml must be a mapping."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config_from_yaml(str(config_file))

    def test_unset_variable_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset variables surface as ConfigurationError."""
        monkeypatch.delenv("FRAME_UNSET", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("auth:\n  token: ${FRAME_UNSET}\n")

        with pytest.raises(ConfigurationError, match="FRAME_UNSET"):
            load_config_from_yaml(str(config_file))


def test_flatten_config() -> None:
    """Nested YAML keys map onto Settings fields."""
    flat = flatten_config(
        {
            "logging": {"level": "DEBUG", "json": False},
            "auth": {"token": "abc"},
            "environment": "production",
            "unknown": {"ignored": True},
        }
    )

    assert flat == {
        "log_level": "DEBUG",
        "log_json": False,
        "auth_token": "abc",
        "environment": "production",
    }


class TestBuildSettings:
    """Test Settings construction."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Without a config file the defaults apply."""
        settings = build_settings(str(tmp_path / "missing.yaml"))

        assert settings.auth_token is None
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.log_json is True

    def test_from_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values come from YAML with variables expanded."""
        monkeypatch.setenv("FRAME_AUTH", "yaml-token")
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "environment: production\n"
            "auth:\n"
            "  token: ${FRAME_AUTH}\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  json: false\n"
        )

        settings = build_settings(str(config_file))

        assert settings.environment == "production"
        assert settings.auth_token == "yaml-token"
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False

    def test_environment_overrides_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """APNFRAME_* variables beat values from YAML."""
        monkeypatch.setenv("APNFRAME_LOG_LEVEL", "WARNING")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  level: DEBUG\n")

        assert build_settings(str(config_file)).log_level == "WARNING"

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        """Invalid settings raise ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("environment: staging\n")

        with pytest.raises(ConfigurationError, match="validation"):
            build_settings(str(config_file))


def test_get_settings_cached(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """get_settings loads once until reset."""
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "config.yaml"))
    reset_settings()

    first = get_settings()

    assert isinstance(first, Settings)
    assert get_settings() is first

    reset_settings()
    assert get_settings() is not first
