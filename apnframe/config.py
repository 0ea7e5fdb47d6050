from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from apnframe.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"


def expand_env_vars(config_str: str) -> str:
    """
    Expand environment variables in the format ${VAR_NAME} within a YAML string.
    Skips expansion in YAML comments (lines starting with #).

    Args:
        config_str: YAML configuration string potentially containing ${VAR_NAME} placeholders

    Returns:
        YAML string with all ${VAR_NAME} placeholders expanded to environment variable values

    Raises:
        KeyError: If a referenced environment variable is not set
    """
    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        try:
            return os.environ[var_name]
        except KeyError:
            msg = f"Environment variable '{var_name}' referenced in config.yaml but not set"
            raise KeyError(msg) from None

    lines = []
    for line in config_str.split("\n"):
        if line.lstrip().startswith("#"):
            lines.append(line)
        else:
            lines.append(re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}", replace_var, line))

    return "\n".join(lines)


def load_config_from_yaml(config_path: str | None = None) -> dict:
    """
    Load YAML configuration file and expand environment variables.

    Args:
        config_path: Path to config.yaml file. If None, uses CONFIG_PATH environment
                     variable, falling back to ./config.yaml.

    Returns:
        Parsed configuration, or an empty dict when no file exists

    Raises:
        ConfigurationError: If the file is invalid or references unset variables
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        logger.debug("No config file found, using defaults", extra={"config_file": config_path})
        return {}

    with open(config_file) as f:
        config_str = f.read()

    try:
        expanded_config = expand_env_vars(config_str)
    except KeyError as e:
        msg = f"Error expanding environment variables in config.yaml: {e}"
        raise ConfigurationError(msg, context={"config_file": config_path}) from None

    try:
        config_dict = yaml.safe_load(expanded_config)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in config.yaml: {e}"
        raise ConfigurationError(msg, context={"config_file": config_path}) from None

    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        msg = "config.yaml must contain a YAML mapping/dictionary at root level"
        raise ConfigurationError(msg, context={"config_file": config_path})

    return config_dict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="APNFRAME_",
        env_file=None,
        case_sensitive=False,
    )

    # Security
    auth_token: str | None = None  # API auth disabled when unset
    environment: Literal["development", "production"] = "development"

    # Observability
    log_level: str = "INFO"
    log_json: bool = True


def flatten_config(config_dict: dict) -> dict:
    """Map the nested config.yaml structure onto flat Settings field names."""
    flat_config: dict = {}

    if isinstance(config_dict.get("logging"), dict):
        if "level" in config_dict["logging"]:
            flat_config["log_level"] = config_dict["logging"]["level"]
        if "json" in config_dict["logging"]:
            flat_config["log_json"] = config_dict["logging"]["json"]

    if isinstance(config_dict.get("auth"), dict) and "token" in config_dict["auth"]:
        flat_config["auth_token"] = config_dict["auth"]["token"]

    if "environment" in config_dict:
        flat_config["environment"] = config_dict["environment"]

    return flat_config


def build_settings(config_path: str | None = None) -> Settings:
    """
    Load settings from YAML, letting APNFRAME_* environment variables override.

    Raises:
        ConfigurationError: If the file or the resulting settings are invalid
    """
    flat_config = flatten_config(load_config_from_yaml(config_path))

    # Explicit init kwargs beat the environment in pydantic-settings, so
    # drop YAML values the environment already provides.
    for name in list(flat_config):
        if f"APNFRAME_{name.upper()}" in os.environ:
            del flat_config[name]

    try:
        return Settings(**flat_config)
    except ValidationError as e:
        msg = f"Configuration validation error: {e}"
        raise ConfigurationError(msg, context={"fields": sorted(flat_config)}) from e


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = build_settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
