"""Configuration loader with support for drop-in directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from cmd_tokenize.config.defaults import DEFAULT_CONFIG_YAML
from cmd_tokenize.config.schema import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cmd-tokenize" / "config.yaml"
DEFAULT_DROPIN_DIR = Path.home() / ".config" / "cmd-tokenize" / "conf.d"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Lists are replaced rather than extended, so a drop-in file can swap out
    the whole list of prefix rules or value delimiters.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f)
        return data if data else {}


def load_dropin_directory(dropin_dir: Path) -> dict[str, Any]:
    """Load and merge all YAML files from drop-in directory."""
    if not dropin_dir.exists():
        return {}

    result: dict[str, Any] = {}
    yaml_files = sorted(dropin_dir.glob("*.yaml")) + sorted(dropin_dir.glob("*.yml"))

    for yaml_file in yaml_files:
        logger.debug("Loading drop-in config %s", yaml_file)
        data = load_yaml_file(yaml_file)
        result = deep_merge(result, data)

    return result


def default_config_data() -> dict[str, Any]:
    """The built-in defaults as a plain dict."""
    return yaml.safe_load(DEFAULT_CONFIG_YAML)


def load_config(
    config_path: Path | str | None = None,
    dropin_dir: Path | str | None = None,
) -> Config:
    """Load configuration from file and drop-in directory.

    Args:
        config_path: Path to main config file (default: ~/.config/cmd-tokenize/config.yaml)
        dropin_dir: Path to drop-in directory (default: ~/.config/cmd-tokenize/conf.d/)

    Returns:
        Merged configuration object
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    elif isinstance(config_path, str):
        config_path = Path(config_path)

    if dropin_dir is None:
        dropin_dir = DEFAULT_DROPIN_DIR
    elif isinstance(dropin_dir, str):
        dropin_dir = Path(dropin_dir)

    merged_data = deep_merge(default_config_data(), load_yaml_file(config_path))
    merged_data = deep_merge(merged_data, load_dropin_directory(dropin_dir))

    return Config(**merged_data)


def load_config_from_string(yaml_string: str) -> Config:
    """Load configuration from a YAML string on top of the defaults (useful for testing)."""
    data = yaml.safe_load(yaml_string)
    return Config(**deep_merge(default_config_data(), data if data else {}))
