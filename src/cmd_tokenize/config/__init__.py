"""Configuration loading and schema definitions."""

from cmd_tokenize.config.loader import load_config, load_config_from_string
from cmd_tokenize.config.schema import (
    Config,
    Format,
    Options,
    PrefixRule,
    PrefixType,
)

__all__ = [
    "Config",
    "Format",
    "Options",
    "PrefixRule",
    "PrefixType",
    "load_config",
    "load_config_from_string",
]
