"""Pytest configuration and fixtures."""

import pytest

from cmd_tokenize.config.loader import load_config_from_string
from cmd_tokenize.config.schema import Config, Format, Options


@pytest.fixture
def default_options() -> Options:
    """Options with every default."""
    return Options()


@pytest.fixture
def default_format() -> Format:
    """The default Unix grammar."""
    return Format()


@pytest.fixture
def windows_options() -> Options:
    """Options using '/' option prefixes."""
    return Options(use_windows_delimiters=True)


@pytest.fixture
def sample_config() -> Config:
    """Sample configuration for testing."""
    yaml_content = """
config:
  color: true

options:
  unpack_combined_options: true
  preserve_quotes: false

format:
  suffixes: ["=", ":"]
  terminator: "--"

theme:
  executable: "bold"
  option: "ansicyan"
  value: "ansigreen"
"""
    return load_config_from_string(yaml_content)


@pytest.fixture
def empty_config() -> Config:
    """Empty configuration for testing."""
    return Config()
