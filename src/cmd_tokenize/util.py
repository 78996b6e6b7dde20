"""Helpers that sit next to the main parsing functions."""

from cmd_tokenize.core.command import parse_argument as argument_metadata
from cmd_tokenize.escape import add_slashes, escape_argument, remove_slashes

__all__ = [
    "add_slashes",
    "argument_metadata",
    "escape_argument",
    "remove_slashes",
]
