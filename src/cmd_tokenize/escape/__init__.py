"""Escaping arguments for safe reuse on a command line."""

from cmd_tokenize.escape.quoting import escape_argument
from cmd_tokenize.escape.slashes import (
    add_slashes,
    alter_quote_depth,
    alter_slash_depth,
    remove_slashes,
)

__all__ = [
    "escape_argument",
    "add_slashes",
    "remove_slashes",
    "alter_quote_depth",
    "alter_slash_depth",
]
