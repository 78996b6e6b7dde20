"""Escaping a string for use as a single command line argument."""

from __future__ import annotations

import re

from cmd_tokenize.core.chars import is_string, repr_object
from cmd_tokenize.errors import EscapeError
from cmd_tokenize.escape.slashes import add_slashes

TRAILING_SLASHES = re.compile(r"\\+$")
WHITESPACE = re.compile(r"\s")


def escape_argument(value: str) -> str:
    """Escape a string so that splitting it yields the string back.

    Quoting is only added when needed: no quotes for plain words, single
    quotes when the value contains no single quote, double quotes when it
    contains no double quote, and double quotes with the inner double quotes
    escaped when it has both. Trailing backslashes are moved outside the
    quotes so they cannot escape the closing quote.

    Not meant as a safe way to pass untrusted input to a shell.

    Raises:
        EscapeError: If value is not a string

    Examples:
        >>> escape_argument('ab cd')
        "'ab cd'"
    """
    if not is_string(value):
        raise EscapeError(f"escape_argument: Input must be a string: {repr_object(value)}")

    if value == "":
        return "''"

    primary = value
    remainder = ""
    trailing = TRAILING_SLASHES.search(value)
    if trailing:
        primary = value[: trailing.start()]
        remainder = value[trailing.start() :]

    has_whitespace = WHITESPACE.search(value) is not None
    has_single_quote = "'" in value
    has_double_quote = '"' in value

    if not has_whitespace and not has_single_quote and not has_double_quote:
        return f"{add_slashes(primary)}{add_slashes(remainder)}"
    if not has_single_quote:
        return f"'{add_slashes(primary)}'{add_slashes(remainder)}"
    if not has_double_quote:
        return f'"{add_slashes(primary)}"{add_slashes(remainder)}'

    # Both kinds of quotes: escape the double quotes one extra level.
    escaped = add_slashes(primary, '"')
    return f'"{escaped}"{add_slashes(remainder)}'
