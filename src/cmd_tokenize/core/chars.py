"""Character and type predicates used throughout the tokenizer."""

from __future__ import annotations

import json
from typing import Any

QUOTE_CHARS = "\"'"
ESCAPE_CHAR = "\\"


def is_whitespace(char: str | None) -> bool:
    """Check whether a string is non-empty and made of whitespace only."""
    return bool(char) and char.isspace()


def is_quote_char(char: str | None) -> bool:
    """Check whether a character is a single or double quote."""
    return char is not None and len(char) == 1 and char in QUOTE_CHARS


def is_escape_char(char: str | None) -> bool:
    """Check whether a character is the escape backslash."""
    return char == ESCAPE_CHAR


def is_string(obj: Any) -> bool:
    return isinstance(obj, str)


def is_sequence_of_strings(obj: Any) -> bool:
    """Check whether obj is a list or tuple holding only strings."""
    return isinstance(obj, (list, tuple)) and all(isinstance(item, str) for item in obj)


def repr_object(obj: Any) -> str:
    """Short representation of an arbitrary object for error messages."""
    try:
        return json.dumps(obj)
    except (TypeError, ValueError):
        return repr(obj)
