"""Adding and removing levels of backslash escaping."""

from __future__ import annotations

import math
import re


def alter_quote_depth(value: str, quote_char: str | None, amount: int = 0) -> str:
    """Change the number of backslashes in front of every quote_char by amount."""
    if amount == 0 or not quote_char:
        return value

    def replace(m: re.Match[str]) -> str:
        slashes = m.group(1) or ""
        if amount < 0:
            return "\\" * max(len(slashes) + amount, 0) + quote_char
        return slashes + "\\" * amount + quote_char

    return re.sub(rf"(\\+)?({re.escape(quote_char)})", replace, value)


def alter_slash_depth(value: str, amount: int = 0) -> str:
    """Double (amount > 0) or halve (amount < 0) every run of backslashes."""
    if amount == 0:
        return value

    def replace(m: re.Match[str]) -> str:
        length = len(m.group(1))
        if amount > 0:
            return "\\" * (length * 2)
        if length <= 2:
            return "\\" * (length - 1)
        return "\\" * math.ceil(length / 2)

    return re.sub(r"(\\+)", replace, value)


def add_slashes(value: str, quote_char: str | None = None, amount: int = 1) -> str:
    """Escape value one more level; used when escaping."""
    value = alter_slash_depth(value, amount)
    return alter_quote_depth(value, quote_char, amount)


def remove_slashes(value: str, quote_char: str | None = None, amount: int = 1) -> str:
    """Remove one level of escaping from value; used when unescaping."""
    value = alter_quote_depth(value, quote_char, -amount)
    return alter_slash_depth(value, -amount)
