"""Splitting of option tokens on value delimiters, e.g. '--name=value'."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cmd_tokenize.core.nesting import Token

if TYPE_CHECKING:
    from cmd_tokenize.config.schema import Format, Options


def split_separator(token: Token, fmt: Format) -> list[Token]:
    """Split a single option token into key and value.

    The key keeps its prefix and delimiter ('--name=') and the value is the
    rest of the token verbatim, so only the first delimiter splits:
    '--a=b=c' becomes '--a=' and 'b=c'. An option ending in its delimiter
    ('--name=', or '--name=""' once unquoted) gets an empty value.
    Non-options are returned unchanged.
    """
    prefix_match = fmt.match_prefix(token.value)
    if prefix_match is None:
        return [token]

    _, prefix, remainder = prefix_match
    separator = fmt.find_separator(remainder)
    if separator is not None:
        index, _ = separator
        key = prefix + remainder[: index + 1]
        value = remainder[index + 1 :]
    elif fmt.match_suffix(remainder) is not None:
        key = token.value
        value = ""
    else:
        return [token]

    return [
        Token(key, token.original_value, token.start, token.end),
        Token(value, token.original_value, token.start, token.end),
    ]


def split_separators(tokens: list[Token], options: Options, fmt: Format) -> list[Token]:
    """Split every option token that carries a value delimiter.

    The executable (with first_is_exec) and everything after the options
    terminator are left alone.
    """
    result: list[Token] = []
    after_terminator = False

    for index, token in enumerate(tokens):
        is_exec = options.first_is_exec and index == 0
        if is_exec or after_terminator:
            result.append(token)
            continue

        if options.use_options_terminator and fmt.is_terminator(token.value):
            after_terminator = True
            result.append(token)
            continue

        result.extend(split_separator(token, fmt))

    return result
