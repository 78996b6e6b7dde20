"""Public entry points: splitting and parsing whole commands."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from cmd_tokenize.config.schema import Format, Options
from cmd_tokenize.core.chars import is_sequence_of_strings, is_string, repr_object
from cmd_tokenize.core.classifier import ArgumentRecord, classify
from cmd_tokenize.core.nesting import Token, split_fragments
from cmd_tokenize.core.separator import split_separators
from cmd_tokenize.errors import InterfaceError

logger = logging.getLogger(__name__)

OptionsLike = Options | Mapping[str, Any] | None
FormatLike = Format | Mapping[str, Any] | None


@dataclass(frozen=True)
class ParseResult:
    """Result of parse_command().

    Attributes:
        input: The command as passed in
        input_split: The command split into arguments (same as split_command())
        arguments: One record per argument
        options: The effective options
        format: The effective delimiter grammar
    """

    input: str | Sequence[str]
    input_split: list[str] = field(default_factory=list)
    arguments: list[ArgumentRecord] = field(default_factory=list)
    options: Options = field(default_factory=Options)
    format: Format = field(default_factory=Format)

    def to_dict(self) -> dict[str, Any]:
        return {
            "input": self.input if is_string(self.input) else list(self.input),
            "input_split": list(self.input_split),
            "arguments": [record.to_dict() for record in self.arguments],
            "options": self.options.model_dump(),
            "format": self.format.model_dump(mode="json"),
        }


def tokenize_command(command: str | Sequence[str], options: Options) -> list[Token]:
    """Turn a command string, or a list of ready-made arguments, into tokens."""
    if is_string(command):
        return split_fragments(
            command,
            throw_on_unbalanced_quote=options.throw_on_unbalanced_quote,
            preserve_quotes=options.preserve_quotes,
            max_depth=options.max_nesting_depth,
        )
    return [Token(arg) for arg in command]


def _run(
    caller: str,
    command: Any,
    options: OptionsLike,
    fmt: FormatLike,
    overrides: dict[str, Any],
) -> tuple[Options, Format, list[ArgumentRecord]]:
    if not is_string(command) and not is_sequence_of_strings(command):
        raise InterfaceError(
            f"{caller}: Command must be a string or a list of strings: {repr_object(command)}"
        )

    resolved_options = Options.build(options, **overrides)
    resolved_format = Format.build(fmt, resolved_options)

    tokens = tokenize_command(command, resolved_options)
    tokens = split_separators(tokens, resolved_options, resolved_format)
    records = classify(tokens, resolved_options, resolved_format)
    logger.debug("%s: %d tokens, %d arguments", caller, len(tokens), len(records))
    return resolved_options, resolved_format, records


def split_command(
    command: str | Sequence[str],
    options: OptionsLike = None,
    fmt: FormatLike = None,
) -> list[str]:
    """Split a command into a list of arguments.

    Escape sequences are resolved, outer quotes removed, options split from
    their values ('--a=b' -> '--a=', 'b') and combined options unpacked
    ('-abc' -> '-a', '-b', '-c') unless unpack_combined_options is off.

    Examples:
        >>> split_command('find -type f -name "*.js"')
        ['find', '-type', 'f', '-name', '*.js']
    """
    _, _, records = _run("split_command", command, options, fmt, {})
    return [record.render() for record in records]


def parse_command(
    command: str | Sequence[str],
    options: OptionsLike = None,
    fmt: FormatLike = None,
) -> ParseResult:
    """Parse a command and tag every argument with metadata.

    Args:
        command: A command line string, or a list of already split arguments
        options: Options instance or mapping of option overrides
        fmt: Format instance or mapping of grammar overrides

    Returns:
        ParseResult with the split command and one record per argument

    Raises:
        InterfaceError: If command is not a string or a list of strings
        ParseError: On unterminated quotes or trailing escape characters
    """
    resolved_options, resolved_format, records = _run("parse_command", command, options, fmt, {})
    return ParseResult(
        input=command,
        input_split=[record.render() for record in records],
        arguments=records,
        options=resolved_options,
        format=resolved_format,
    )


def split_arguments(
    command: str | Sequence[str],
    options: OptionsLike = None,
    fmt: FormatLike = None,
) -> list[str]:
    """Like split_command(), for input that does not start with a program name."""
    _, _, records = _run("split_arguments", command, options, fmt, {"first_is_exec": False})
    return [record.render() for record in records]


def parse_arguments(
    command: str | Sequence[str],
    options: OptionsLike = None,
    fmt: FormatLike = None,
) -> ParseResult:
    """Like parse_command(), for input that does not start with a program name."""
    resolved_options, resolved_format, records = _run(
        "parse_arguments", command, options, fmt, {"first_is_exec": False}
    )
    return ParseResult(
        input=command,
        input_split=[record.render() for record in records],
        arguments=records,
        options=resolved_options,
        format=resolved_format,
    )


def parse_argument(
    argument: str,
    options: OptionsLike = None,
    fmt: FormatLike = None,
) -> list[ArgumentRecord]:
    """Classify a single raw argument, e.g. one item of sys.argv.

    The argument is neither split on whitespace nor unescaped. Since there is
    no surrounding command, is_executable, is_terminator and
    after_terminator are always None.

    Examples:
        >>> [r.content for r in parse_argument('-ab')]
        ['a', 'b']
    """
    if not is_string(argument):
        raise InterfaceError(f"parse_argument: Argument must be a string: {repr_object(argument)}")

    _, _, records = _run(
        "parse_argument",
        [argument],
        options,
        fmt,
        {"first_is_exec": False, "use_options_terminator": False},
    )
    return records
