"""cmd-tokenize: shell-style command line splitting and argument metadata."""

from cmd_tokenize import util
from cmd_tokenize.config.schema import Format, Options, PrefixRule, PrefixType
from cmd_tokenize.core.classifier import ArgumentRecord
from cmd_tokenize.core.command import (
    ParseResult,
    parse_argument,
    parse_arguments,
    parse_command,
    split_arguments,
    split_command,
)
from cmd_tokenize.errors import (
    ErrorKind,
    EscapeError,
    InterfaceError,
    ParseError,
    TokenizeError,
)
from cmd_tokenize.escape import escape_argument

__version__ = "0.1.0"

__all__ = [
    "ArgumentRecord",
    "ErrorKind",
    "EscapeError",
    "Format",
    "InterfaceError",
    "Options",
    "ParseError",
    "ParseResult",
    "PrefixRule",
    "PrefixType",
    "TokenizeError",
    "escape_argument",
    "parse_argument",
    "parse_arguments",
    "parse_command",
    "split_arguments",
    "split_command",
    "util",
]
