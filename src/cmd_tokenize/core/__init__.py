"""Core functionality: lexer, nesting resolver, splitter and classifier."""

from cmd_tokenize.core.classifier import ArgumentRecord, classify
from cmd_tokenize.core.command import (
    ParseResult,
    parse_argument,
    parse_arguments,
    parse_command,
    split_arguments,
    split_command,
)
from cmd_tokenize.core.lexer import lex
from cmd_tokenize.core.nesting import Token, flatten, resolve, split_fragments
from cmd_tokenize.core.separator import split_separators

__all__ = [
    "ArgumentRecord",
    "ParseResult",
    "Token",
    "classify",
    "flatten",
    "lex",
    "parse_argument",
    "parse_arguments",
    "parse_command",
    "resolve",
    "split_arguments",
    "split_command",
    "split_fragments",
    "split_separators",
]
