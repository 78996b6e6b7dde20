"""Error types raised by the tokenizer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Kind of problem encountered while tokenizing."""

    INTERFACE = "interface"
    UNTERMINATED_QUOTE = "unterminated_quote"
    TRAILING_ESCAPE = "trailing_escape"
    UNBALANCED_QUOTE = "unbalanced_quote"
    NESTING_TOO_DEEP = "nesting_too_deep"
    ESCAPE = "escape"


class TokenizeError(Exception):
    """Base class for all tokenizer errors.

    Attributes:
        kind: Machine-readable error kind
        message: Human-readable description
        char: The offending character, if any
        index: Character index in the input where the problem was found
        remainder: Unconsumed input, for unbalanced quote errors
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        char: str | None = None,
        index: int = 0,
        remainder: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.char = char
        self.index = index
        self.remainder = remainder

    @property
    def code(self) -> str:
        """Error code, e.g. 'CMD_TOKENIZE_UNTERMINATED_QUOTE'."""
        return f"CMD_TOKENIZE_{self.kind.name}"

    def __str__(self) -> str:
        return self.message


class ParseError(TokenizeError, ValueError):
    """Malformed input: unterminated quotes, trailing escapes, bad nesting."""


class InterfaceError(ParseError, TypeError):
    """The caller passed something other than a string or a list of strings."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.INTERFACE)


class EscapeError(TokenizeError, ValueError):
    """Invalid input passed to escape_argument()."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorKind.ESCAPE)
