"""Quote and escape aware lexer.

The lexer turns a raw command line into a flat list of fragments:

- ``Space``: a run of unquoted whitespace separating two arguments
- ``Text``: literal text, with escape sequences already resolved
- ``Quote``: a quote character that may open or close a quoted section

Adjacent fragments not separated by a ``Space`` belong to the same argument,
so ``"a"b`` lexes as ``Quote Text Quote Text`` and later joins into ``ab``.

Escaping rules:

- Outside quotes a backslash escapes any character: ``\\\\`` is a backslash,
  ``\\"`` a literal quote, ``\\ `` a space that does not end the argument.
- Inside quotes a backslash only escapes the outer quote character and
  itself; before anything else it is kept literally.

Escaped quotes inside a quoted section are emitted as ``Quote`` fragments
with a nonzero ``escapes`` count so the nesting resolver can rebuild nested
quotes such as ``"a \\"b \\\\\\"c\\\\\\" b\\" a"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cmd_tokenize.core.chars import (
    ESCAPE_CHAR,
    is_escape_char,
    is_quote_char,
    is_string,
    is_whitespace,
    repr_object,
)
from cmd_tokenize.errors import ErrorKind, InterfaceError, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Space:
    """Unquoted whitespace between two arguments."""

    raw: str
    start: int
    end: int


@dataclass(frozen=True)
class Text:
    """Literal text.

    Attributes:
        value: The text with escape sequences resolved
        raw: The text as it appears in the input
        start: Start position in the input
        end: End position in the input (exclusive)
        quoted: Whether the text is inside a quoted section
    """

    value: str
    raw: str
    start: int
    end: int
    quoted: bool = False


@dataclass(frozen=True)
class Quote:
    """A quote character, possibly preceded by escaping backslashes.

    Attributes:
        char: The quote character
        escapes: Number of backslashes directly before it in the input
        value: The quote with one level of escaping removed
        raw: The quote and its backslashes as they appear in the input
        start: Start position in the input
        end: End position in the input (exclusive)
    """

    char: str
    escapes: int
    value: str
    raw: str
    start: int
    end: int

    @property
    def is_boundary(self) -> bool:
        """Whether this is an unescaped quote."""
        return self.escapes == 0


Fragment = Space | Text | Quote


class QuoteLexer:
    """Single-pass lexer over a command line string."""

    def __init__(self, text: str, throw_on_unbalanced_quote: bool = True) -> None:
        if not is_string(text):
            raise InterfaceError(f"lex: Input must be a string: {repr_object(text)}")
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.throw_on_unbalanced_quote = throw_on_unbalanced_quote
        self.fragments: list[Fragment] = []

    def lex(self) -> list[Fragment]:
        """Lex the whole input into fragments."""
        while self.pos < self.length:
            char = self.text[self.pos]
            if is_whitespace(char):
                self._lex_space()
            elif is_quote_char(char):
                self._lex_quote()
            else:
                self._lex_word()

        return self.fragments

    def _error(self, message: str, kind: ErrorKind, index: int) -> ParseError:
        char = self.text[index] if index < self.length else None
        return ParseError(message, kind, char=char, index=index)

    def _lex_space(self) -> None:
        start = self.pos
        while self.pos < self.length and is_whitespace(self.text[self.pos]):
            self.pos += 1
        self.fragments.append(Space(self.text[start : self.pos], start, self.pos))

    def _lex_word(self) -> None:
        """Lex unquoted text up to whitespace, a quote, or the end of input."""
        start = self.pos
        value_parts: list[str] = []

        while self.pos < self.length:
            char = self.text[self.pos]

            if is_escape_char(char):
                if self.pos + 1 >= self.length:
                    raise self._error("Trailing escape character", ErrorKind.TRAILING_ESCAPE, self.pos)
                value_parts.append(self.text[self.pos + 1])
                self.pos += 2
            elif is_whitespace(char) or is_quote_char(char):
                break
            else:
                value_parts.append(char)
                self.pos += 1

        self.fragments.append(
            Text("".join(value_parts), self.text[start : self.pos], start, self.pos)
        )

    def _lex_quote(self) -> None:
        """Lex a quoted section, including its opening and closing quotes."""
        quote_char = self.text[self.pos]
        quote_start = self.pos
        self.fragments.append(Quote(quote_char, 0, quote_char, quote_char, self.pos, self.pos + 1))
        self.pos += 1

        value_parts: list[str] = []
        text_start = self.pos

        def flush() -> None:
            nonlocal value_parts
            if self.pos > text_start:
                self.fragments.append(
                    Text(
                        "".join(value_parts),
                        self.text[text_start : self.pos],
                        text_start,
                        self.pos,
                        quoted=True,
                    )
                )
            value_parts = []

        while self.pos < self.length:
            char = self.text[self.pos]

            if is_escape_char(char):
                # Resolve the whole run of backslashes at once.
                run_end = self.pos
                while run_end < self.length and is_escape_char(self.text[run_end]):
                    run_end += 1
                count = run_end - self.pos
                next_char = self.text[run_end] if run_end < self.length else None

                if next_char == quote_char and count % 2 == 1:
                    flush()
                    self.fragments.append(
                        Quote(
                            quote_char,
                            count,
                            ESCAPE_CHAR * (count // 2) + quote_char,
                            self.text[self.pos : run_end + 1],
                            self.pos,
                            run_end + 1,
                        )
                    )
                    self.pos = run_end + 1
                    text_start = self.pos
                elif is_quote_char(next_char) and next_char != quote_char:
                    flush()
                    self.fragments.append(
                        Quote(
                            next_char,
                            count,
                            ESCAPE_CHAR * (count // 2 + count % 2) + next_char,
                            self.text[self.pos : run_end + 1],
                            self.pos,
                            run_end + 1,
                        )
                    )
                    self.pos = run_end + 1
                    text_start = self.pos
                else:
                    # Pairs collapse; a lone backslash before anything else stays.
                    if next_char == quote_char:
                        value_parts.append(ESCAPE_CHAR * (count // 2))
                    else:
                        value_parts.append(ESCAPE_CHAR * (count // 2 + count % 2))
                    self.pos = run_end
            elif char == quote_char:
                flush()
                self.fragments.append(Quote(char, 0, char, char, self.pos, self.pos + 1))
                self.pos += 1
                return
            elif is_quote_char(char):
                flush()
                self.fragments.append(Quote(char, 0, char, char, self.pos, self.pos + 1))
                self.pos += 1
                text_start = self.pos
            else:
                value_parts.append(char)
                self.pos += 1

        flush()
        if self.throw_on_unbalanced_quote:
            raise ParseError(
                f"Unterminated quote at char {quote_start}: {self.text}",
                ErrorKind.UNTERMINATED_QUOTE,
                char=quote_char,
                index=quote_start,
            )
        logger.warning("Unterminated quote at char %d, keeping it literally", quote_start)


def lex(text: str, throw_on_unbalanced_quote: bool = True) -> list[Fragment]:
    """Lex a command line string into fragments.

    Args:
        text: The command line
        throw_on_unbalanced_quote: Raise on an unterminated quote instead of
            keeping it as a literal character

    Returns:
        List of Space, Text and Quote fragments

    Raises:
        InterfaceError: If text is not a string
        ParseError: On an unterminated quote or a trailing escape character

    Examples:
        >>> [f.value for f in lex('a "b"') if isinstance(f, Text)]
        ['a', 'b']
    """
    return QuoteLexer(text, throw_on_unbalanced_quote).lex()
