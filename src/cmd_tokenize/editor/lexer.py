"""prompt_toolkit lexer that highlights a command line by argument role."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer
from prompt_toolkit.styles import Style

from cmd_tokenize.config.schema import Config
from cmd_tokenize.core.classifier import ArgumentRecord, iter_classified
from cmd_tokenize.core.command import tokenize_command
from cmd_tokenize.core.nesting import Token
from cmd_tokenize.core.separator import split_separators
from cmd_tokenize.errors import ParseError

if TYPE_CHECKING:
    from cmd_tokenize.config.schema import Format, Options


def argument_role(record: ArgumentRecord) -> str:
    """Name of the style class used for a record."""
    if record.is_executable:
        return "executable"
    if record.is_terminator:
        return "terminator"
    if record.after_terminator:
        return "after-terminator"
    if record.is_value:
        return "value"
    if record.is_key:
        return "key"
    if record.is_option:
        return "option"
    return "argument"


class CommandLineLexer(Lexer):
    """Lexer for command line syntax highlighting based on argument metadata."""

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the lexer.

        Args:
            config: Configuration object; defaults are used if not given
        """
        self.config = config or Config()
        self.options: Options = self.config.options
        self.format: Format = self.config.get_format()
        self._styles = self._build_styles()

    def _build_styles(self) -> dict[str, str]:
        """Build prompt_toolkit style dictionary from the theme."""
        if not self.config.config.color:
            return {}
        return {role: style for role, style in self.config.theme.items() if style}

    def get_style_dict(self) -> dict[str, str]:
        """Get the style dictionary for prompt_toolkit."""
        return self._styles

    def get_style(self) -> Style:
        return Style.from_dict(self._styles)

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        """Lex a document and return a function that returns styled text for each line.

        Args:
            document: The document to lex

        Returns:
            Function that takes a line number and returns styled text tuples
        """
        text = document.text
        styled_tokens = self.style_text(text)

        def get_line(line_number: int) -> StyleAndTextTuples:
            """Get styled text for a specific line."""
            if line_number == 0:
                return styled_tokens
            return []

        return get_line

    def style_text(self, text: str) -> StyleAndTextTuples:
        """Style a whole command line.

        Input that cannot be parsed (e.g. an unterminated quote while the user
        is still typing) is shown in the error style from the point of failure.
        """
        try:
            tokens = tokenize_command(text, self.options)
        except ParseError as e:
            return [("", text[: e.index]), ("class:error", text[e.index :])]

        tokens = split_separators(tokens, self.options, self.format)
        return self._style_tokens(tokens, text)

    def _style_tokens(self, tokens: list[Token], text: str) -> StyleAndTextTuples:
        """Convert classified tokens to styled text tuples."""
        styled: StyleAndTextTuples = []
        last_end = 0
        span_records: list[ArgumentRecord] = []
        span: tuple[int, int] | None = None

        def flush() -> None:
            nonlocal last_end
            if span is None:
                return
            start, end = span
            if start > last_end:
                styled.append(("", text[last_end:start]))
            styled.extend(self._style_span(text[start:end], span_records))
            last_end = end

        for token, records in iter_classified(tokens, self.options, self.format):
            token_span = (token.start or 0, token.end or 0)
            # Key and value halves of '--a=b' share one span.
            if token_span != span:
                flush()
                span = token_span
                span_records = []
            span_records.extend(records)
        flush()

        if last_end < len(text):
            styled.append(("", text[last_end:]))

        return styled

    def _style_span(self, raw: str, records: list[ArgumentRecord]) -> StyleAndTextTuples:
        """Style the source text of one argument."""
        if not records:
            return [("", raw)]

        key = records[-2] if len(records) > 1 else None
        value = records[-1]
        if key is not None and key.is_key and value.is_value and key.suffix:
            split_at = raw.find(key.suffix)
            if split_at >= 0:
                styled: StyleAndTextTuples = [("class:key", raw[: split_at + 1])]
                # '--name=' alone has an empty value.
                if split_at + 1 < len(raw):
                    styled.append(("class:value", raw[split_at + 1 :]))
                return styled

        return [(f"class:{argument_role(records[0])}", raw)]
