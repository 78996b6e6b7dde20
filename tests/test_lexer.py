"""Tests for the quote lexer."""

import pytest

from cmd_tokenize.core.lexer import Quote, Space, Text, lex
from cmd_tokenize.errors import ErrorKind, InterfaceError, ParseError


def texts(fragments):
    return [f.value for f in fragments if isinstance(f, Text)]


class TestLexWords:
    """Tests for unquoted input."""

    def test_simple_words(self):
        """Test that whitespace separates words."""
        fragments = lex("gcc -o test")

        assert [type(f) for f in fragments] == [Text, Space, Text, Space, Text]
        assert texts(fragments) == ["gcc", "-o", "test"]

    def test_whitespace_runs_collapse(self):
        """Test that a run of whitespace is a single separator."""
        fragments = lex("  a \t  b  ")

        assert [type(f) for f in fragments] == [Space, Text, Space, Text, Space]
        assert fragments[2].raw == " \t  "

    def test_empty_input(self):
        """Test lexing an empty string."""
        assert lex("") == []

    def test_positions(self):
        """Test that fragment positions point into the input."""
        text = "gcc -o"
        fragments = lex(text)

        assert (fragments[0].start, fragments[0].end) == (0, 3)
        assert (fragments[2].start, fragments[2].end) == (4, 6)
        assert text[fragments[2].start : fragments[2].end] == "-o"

    def test_escaped_space(self):
        """Test that an escaped space does not end the word."""
        fragments = lex(r"a\ b")

        assert len(fragments) == 1
        assert fragments[0].value == "a b"
        assert fragments[0].raw == r"a\ b"

    def test_escaped_backslash(self):
        """Test that a double backslash is a literal backslash."""
        assert texts(lex(r"a\\ b")) == ["a\\", "b"]

    def test_escaped_quotes_are_text(self):
        """Test that escaped quotes outside quotes are plain text."""
        fragments = lex(r"\"a\'")

        assert len(fragments) == 1
        assert fragments[0].value == "\"a'"

    def test_escaped_letter(self):
        """Test that the backslash before an ordinary character is dropped."""
        assert texts(lex(r"\a")) == ["a"]


class TestLexQuotes:
    """Tests for quoted sections."""

    def test_double_quotes(self):
        """Test that a quoted section keeps its whitespace."""
        fragments = lex('a "b  c"')

        assert [type(f) for f in fragments] == [Text, Space, Quote, Text, Quote]
        assert fragments[3].value == "b  c"
        assert fragments[3].quoted is True
        assert fragments[2].is_boundary
        assert fragments[4].is_boundary

    def test_empty_quotes(self):
        """Test that empty quotes produce just the two quote fragments."""
        fragments = lex('""')

        assert [type(f) for f in fragments] == [Quote, Quote]

    def test_escaped_outer_quote(self):
        """Test that an escaped outer quote becomes a nested quote fragment."""
        fragments = lex(r'"a \"b\""')
        quotes = [f for f in fragments if isinstance(f, Quote)]

        assert [(q.char, q.escapes) for q in quotes] == [('"', 0), ('"', 1), ('"', 1), ('"', 0)]
        assert quotes[1].value == '"'
        assert quotes[1].raw == r"\""

    def test_deeper_escaped_quote(self):
        """Test that three backslashes make a second level quote."""
        fragments = lex(r'"\\\"x\\\""')
        quotes = [f for f in fragments if isinstance(f, Quote)]

        assert quotes[1].escapes == 3
        assert quotes[1].value == r"\""
        assert quotes[1].raw == r"\\\""

    def test_backslash_before_other_character_kept(self):
        """Test that inside quotes a backslash before a letter stays."""
        assert texts(lex(r'"a\b"')) == [r"a\b"]

    def test_backslash_pairs_collapse(self):
        """Test that inside quotes a double backslash becomes one."""
        assert texts(lex(r'"a\\b"')) == [r"a\b"]

    def test_other_quote_inside(self):
        """Test that the other quote character inside quotes is a quote fragment."""
        fragments = lex(r'''"it's"''')
        quotes = [f for f in fragments if isinstance(f, Quote)]

        assert [q.char for q in quotes] == ['"', "'", '"']

    def test_escaped_other_quote_keeps_backslash(self):
        """Test that a backslash before the other quote kind is kept."""
        fragments = lex(r'''"zx\'cv"''')
        quotes = [f for f in fragments if isinstance(f, Quote)]

        assert quotes[1].value == r"\'"

    def test_adjacent_quotes_without_space(self):
        """Test that adjacent sections are not separated by a Space."""
        fragments = lex("\"a\"'b'c")

        assert not any(isinstance(f, Space) for f in fragments)
        assert texts(fragments) == ["a", "b", "c"]


class TestLexErrors:
    """Tests for lexer failures."""

    def test_unterminated_quote(self):
        """Test that an unterminated quote raises with its position."""
        with pytest.raises(ParseError) as exc_info:
            lex('command "asdf')

        assert exc_info.value.kind is ErrorKind.UNTERMINATED_QUOTE
        assert exc_info.value.char == '"'
        assert exc_info.value.index == 8
        assert "Unterminated quote" in str(exc_info.value)

    def test_unterminated_quote_after_escaped_quote(self):
        """Test that an escaped closing quote leaves the quote open."""
        with pytest.raises(ParseError):
            lex(r'command "zxcv\" something')

    def test_unterminated_quote_lenient(self):
        """Test that lenient mode keeps going to the end of the input."""
        fragments = lex('command "asdf xcv', throw_on_unbalanced_quote=False)

        assert isinstance(fragments[-2], Quote)
        assert fragments[-1].value == "asdf xcv"

    def test_trailing_escape(self):
        """Test that input cannot end on a lone backslash."""
        with pytest.raises(ParseError) as exc_info:
            lex("a b \\")

        assert exc_info.value.kind is ErrorKind.TRAILING_ESCAPE
        assert exc_info.value.index == 4
        assert exc_info.value.char == "\\"

    def test_trailing_escaped_backslash_is_fine(self):
        """Test that an escaped backslash at the end is allowed."""
        assert texts(lex("a b \\\\")) == ["a", "b", "\\"]

    def test_odd_trailing_backslashes(self):
        """Test that three trailing backslashes still leave one unescaped."""
        with pytest.raises(ParseError):
            lex("a b \\\\\\")

    def test_non_string_input(self):
        """Test that non-string input is rejected."""
        with pytest.raises(InterfaceError):
            lex(["a", "b"])
        with pytest.raises(ParseError):
            lex(1)
