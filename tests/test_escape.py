"""Tests for escaping arguments."""

import pytest

from cmd_tokenize import EscapeError, ErrorKind, escape_argument, util
from cmd_tokenize.escape import alter_quote_depth, alter_slash_depth, add_slashes, remove_slashes


class TestEscapeArgument:
    """Tests for escape_argument()."""

    @pytest.mark.parametrize(
        "value",
        ["abcd", "あ", "as$!@#$df", "-abc", "--name=value"],
    )
    def test_plain_words_unchanged(self, value):
        """Test that words without whitespace or quotes are left alone."""
        assert escape_argument(value) == value

    def test_backslash_doubled(self):
        """Test that backslashes are escaped."""
        assert escape_argument("ab\\cd") == "ab\\\\cd"

    def test_whitespace_single_quoted(self):
        """Test that whitespace is wrapped in single quotes."""
        assert escape_argument("ab cd") == "'ab cd'"

    def test_single_quote_double_quoted(self):
        """Test that a single quote makes double quotes the wrapper."""
        assert escape_argument("ab'cd") == "\"ab'cd\""

    def test_double_quote_single_quoted(self):
        """Test that a double quote makes single quotes the wrapper."""
        assert escape_argument('ab"cd') == "'ab\"cd'"

    def test_both_quotes(self):
        """Test that with both quote kinds the double quotes are escaped."""
        assert escape_argument("ab\"'cd") == "\"ab\\\"'cd\""

    def test_trailing_backslash_outside_quotes(self):
        """Test that trailing backslashes go after the closing quote."""
        assert escape_argument("ab cd\\") == "'ab cd'\\\\"
        assert escape_argument("ab cd\\\\") == "'ab cd'\\\\\\\\"
        assert escape_argument("ab' 'cd\\") == "\"ab' 'cd\"\\\\"
        assert escape_argument("ab\\ cd\\") == "'ab\\\\ cd'\\\\"

    def test_trailing_backslash_with_both_quotes(self):
        """Test trailing backslashes when both quote kinds are present."""
        assert escape_argument("\"as'df\"\\") == "\"\\\"as'df\\\"\"\\\\"

    def test_escaped_quotes_in_value(self):
        """Test values that already contain backslash-quote sequences."""
        assert escape_argument('a\\"b\\"cd') == "'a\\\\\"b\\\\\"cd'"
        assert escape_argument("'ab\\\"zxcv\\\"cd'") == "\"'ab\\\\\\\"zxcv\\\\\\\"cd'\""

    def test_empty(self):
        """Test that the empty string becomes empty quotes."""
        assert escape_argument("") == "''"

    @pytest.mark.parametrize("value", [None, 1, ["a"]])
    def test_invalid_type(self, value):
        """Test that only strings can be escaped."""
        with pytest.raises(EscapeError) as exc_info:
            escape_argument(value)

        assert exc_info.value.kind is ErrorKind.ESCAPE
        assert exc_info.value.code == "CMD_TOKENIZE_ESCAPE"


class TestSlashes:
    """Tests for the backslash helpers."""

    def test_alter_slash_depth_up(self):
        """Test doubling backslash runs."""
        assert alter_slash_depth("a\\b\\\\c", 1) == "a\\\\b\\\\\\\\c"

    def test_alter_slash_depth_down(self):
        """Test halving backslash runs."""
        assert alter_slash_depth("a\\\\b", -1) == "a\\b"
        assert alter_slash_depth("a\\b", -1) == "ab"
        assert alter_slash_depth("\\\\\\", -1) == "\\\\"

    def test_alter_slash_depth_zero(self):
        """Test that amount 0 is a no-op."""
        assert alter_slash_depth("a\\b", 0) == "a\\b"

    def test_alter_quote_depth(self):
        """Test adding and removing backslashes in front of quotes."""
        assert alter_quote_depth('a"b', '"', 1) == 'a\\"b'
        assert alter_quote_depth('a\\"b', '"', 1) == 'a\\\\"b'
        assert alter_quote_depth('a\\"b', '"', -1) == 'a"b'
        assert alter_quote_depth("a'b", '"', 1) == "a'b"

    def test_add_and_remove(self):
        """Test that remove_slashes undoes add_slashes."""
        assert add_slashes("a\\b") == "a\\\\b"
        assert remove_slashes(add_slashes("a\\b")) == "a\\b"
        assert add_slashes('a"b', '"') == 'a\\"b'
        assert remove_slashes('a\\"b', '"') == 'a"b'

    def test_util_reexports(self):
        """Test the util namespace."""
        assert util.escape_argument is escape_argument
        assert util.add_slashes is add_slashes
        assert [r.content for r in util.argument_metadata("-ab")] == ["a", "b"]
