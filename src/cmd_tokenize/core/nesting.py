"""Nested quote resolution.

Quotes can contain escaped quotes, which can contain further escaped quotes:

    "level 0 \\"level 1 \\\\\\"level 2\\\\\\" level 1\\" level 0"

The resolver pairs up quote fragments from the lexer into a tree of
``Group`` nodes. A quote closes the innermost open group started by the same
character with the same number of escaping backslashes; anything else opens
a new group. Groups that never close are demoted back to literal text.

The tree is then flattened back into one token per argument. While doing so
the quotes on group boundaries are downgraded by one level of escaping: the
outermost quotes disappear (or stay, with ``preserve_quotes``) and escaped
quotes lose one level of backslashes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cmd_tokenize.config.schema import MAX_NESTING_DEPTH
from cmd_tokenize.core.lexer import Fragment, Quote, Space, Text, lex
from cmd_tokenize.errors import ErrorKind, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """A single argument.

    Attributes:
        value: The unescaped argument text
        original_value: The argument before it was split into key and value
        start: Start position in the command line, if known
        end: End position in the command line (exclusive), if known
    """

    value: str
    original_value: str = ""
    start: int | None = None
    end: int | None = None

    def __post_init__(self) -> None:
        if not self.original_value:
            object.__setattr__(self, "original_value", self.value)


@dataclass(frozen=True)
class Separator:
    """Whitespace between arguments."""

    start: int
    end: int


@dataclass(frozen=True)
class TextNode:
    """Literal text in the tree."""

    value: str
    raw: str
    start: int
    end: int
    quoted: bool = False


@dataclass(frozen=True)
class Group:
    """A quoted section and everything inside it.

    Attributes:
        open: The opening quote, None for the root of the tree
        close: The closing quote, None for the root of the tree
        children: Nodes inside the quotes
        depth: 0 for a top level quoted section, 1 for a quote inside it, etc.
    """

    open: Quote | None
    close: Quote | None
    children: tuple[Node, ...] = ()
    depth: int = -1

    @property
    def start(self) -> int:
        if self.open is not None:
            return self.open.start
        return self.children[0].start if self.children else 0

    @property
    def end(self) -> int:
        if self.close is not None:
            return self.close.end
        return self.children[-1].end if self.children else 0


Node = Separator | TextNode | Group


@dataclass
class _OpenLevel:
    opener: Quote | None
    children: list[Node] = field(default_factory=list)

    def demoted(self) -> list[Node]:
        """The level's contents with its opening quote turned into plain text."""
        assert self.opener is not None
        literal = TextNode(self.opener.value, self.opener.raw, self.opener.start, self.opener.end, True)
        return [literal, *self.children]


def _raw_text(nodes: list[Node]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.raw)
        elif isinstance(node, Group):
            parts.append(node.open.raw if node.open else "")
            parts.append(_raw_text(list(node.children)))
            parts.append(node.close.raw if node.close else "")
    return "".join(parts)


def resolve(
    fragments: list[Fragment],
    throw_on_unbalanced_quote: bool = True,
    max_depth: int = MAX_NESTING_DEPTH,
) -> Group:
    """Build a tree of nested quote groups from lexer fragments.

    Args:
        fragments: Fragments from the lexer
        throw_on_unbalanced_quote: Raise when a top level quote never closes,
            instead of keeping it as a literal character
        max_depth: Deepest nesting accepted

    Returns:
        The root Group (depth -1, no quotes) holding the whole command line

    Raises:
        ParseError: On an unclosed top level quote or nesting beyond max_depth
    """
    stack: list[_OpenLevel] = [_OpenLevel(opener=None)]

    for fragment in fragments:
        if isinstance(fragment, Space):
            stack[-1].children.append(Separator(fragment.start, fragment.end))
        elif isinstance(fragment, Text):
            stack[-1].children.append(
                TextNode(fragment.value, fragment.raw, fragment.start, fragment.end, fragment.quoted)
            )
        else:
            _push_quote(stack, fragment, max_depth)

    while len(stack) > 1:
        level = stack.pop()
        if len(stack) == 1 and throw_on_unbalanced_quote:
            assert level.opener is not None
            remainder = level.opener.raw + _raw_text(level.children)
            raise ParseError(
                f"Unbalanced quote at char {level.opener.start}: {remainder}",
                ErrorKind.UNBALANCED_QUOTE,
                char=level.opener.char,
                index=level.opener.start,
                remainder=remainder,
            )
        stack[-1].children.extend(level.demoted())

    return Group(open=None, close=None, children=tuple(stack[0].children), depth=-1)


def _push_quote(stack: list[_OpenLevel], quote: Quote, max_depth: int) -> None:
    """Close the matching open level with quote, or open a new one."""
    match_index = None
    for index in range(len(stack) - 1, 0, -1):
        opener = stack[index].opener
        assert opener is not None
        if opener.char == quote.char and opener.escapes == quote.escapes:
            match_index = index
            break

    if match_index is None:
        if len(stack) > max_depth:
            raise ParseError(
                f"Quotes nested deeper than {max_depth} levels at char {quote.start}",
                ErrorKind.NESTING_TOO_DEEP,
                char=quote.char,
                index=quote.start,
            )
        stack.append(_OpenLevel(opener=quote))
        return

    # Levels opened after the matching one never closed: they were literal.
    while len(stack) - 1 > match_index:
        level = stack.pop()
        stack[-1].children.extend(level.demoted())

    level = stack.pop()
    stack[-1].children.append(
        Group(open=level.opener, close=quote, children=tuple(level.children), depth=match_index - 1)
    )


def downgrade_quote(quote: Quote, depth: int, preserve_quotes: bool = False) -> str:
    """Render a group boundary quote with one level of escaping removed.

    Top level quotes are removed entirely unless preserve_quotes is set; deeper
    quotes lose one level of backslashes, or keep all of them when preserving.
    """
    if preserve_quotes:
        return quote.raw
    if depth <= 0:
        return ""
    return quote.value


def render(node: Node, preserve_quotes: bool = False) -> str:
    """Render a tree node as argument text."""
    if isinstance(node, Separator):
        return ""
    if isinstance(node, TextNode):
        return node.raw if preserve_quotes and node.quoted else node.value

    inner = "".join(render(child, preserve_quotes) for child in node.children)
    if node.open is None or node.close is None:
        return inner
    return (
        downgrade_quote(node.open, node.depth, preserve_quotes)
        + inner
        + downgrade_quote(node.close, node.depth, preserve_quotes)
    )


def flatten(tree: Group, preserve_quotes: bool = False) -> list[Token]:
    """Flatten a resolved tree into one token per argument.

    Nodes between two separators join into a single token. Separators never
    produce tokens of their own, while an empty quoted section ('""') produces
    an empty token.
    """
    tokens: list[Token] = []
    parts: list[str] | None = None
    start = end = 0

    for node in tree.children:
        if isinstance(node, Separator):
            if parts is not None:
                tokens.append(Token("".join(parts), start=start, end=end))
            parts = None
            continue
        if parts is None:
            parts = []
            start = node.start
        parts.append(render(node, preserve_quotes))
        end = node.end

    if parts is not None:
        tokens.append(Token("".join(parts), start=start, end=end))

    return tokens


def split_fragments(
    text: str,
    throw_on_unbalanced_quote: bool = True,
    preserve_quotes: bool = False,
    max_depth: int = MAX_NESTING_DEPTH,
) -> list[Token]:
    """Lex, resolve and flatten a command line into tokens."""
    fragments = lex(text, throw_on_unbalanced_quote)
    tree = resolve(fragments, throw_on_unbalanced_quote, max_depth)
    tokens = flatten(tree, preserve_quotes)
    logger.debug("Split %d fragments into %d tokens", len(fragments), len(tokens))
    return tokens
