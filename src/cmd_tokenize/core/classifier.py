"""Argument classification: options, keys, values, terminators."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any

from cmd_tokenize.config.schema import PrefixType

if TYPE_CHECKING:
    from cmd_tokenize.config.schema import Format, Options
    from cmd_tokenize.core.nesting import Token


@dataclass(frozen=True)
class ArgumentRecord:
    """Metadata for a single argument.

    Attributes:
        content: Argument text without prefix or suffix
        original_value: The token this record came from, before splitting
        prefix: Option prefix such as '-', '--' or '/', None for non-options
        prefix_type: Style of the prefix
        is_option: Whether the argument is an option
        is_long_option: Whether the prefix is longer than one character
        suffix: Value delimiter such as '=' if the option takes the next record as value
        is_paired: Whether a suffix was found
        is_key: Option half of an option/value pair
        is_value: Value half of an option/value pair
        is_terminator: Whether this is the options terminator; None if disabled
        after_terminator: Whether this comes after the terminator; None if disabled
        is_executable: Whether this is the program name; None if not applicable
        is_unpacked: Whether this was unpacked from a combined option like -abc
    """

    content: str
    original_value: str
    prefix: str | None = None
    prefix_type: PrefixType | None = None
    is_option: bool = False
    is_long_option: bool = False
    suffix: str | None = None
    is_paired: bool = False
    is_key: bool = False
    is_value: bool = False
    is_terminator: bool | None = False
    after_terminator: bool | None = False
    is_executable: bool | None = None
    is_unpacked: bool = False

    def render(self) -> str:
        """The argument as it would appear in a split command."""
        if self.is_option:
            return f"{self.prefix}{self.content}{self.suffix or ''}"
        return self.content

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.prefix_type is not None:
            data["prefix_type"] = self.prefix_type.value
        return data


@dataclass(frozen=True)
class ClassifierState:
    """State carried from one token to the next."""

    after_terminator: bool = False
    expect_value: bool = False


def classify_token(
    token: Token,
    index: int,
    state: ClassifierState,
    options: Options,
    fmt: Format,
) -> tuple[list[ArgumentRecord], ClassifierState]:
    """Classify one token.

    Returns:
        The records for the token (several for an unpacked combined option)
        and the state for the next token
    """
    use_terminator = options.use_options_terminator
    is_exec = (index == 0) if options.first_is_exec else None
    shared: dict[str, Any] = {
        "original_value": token.original_value,
        "is_terminator": False if use_terminator else None,
        "after_terminator": state.after_terminator if use_terminator else None,
        "is_executable": is_exec,
    }

    # The token after a paired key is its value, whatever it looks like.
    if state.expect_value:
        record = ArgumentRecord(content=token.value, is_value=True, **shared)
        return [record], replace(state, expect_value=False)

    is_terminator = (
        use_terminator
        and not state.after_terminator
        and not is_exec
        and fmt.is_terminator(token.value)
    )
    if is_terminator:
        shared["is_terminator"] = True
        record = ArgumentRecord(content=token.value, **shared)
        return [record], replace(state, after_terminator=True)

    if is_exec or state.after_terminator:
        return [ArgumentRecord(content=token.value, **shared)], state

    prefix_match = fmt.match_prefix(token.value)
    if prefix_match is None:
        return [ArgumentRecord(content=token.value, **shared)], state

    rule, prefix, content = prefix_match
    suffix = None
    suffix_match = fmt.match_suffix(content)
    if suffix_match is not None:
        content, suffix = suffix_match

    is_paired = suffix is not None
    is_long_option = len(prefix) > 1
    record = ArgumentRecord(
        content=content,
        prefix=prefix,
        prefix_type=rule.type,
        is_option=True,
        is_long_option=is_long_option,
        suffix=suffix,
        is_paired=is_paired,
        is_key=is_paired,
        **shared,
    )
    state = replace(state, expect_value=is_paired)

    is_combined = (
        rule.combinable
        and not is_long_option
        and options.unpack_combined_options
        and len(content) > 1
    )
    if not is_combined:
        return [record], state

    # Only the last letter of -abc= can take the value.
    records = []
    for position, char in enumerate(content):
        is_last = position == len(content) - 1
        records.append(
            replace(
                record,
                content=char,
                suffix=suffix if is_last else None,
                is_paired=is_paired and is_last,
                is_key=is_paired and is_last,
                is_unpacked=True,
            )
        )
    return records, state


def iter_classified(
    tokens: list[Token], options: Options, fmt: Format
) -> Iterator[tuple[Token, list[ArgumentRecord]]]:
    """Classify tokens left to right, yielding each token with its records."""
    state = ClassifierState()
    for index, token in enumerate(tokens):
        records, state = classify_token(token, index, state, options, fmt)
        yield token, records


def classify(tokens: list[Token], options: Options, fmt: Format) -> list[ArgumentRecord]:
    """Classify tokens into argument records.

    Args:
        tokens: Tokens, already split on value delimiters
        options: Tokenizer options
        fmt: Delimiter grammar

    Returns:
        One record per argument; combined options produce several
    """
    records: list[ArgumentRecord] = []
    for _, token_records in iter_classified(tokens, options, fmt):
        records.extend(token_records)
    return records
