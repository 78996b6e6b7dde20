"""Pydantic models for tokenizer options and the delimiter grammar."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmd_tokenize.errors import InterfaceError


class PrefixType(str, Enum):
    """Style of an option prefix."""

    UNIX = "unix"
    WINDOWS = "windows"


class PrefixRule(BaseModel):
    """An option prefix, e.g. one or more '-' characters."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pattern: str = Field(description="Regex matching the prefix, e.g. '-+'")
    type: PrefixType = Field(default=PrefixType.UNIX, description="Prefix style")
    combinable: bool = Field(
        default=False,
        alias="isCombinable",
        description="Whether single-character options may be combined, e.g. -abc",
    )

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        """Reject empty or invalid regular expressions."""
        if not v:
            raise ValueError("Prefix pattern must not be empty")
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid prefix pattern {v!r}: {e}") from e
        return v

    def match(self, value: str) -> tuple[str, str] | None:
        """Split value into (prefix, remainder), or None if it has no such prefix.

        A prefix that leaves nothing behind (e.g. a lone '-') does not count.
        """
        m = re.fullmatch(f"(?P<prefix>{self.pattern})(?P<rest>.*)", value, re.DOTALL)
        if m is None or m.group("rest") == "" or m.group("prefix") == "":
            return None
        return m.group("prefix"), m.group("rest")


UNIX_PREFIXES = (PrefixRule(pattern="-+", type=PrefixType.UNIX, combinable=True),)
WINDOWS_PREFIXES = (PrefixRule(pattern="/+", type=PrefixType.WINDOWS, combinable=False),)
DEFAULT_SUFFIXES = ("=", ":")
DEFAULT_TERMINATOR = "--"
MAX_NESTING_DEPTH = 64


def _by_field_name(model: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """Rename camelCase alias keys in data to the model's field names."""
    aliases = {field.alias: name for name, field in model.model_fields.items() if field.alias}
    return {aliases.get(key, key): value for key, value in data.items()}


class Options(BaseModel):
    """Behavioral toggles for a tokenize call.

    Both snake_case names and camelCase aliases (``firstIsExec`` etc.) are
    accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    use_windows_delimiters: bool = Field(
        default=False,
        alias="useWindowsDelimiters",
        description="Use '/' option prefixes instead of '-' and '--'",
    )
    first_is_exec: bool = Field(
        default=True,
        alias="firstIsExec",
        description="Treat the first argument as the executable name",
    )
    unpack_combined_options: bool = Field(
        default=True,
        alias="unpackCombinedOptions",
        description="Expand -abc into -a -b -c",
    )
    preserve_quotes: bool = Field(
        default=False,
        alias="preserveQuotes",
        description="Keep the outer layer of quotes instead of removing it",
    )
    use_options_terminator: bool = Field(
        default=True,
        alias="useOptionsTerminator",
        description="Stop option parsing after the terminator argument",
    )
    throw_on_unbalanced_quote: bool = Field(
        default=True,
        alias="throwOnUnbalancedQuote",
        description="Raise on unterminated quotes instead of keeping them literally",
    )
    max_nesting_depth: int = Field(
        default=MAX_NESTING_DEPTH,
        ge=1,
        alias="maxNestingDepth",
        description="Deepest quote nesting accepted before raising",
    )

    @classmethod
    def build(cls, options: Options | Mapping[str, Any] | None = None, **overrides: Any) -> Options:
        """Build a fully populated Options from an instance, a mapping, or None."""
        if options is None:
            base = cls()
        elif isinstance(options, Options):
            base = options
        elif isinstance(options, Mapping):
            base = cls(**_by_field_name(cls, options))
        else:
            raise InterfaceError(f"Options must be a mapping or Options instance, not {type(options).__name__}")

        if not overrides:
            return base
        return cls(**{**base.model_dump(), **_by_field_name(cls, overrides)})


class Format(BaseModel):
    """The delimiter grammar: option prefixes, value suffixes, terminator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    prefixes: tuple[PrefixRule, ...] = Field(
        default=UNIX_PREFIXES,
        alias="optionDelimiters",
        description="Ordered option prefix rules; the first match wins",
    )
    suffixes: tuple[str, ...] = Field(
        default=DEFAULT_SUFFIXES,
        alias="valueDelimiters",
        description="Ordered value delimiter characters, e.g. '=' then ':'",
    )
    terminator: str = Field(
        default=DEFAULT_TERMINATOR,
        alias="optionsTerminator",
        description="Argument after which no more options are parsed",
    )

    @field_validator("suffixes", mode="before")
    @classmethod
    def parse_suffixes(cls, v: Any) -> Any:
        """Accept plain characters or {'char': '='} objects."""
        if isinstance(v, str):
            return (v,)
        if isinstance(v, (list, tuple)):
            return tuple(item["char"] if isinstance(item, Mapping) else item for item in v)
        return v

    @field_validator("suffixes")
    @classmethod
    def check_suffixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for char in v:
            if len(char) != 1:
                raise ValueError(f"Value delimiters must be single characters: {char!r}")
        return v

    @classmethod
    def for_options(cls, options: Options) -> Format:
        """Default grammar for the given options."""
        if options.use_windows_delimiters:
            return cls(prefixes=WINDOWS_PREFIXES)
        return cls()

    @classmethod
    def build(cls, fmt: Format | Mapping[str, Any] | None, options: Options) -> Format:
        """Build a Format, filling anything not given from the defaults for options."""
        if isinstance(fmt, Format):
            return fmt
        default = cls.for_options(options)
        if fmt is None:
            return default
        if not isinstance(fmt, Mapping):
            raise InterfaceError(f"Format must be a mapping or Format instance, not {type(fmt).__name__}")
        return cls(**{**default.model_dump(), **_by_field_name(cls, fmt)})

    def match_prefix(self, value: str) -> tuple[PrefixRule, str, str] | None:
        """Find the first prefix rule matching value.

        Returns:
            (rule, prefix, remainder), or None for non-options
        """
        for rule in self.prefixes:
            matched = rule.match(value)
            if matched is not None:
                return rule, matched[0], matched[1]
        return None

    def match_suffix(self, remainder: str) -> tuple[str, str] | None:
        """Match a trailing value delimiter, e.g. 'name=' -> ('name', '=').

        The delimiter must be the only occurrence of that character and must
        have text before it.
        """
        head = remainder[:-1]
        for char in self.suffixes:
            if remainder.endswith(char) and head and char not in head:
                return head, char
        return None

    def find_separator(self, remainder: str) -> tuple[int, str] | None:
        """Find where to split 'name=value' into key and value.

        The first delimiter in order whose first occurrence has text on both
        sides wins.
        """
        for char in self.suffixes:
            index = remainder.find(char)
            if 0 < index < len(remainder) - 1:
                return index, char
        return None

    def is_terminator(self, value: str) -> bool:
        return bool(self.terminator) and value == self.terminator


class GlobalConfig(BaseModel):
    """Settings that are not tokenizer options."""

    color: bool = Field(default=True, description="Enable/disable colors")


class Config(BaseModel):
    """Top-level configuration file contents."""

    config: GlobalConfig = Field(default_factory=GlobalConfig)
    options: Options = Field(default_factory=Options)
    format: Format | None = Field(default=None, description="Grammar override")
    theme: dict[str, str] = Field(
        default_factory=dict, description="Argument role to prompt_toolkit style"
    )

    @field_validator("format", mode="before")
    @classmethod
    def parse_format(cls, v: Any) -> Any:
        """Treat an empty format section as 'use the defaults'."""
        if v == {}:
            return None
        return v

    def get_format(self) -> Format:
        """Configured grammar, or the default for the configured options."""
        if self.format is not None:
            return self.format
        return Format.for_options(self.options)
