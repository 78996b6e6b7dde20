"""Command-line interface for cmd-tokenize."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from cmd_tokenize.config.loader import load_config
from cmd_tokenize.config.schema import Config, Format
from cmd_tokenize.core.command import parse_command, split_command
from cmd_tokenize.errors import TokenizeError
from cmd_tokenize.escape import escape_argument


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="cmd-tokenize",
        description="Split shell-style command lines and describe their arguments",
        epilog="Example: cmd-tokenize parse -- 'gcc -Wall -o \"my prog\" main.c'",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="Configuration file path (default: ~/.config/cmd-tokenize/config.yaml)",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Drop-in configuration directory (default: ~/.config/cmd-tokenize/conf.d/)",
    )
    parser.add_argument("--windows", action="store_true", help="Use '/' option prefixes")
    parser.add_argument("--no-exec", action="store_true", help="Do not treat the first argument as the program")
    parser.add_argument("--no-unpack", action="store_true", help="Keep combined options like -abc as they are")
    parser.add_argument("--preserve-quotes", action="store_true", help="Keep the outer quotes")
    parser.add_argument("--no-terminator", action="store_true", help="Do not stop option parsing at '--'")
    parser.add_argument("--lenient", action="store_true", help="Keep unterminated quotes instead of failing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", "-V", action="version", version="%(prog)s 0.1.0")

    subparsers = parser.add_subparsers(dest="action", required=True)
    for name, help_text in (
        ("split", "Print the command split into arguments"),
        ("parse", "Print argument metadata"),
        ("escape", "Escape each argument for use on a command line"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("command", nargs="*", help="Command line (use -- to separate from options)")
    subparsers.add_parser("highlight", help="Type a command line with live highlighting")

    return parser.parse_args(args)


def option_overrides(parsed: argparse.Namespace) -> dict[str, Any]:
    """Option values set by command-line flags."""
    overrides: dict[str, Any] = {}
    if parsed.windows:
        overrides["use_windows_delimiters"] = True
    if parsed.no_exec:
        overrides["first_is_exec"] = False
    if parsed.no_unpack:
        overrides["unpack_combined_options"] = False
    if parsed.preserve_quotes:
        overrides["preserve_quotes"] = True
    if parsed.no_terminator:
        overrides["use_options_terminator"] = False
    if parsed.lenient:
        overrides["throw_on_unbalanced_quote"] = False
    return overrides


def run_highlight(config: Config) -> str:
    """Read one command line interactively and return it."""
    from prompt_toolkit import prompt

    from cmd_tokenize.editor.lexer import CommandLineLexer

    lexer = CommandLineLexer(config)
    return prompt("$ ", lexer=lexer, style=lexer.get_style())


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(config_path=parsed.config, dropin_dir=parsed.config_dir)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    overrides = option_overrides(parsed)
    if overrides:
        config = config.model_copy(
            update={"options": config.options.model_copy(update=overrides)}
        )
    options = config.options
    fmt = config.get_format()
    if parsed.windows:
        # The flag wins over prefixes from a format section.
        fmt = fmt.model_copy(update={"prefixes": Format.for_options(options).prefixes})

    try:
        if parsed.action == "escape":
            for argument in parsed.command:
                print(escape_argument(argument))
            return 0

        if parsed.action == "highlight":
            command_line = run_highlight(config)
        else:
            command_line = " ".join(parsed.command)

        if parsed.action == "split":
            print(json.dumps(split_command(command_line, options, fmt)))
        else:
            print(json.dumps(parse_command(command_line, options, fmt).to_dict(), indent=2))
        return 0

    except KeyboardInterrupt:
        return 130
    except TokenizeError as e:
        print(f"Error: {e} ({e.code})", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
