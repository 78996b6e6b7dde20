"""Interactive highlighting built on prompt_toolkit."""

from cmd_tokenize.editor.lexer import CommandLineLexer, argument_role

__all__ = ["CommandLineLexer", "argument_role"]
