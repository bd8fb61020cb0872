"""Grammar module.

Exports the parser state, the pyparsing adapters and the default
middlewares of the four built-in stacks.
"""
from __future__ import annotations

from chatparse.grammar.grammars import (
    FULL_GRAMMAR,
    GRAMMAR_ARGV,
    GRAMMAR_COMMAND,
    GRAMMAR_COMMAND_NAME,
    GRAMMAR_ROOT,
    argv_grammar,
    bind_action,
    command_grammar,
    command_name_grammar,
    root_grammar,
)
from chatparse.grammar.primitives import raw, run
from chatparse.grammar.state import ParserMiddleware, ParserState, StatedParser

__all__ = [
    # State
    "ParserState",
    "StatedParser",
    "ParserMiddleware",
    # Substrate adapters
    "raw",
    "run",
    # Default layers
    "command_name_grammar",
    "command_grammar",
    "argv_grammar",
    "root_grammar",
    "bind_action",
    # Grammar constants
    "FULL_GRAMMAR",
    "GRAMMAR_COMMAND_NAME",
    "GRAMMAR_COMMAND",
    "GRAMMAR_ARGV",
    "GRAMMAR_ROOT",
]
