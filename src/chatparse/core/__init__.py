"""Core domain models.

Foundational value types shared by the grammars and the service:
results, argument vectors, commands and sessions.  Submodules in
``core/`` must not import from ``grammar/``, ``service/`` or ``cli/``.
"""
from __future__ import annotations

from chatparse.core.argv import Argv, parse_argv
from chatparse.core.commands import (
    Command,
    CommandAlreadyRegisteredError,
    CommandRegistry,
    CommandResolver,
    UnknownCommandError,
)
from chatparse.core.result import CommandNotFound, Err, Ok, Result
from chatparse.core.session import Action, ExecuteEnv, Fragment, LocalSession, Session

__all__ = [
    "Argv",
    "parse_argv",
    "Command",
    "CommandAlreadyRegisteredError",
    "CommandRegistry",
    "CommandResolver",
    "UnknownCommandError",
    "CommandNotFound",
    "Err",
    "Ok",
    "Result",
    "Action",
    "ExecuteEnv",
    "Fragment",
    "LocalSession",
    "Session",
]
