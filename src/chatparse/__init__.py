"""chat-parser — layered grammar for dispatching chat commands.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import asyncio
    import chatparse

    registry = chatparse.CommandRegistry()

    @registry.command("greet")
    async def greet(argv):
        return f"Hello, {' '.join(argv.args)}!"

    service = chatparse.ParserService(registry)
    asyncio.run(service.execute(chatparse.LocalSession(), "greet world"))
    # 'Hello, world!'

    # Extend a grammar for as long as the handle lives
    with service.layer("argv", chatparse.ParserLayer(
        name="shout",
        precedence=10,
        middleware=lambda inner: lambda state: inner(state).add_parse_action(
            lambda tokens: chatparse.parse_argv(tokens[0].source.upper())
        ),
    )):
        asyncio.run(service.execute(chatparse.LocalSession(), "greet world"))
        # 'Hello, WORLD!'

    chatparse.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from chatparse.core import (
    Argv,
    Command,
    CommandNotFound,
    CommandRegistry,
    CommandResolver,
    Err,
    ExecuteEnv,
    LocalSession,
    Ok,
    Result,
    Session,
    parse_argv,
)
from chatparse.grammar import FULL_GRAMMAR, ParserState, raw, run
from chatparse.messages import MessageCatalog, SessionError
from chatparse.service import (
    STACK_NAMES,
    ConfigError,
    ParserConfig,
    ParserService,
    load_config,
)
from chatparse.stacks import (
    NO_INNER,
    EmptyStackError,
    LayerHandle,
    ParserLayer,
    UnknownStackError,
)

__all__ = [
    "__version__",
    # Service
    "ParserService",
    "ParserConfig",
    "ConfigError",
    "load_config",
    "STACK_NAMES",
    # Stacks
    "ParserLayer",
    "LayerHandle",
    "NO_INNER",
    "EmptyStackError",
    "UnknownStackError",
    # Grammar
    "ParserState",
    "raw",
    "run",
    "FULL_GRAMMAR",
    # Core
    "Argv",
    "parse_argv",
    "Command",
    "CommandRegistry",
    "CommandResolver",
    "CommandNotFound",
    "Ok",
    "Err",
    "Result",
    "ExecuteEnv",
    "Session",
    "LocalSession",
    # Messages
    "MessageCatalog",
    "SessionError",
]
