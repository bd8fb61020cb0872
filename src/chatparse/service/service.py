"""Dispatch entry point.

:class:`ParserService` owns the stack registry for the lifetime of the
hosting application.  It seeds the four built-in stacks, exposes
``compose_stack`` and ``layer`` to extensions, and turns raw chat text
into an executed command with :meth:`ParserService.execute`.

Example
-------
::

    import asyncio

    from chatparse import CommandRegistry, LocalSession, ParserService

    registry = CommandRegistry()

    @registry.command("echo")
    async def echo(argv):
        return " ".join(argv.args)

    service = ParserService(registry)
    asyncio.run(service.execute(LocalSession(), "echo hello world"))
    # 'hello world'
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import pyparsing as pp

from chatparse.core.argv import Argv
from chatparse.core.commands import Command, CommandRegistry, CommandResolver
from chatparse.core.result import Err, Result
from chatparse.core.session import Action, ExecuteEnv, Fragment, Session
from chatparse.grammar.grammars import (
    argv_grammar,
    command_grammar,
    command_name_grammar,
    root_grammar,
)
from chatparse.grammar.primitives import run
from chatparse.grammar.state import ParserState, StatedParser
from chatparse.messages.catalog import MessageCatalog
from chatparse.messages.errors import SessionError
from chatparse.service.config import ParserConfig
from chatparse.stacks.stack import LayerHandle, NoInner, ParserLayer, StackRegistry

logger = logging.getLogger(__name__)

STACK_NAMES: tuple[str, ...] = ("root", "commandName", "command", "argv")

NESTED_COMMAND = "parser.execute"


class ParserService:
    """Layered chat-command parser and dispatcher.

    Parameters
    ----------
    registry:
        Resolves dotted command keys.  Defaults to an empty
        :class:`CommandRegistry`.  When the registry is a
        ``CommandRegistry`` the built-in ``parser.execute`` command is
        added to it.
    config:
        Service options; defaults to :class:`ParserConfig()`.
    catalog:
        Message catalog used to render errors; defaults to the built-in
        catalog with ``config.locale`` as default locale.
    """

    def __init__(
        self,
        registry: CommandResolver | None = None,
        config: ParserConfig | None = None,
        catalog: MessageCatalog | None = None,
    ) -> None:
        self.config = config if config is not None else ParserConfig()
        self.registry = registry if registry is not None else CommandRegistry()
        self.catalog = catalog if catalog is not None else MessageCatalog(self.config.locale)
        # in STACK_NAMES order
        defaults = (
            root_grammar(self.compose_stack, lambda: self.config.report_command_not_found),
            command_name_grammar,
            command_grammar(self.compose_stack, lambda key: self.registry.resolve(key)),
            argv_grammar,
        )
        self.stacks = StackRegistry(dict(zip(STACK_NAMES, defaults)))
        self._register_builtins()

    def _register_builtins(self) -> None:
        if isinstance(self.registry, CommandRegistry) and NESTED_COMMAND not in self.registry:
            self.registry.register(
                Command(
                    name=NESTED_COMMAND,
                    callback=self._execute_nested,
                    description="Execute the arguments as a command line",
                )
            )

    async def _execute_nested(self, argv: Argv) -> Fragment | None:
        if argv.session is None:
            return None
        return await self.execute(argv.session, argv.source)

    # ------------------------------------------------------------------
    # Stacks
    # ------------------------------------------------------------------

    def compose_stack(self, name: str) -> StatedParser | NoInner:
        """Compose stack ``name`` from the layers it holds right now.

        Raises
        ------
        chatparse.stacks.UnknownStackError
            If ``name`` is not one of the service's stacks.
        """
        return self.stacks.compose(name)

    def layer(self, name: str, layer: ParserLayer[Any]) -> LayerHandle:
        """Register ``layer`` on stack ``name``.

        Returns
        -------
        LayerHandle
            Disposer that removes every layer of that stack sharing
            ``layer.name``.
        """
        return self.stacks.layer(name, layer)

    def layers(self, name: str) -> tuple[ParserLayer[Any], ...]:
        """Return the layers of stack ``name`` in registration order."""
        return self.stacks.get(name).snapshot()

    # ------------------------------------------------------------------
    # Parsing and dispatch
    # ------------------------------------------------------------------

    def parse(
        self, text: str, state: ParserState | None = None
    ) -> Result[Action, pp.ParseBaseException]:
        """Run the ``root`` stack over ``text`` without executing anything."""
        root = self.compose_stack("root")(state if state is not None else ParserState())
        return run(root, text)

    async def execute(self, session: Session, text: str) -> Fragment | None:
        """Parse ``text`` and run the resulting action in ``session``.

        Parameters
        ----------
        session:
            Execution runtime handed to the action.
        text:
            Command line without any message prefix.

        Returns
        -------
        Fragment | None
            Whatever the executed command returned.  ``None`` when the
            input does not parse (unless ``report_syntax_error`` is set)
            or names an unknown command with reporting disabled.

        Raises
        ------
        SessionError
            ``command-not-found`` or ``syntax-error``, depending on
            configuration; also anything the command itself raises.
        """
        outcome = self.parse(text)
        if isinstance(outcome, Err):
            if self.config.report_syntax_error:
                raise SessionError("syntax-error", [text])
            logger.debug("Dropping input that does not parse: %r (%s)", text, outcome.err)
            return None
        return await outcome.val(ExecuteEnv(session=session))

    async def handle_message(
        self,
        session: Session,
        content: str,
        next_handler: Callable[[], Awaitable[Fragment | None]],
    ) -> Fragment | None:
        """Message middleware: dispatch prefixed content, pass the rest on.

        The first configured prefix that ``content`` starts with is
        stripped and the remainder executed.  Content without a prefix
        goes to ``next_handler``.
        """
        prefix = next((p for p in self.config.prefixes if content.startswith(p)), None)
        if prefix is None:
            return await next_handler()
        return await self.execute(session, content[len(prefix):])

    def render_error(self, error: SessionError, locale: str | None = None) -> str:
        """Render ``error`` through the service's catalog."""
        return error.render(self.catalog, locale)

    def close(self) -> None:
        """Drop every stack; later compositions raise ``UnknownStackError``."""
        self.stacks = StackRegistry({})
        logger.debug("Parser service closed")

    def __repr__(self) -> str:
        return f"ParserService(stacks={self.stacks.names()}, config={self.config!r})"
