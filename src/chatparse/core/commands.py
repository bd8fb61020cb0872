"""Command registry.

Commands are addressed by dotted keys (``"admin.ban"``).  The ``command``
grammar reconstructs the key from the input and performs exactly one
:meth:`CommandResolver.resolve` per parse; handles are never cached by
the parser.

Example
-------
Register with the decorator::

    from chatparse.core.commands import CommandRegistry

    registry = CommandRegistry()

    @registry.command("echo", description="Repeat the arguments")
    async def echo(argv):
        return " ".join(argv.args)

Resolve by key::

    registry.resolve("echo")     # Command(name='echo', ...)
    registry.resolve("missing")  # None
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chatparse.core.argv import Argv

logger = logging.getLogger(__name__)

Callback = Callable[["Argv"], Awaitable["str | None"]]


class UnknownCommandError(KeyError):
    """Raised when a command key is not in the registry."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Command {key!r} is not registered.")


class CommandAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a key that already exists."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Command {key!r} is already registered. "
            "Use a unique key or explicitly deregister the existing command first."
        )


@dataclass(frozen=True)
class Command:
    """A registered command.

    Parameters
    ----------
    name:
        Dotted key the command is resolved by.
    callback:
        Coroutine function invoked with the bound ``Argv``.
    description:
        One-line help text.
    """

    name: str
    callback: Callback
    description: str = ""

    async def invoke(self, argv: "Argv") -> str | None:
        return await self.callback(argv)


@runtime_checkable
class CommandResolver(Protocol):
    """Anything that can map a dotted key to a command."""

    def resolve(self, key: str) -> Command | None:
        ...  # pragma: no cover


class CommandRegistry:
    """In-memory :class:`CommandResolver` keyed by dotted command path."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, command: Command) -> Command:
        """Add ``command`` under its name.

        Raises
        ------
        CommandAlreadyRegisteredError
            If the name is already taken.
        """
        if command.name in self._commands:
            raise CommandAlreadyRegisteredError(command.name)
        self._commands[command.name] = command
        logger.debug("Registered command %r", command.name)
        return command

    def command(self, name: str, description: str = "") -> Callable[[Callback], Callback]:
        """Return a decorator that registers a coroutine function as ``name``.

        The decorated function is returned unchanged.
        """

        def decorator(callback: Callback) -> Callback:
            self.register(Command(name=name, callback=callback, description=description))
            return callback

        return decorator

    def deregister(self, key: str) -> None:
        """Remove the command registered under ``key``.

        Raises
        ------
        UnknownCommandError
            If ``key`` is not registered.
        """
        if key not in self._commands:
            raise UnknownCommandError(key)
        del self._commands[key]
        logger.debug("Deregistered command %r", key)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, key: str) -> Command | None:
        """Return the command registered under ``key``, or ``None``."""
        return self._commands.get(key)

    def get(self, key: str) -> Command:
        """Return the command registered under ``key``.

        Raises
        ------
        UnknownCommandError
            If ``key`` is not registered.
        """
        try:
            return self._commands[key]
        except KeyError:
            raise UnknownCommandError(key) from None

    def list_commands(self) -> list[str]:
        """Return all registered keys in alphabetical order."""
        return sorted(self._commands)

    def __contains__(self, key: object) -> bool:
        return key in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"CommandRegistry(commands={self.list_commands()})"
