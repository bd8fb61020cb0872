"""Execution-side interfaces: sessions, environments and actions.

A successful ``root`` parse yields an :data:`Action`: a coroutine
function that takes an :class:`ExecuteEnv` and hands the bound
:class:`~chatparse.core.argv.Argv` to ``env.session.execute``.
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

from chatparse.core.argv import Argv

Fragment: TypeAlias = str


@runtime_checkable
class Session(Protocol):
    """The execution runtime for one conversation.

    Implementations receive the fully bound argument vector
    (``root=True``, ``command`` and ``session`` set) and return the
    response fragment, or ``None`` when there is nothing to say.
    """

    async def execute(self, argv: Argv) -> Fragment | None:
        ...  # pragma: no cover


@dataclass(frozen=True)
class ExecuteEnv:
    """Environment handed to an action by the dispatcher."""

    session: Session


Action: TypeAlias = Callable[[ExecuteEnv], Awaitable["Fragment | None"]]


class LocalSession:
    """In-process session that runs the bound command's callback directly.

    Parameters
    ----------
    locale:
        Locale used when rendering messages for this session.
    """

    def __init__(self, locale: str = "en-US") -> None:
        self.locale = locale

    async def execute(self, argv: Argv) -> Fragment | None:
        if argv.command is None:
            return None
        return await argv.command.invoke(argv)

    def __repr__(self) -> str:
        return f"LocalSession(locale={self.locale!r})"
