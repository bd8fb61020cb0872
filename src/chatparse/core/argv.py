"""Argument-vector shape produced by the ``argv`` grammar.

The ``argv`` grammar only decides *which* text belongs to the arguments;
:func:`parse_argv` turns that text into the structured :class:`Argv`
consumed by the execution runtime.  Splitting follows POSIX shell
quoting rules via :mod:`shlex`, with backslashes kept literally.
Tokens are then classified:

- ``--name=value``  option ``name`` with the string ``value``
- ``--name``        option ``name`` set to ``True``
- ``--no-name``     option ``name`` set to ``False``
- ``-abc``          options ``a``, ``b`` and ``c`` set to ``True``
- ``--``            every following token is positional
- anything else     positional argument (negative numbers included)
"""
from __future__ import annotations

import re
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chatparse.core.commands import Command
    from chatparse.core.session import Session

_NUMBER = re.compile(r"-\d+(\.\d+)?")


@dataclass(frozen=True)
class Argv:
    """Structured arguments for one command invocation.

    Parameters
    ----------
    source:
        The raw argument text handed to :func:`parse_argv`.
    tokens:
        Shell-split tokens, quotes removed.
    args:
        Positional arguments in order.
    options:
        Option name to value (``True``/``False`` for flags).
    command:
        The resolved command; set by the ``root`` grammar's action.
    session:
        The session executing the command; set by the ``root`` action.
    root:
        ``True`` when the invocation comes straight from user input.
    """

    source: str = ""
    tokens: tuple[str, ...] = ()
    args: tuple[str, ...] = ()
    options: dict[str, Any] = field(default_factory=dict)
    command: "Command | None" = None
    session: "Session | None" = None
    root: bool = False


def _split(text: str) -> list[str]:
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    try:
        return list(lexer)
    except ValueError:
        # Unbalanced quotes: fall back to plain whitespace splitting.
        return text.split()


def parse_argv(text: str) -> Argv:
    """Split ``text`` into an :class:`Argv`.

    Total: every string produces an ``Argv``; unbalanced quotes degrade
    to whitespace splitting instead of raising.

    Parameters
    ----------
    text:
        Argument text as matched by the ``argv`` grammar.

    Returns
    -------
    Argv
        The structured argument vector with no command or session bound.
    """
    tokens = _split(text)
    args: list[str] = []
    options: dict[str, Any] = {}
    positional_only = False

    for token in tokens:
        if positional_only or token == "-" or _NUMBER.fullmatch(token):
            args.append(token)
        elif token == "--":
            positional_only = True
        elif token.startswith("--"):
            name, sep, value = token[2:].partition("=")
            if sep:
                options[name] = value
            elif name.startswith("no-") and len(name) > 3:
                options[name[3:]] = False
            else:
                options[name] = True
        elif token.startswith("-"):
            for flag in token[1:]:
                options[flag] = True
        else:
            args.append(token)

    return Argv(source=text, tokens=tuple(tokens), args=tuple(args), options=options)
