"""Default layers of the four built-in stacks.

Each factory returns the ``"default"`` middleware of one stack.  The
default middlewares ignore their inner parser (they are the lowest
layer) and forward the state they receive unchanged into every stack
they compose.

Grammar notation used in the constants below:
    ``::=``      production rule
    ``|``        ordered alternation
    ``*`` ``+``  zero-or-more / one-or-more
    ``~X``       negative lookahead of ``X``
    ``<name>``   the composed stack called ``name``
    ``TERM``     the state's terminator, when one is set
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

import pyparsing as pp

from chatparse.core.argv import Argv, parse_argv
from chatparse.core.commands import Command
from chatparse.core.result import CommandNotFound, Err, Ok, Result
from chatparse.core.session import Action, ExecuteEnv, Fragment
from chatparse.grammar.primitives import raw
from chatparse.grammar.state import ParserMiddleware, ParserState, StatedParser
from chatparse.messages.errors import SessionError

logger = logging.getLogger(__name__)

Compose = Callable[[str], StatedParser]
Resolve = Callable[[str], "Command | None"]

QUOTES = "'\""
WORD_CHARS = pp.alphanums + "_"

# ---------------------------------------------------------------------------
# Grammar reference
# ---------------------------------------------------------------------------

GRAMMAR_COMMAND_NAME = """
commandName ::= WORD_CHAR+          (WORD_CHAR is [A-Za-z0-9_], never '.')
"""

GRAMMAR_COMMAND = """
command ::= <commandName> ( '.' <commandName> )*
            -> resolve(join('.', segments))
"""

GRAMMAR_ARGV = """
argv   ::= WHITESPACE+ token*        -> parse_argv(concat(tokens))
         | EMPTY                     -> parse_argv('')

token  ::= ( ~TERM CHAR_NOT_QUOTE )+
         | "'" CHAR_NOT_SINGLE "'"
         | '"' CHAR_NOT_DOUBLE '"'
"""

GRAMMAR_ROOT = """
root ::= <command> <argv>            -> action(env)
"""

FULL_GRAMMAR = "\n".join(
    [GRAMMAR_ROOT.strip(), GRAMMAR_COMMAND.strip(), GRAMMAR_COMMAND_NAME.strip(), GRAMMAR_ARGV.strip()]
)


# ---------------------------------------------------------------------------
# commandName
# ---------------------------------------------------------------------------


def command_name_grammar(inner: object) -> StatedParser:
    """Default ``commandName`` layer: one or more ASCII word characters."""

    def stated(state: ParserState) -> pp.ParserElement:
        return raw(pp.Word(WORD_CHARS))

    return stated


# ---------------------------------------------------------------------------
# command
# ---------------------------------------------------------------------------


def command_grammar(compose: Compose, resolve: Resolve) -> ParserMiddleware:
    """Build the default ``command`` layer.

    Parameters
    ----------
    compose:
        Composes a stack by name; used to fetch ``commandName``.
    resolve:
        Looks up a dotted key in the command registry.

    Returns
    -------
    ParserMiddleware
        A middleware whose parser yields ``Ok(command)`` or
        ``Err(CommandNotFound(key))``.  An unknown command is not a
        structural failure.
    """

    def lookup(tokens: pp.ParseResults) -> Result[Command, CommandNotFound]:
        key = ".".join(tokens)
        command = resolve(key)
        if command is None:
            return Err(CommandNotFound(key))
        return Ok(command)

    def middleware(inner: object) -> StatedParser:
        def stated(state: ParserState) -> pp.ParserElement:
            segment = compose("commandName")(state)
            path = segment + pp.ZeroOrMore(pp.Suppress(".") + segment)
            return raw(path).add_parse_action(lookup)

        return stated

    return middleware


# ---------------------------------------------------------------------------
# argv
# ---------------------------------------------------------------------------


def argv_grammar(inner: object) -> StatedParser:
    """Default ``argv`` layer.

    After at least one whitespace character, collects bare runs (up to a
    quote, the end of input or the state's terminator) and quoted
    segments, and concatenates them with quotes kept.  Quoted segments
    hold exactly one character.  Without leading whitespace it matches
    nothing and yields the arguments of ``""``.
    """

    def stated(state: ParserState) -> pp.ParserElement:
        char = pp.CharsNotIn(QUOTES, exact=1)
        if state.terminator is not None:
            char = ~state.terminator + char
        bare = pp.Combine(pp.OneOrMore(char))
        single = pp.Combine("'" + pp.CharsNotIn("'", exact=1) + "'")
        double = pp.Combine('"' + pp.CharsNotIn('"', exact=1) + '"')

        spaced = pp.Suppress(pp.Regex(r"\s+")) + pp.Combine(pp.ZeroOrMore(bare | single | double))
        nothing = pp.Empty().set_parse_action(pp.replace_with(""))
        return raw(spaced | nothing).add_parse_action(lambda tokens: parse_argv(tokens[0]))

    return stated


# ---------------------------------------------------------------------------
# root
# ---------------------------------------------------------------------------


def bind_action(
    command: Result[Command, CommandNotFound],
    argv: Argv,
    report_not_found: Callable[[], bool],
) -> Action:
    """Turn a parsed command and its arguments into a deferred action.

    Parameters
    ----------
    command:
        Outcome of the ``command`` stack.
    argv:
        Outcome of the ``argv`` stack.
    report_not_found:
        Read when the action runs; when it returns ``True`` an unknown
        command raises ``SessionError("command-not-found")``.
    """

    async def action(env: ExecuteEnv) -> Fragment | None:
        if isinstance(command, Ok):
            bound = dataclasses.replace(
                argv, root=True, command=command.val, session=env.session
            )
            return await env.session.execute(bound)

        err = command.err
        if err.type == "NotFound" and report_not_found():
            raise SessionError("command-not-found", [err.key])
        logger.debug("Ignoring unknown command %r", err.key)
        return None

    return action


def root_grammar(compose: Compose, report_not_found: Callable[[], bool]) -> ParserMiddleware:
    """Build the default ``root`` layer.

    ``command`` and ``argv`` are composed with the very state the root
    parser receives.
    """

    def middleware(inner: object) -> StatedParser:
        def stated(state: ParserState) -> pp.ParserElement:
            sequence = compose("command")(state) + compose("argv")(state)
            return raw(sequence).add_parse_action(
                lambda tokens: bind_action(tokens[0], tokens[1], report_not_found)
            )

        return stated

    return middleware
