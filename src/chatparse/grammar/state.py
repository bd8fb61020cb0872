"""Parser state and the stated-parser contract.

Every grammar rule is a function ``ParserState -> ParserElement``.  The
state is an immutable value passed explicitly down through nested stack
compositions; a middleware that wants different behaviour for its
sub-parses builds a new state with :meth:`ParserState.replace` and hands
that to its inner parser.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

import pyparsing as pp

if TYPE_CHECKING:
    from chatparse.stacks.stack import NoInner


@dataclass(frozen=True, slots=True)
class ParserState:
    """Ambient settings visible to every nested parse of one invocation.

    Parameters
    ----------
    terminator:
        Optional extra stop condition for bare-token scanning in the
        ``argv`` grammar.  ``None`` means "no extra stop".
    """

    terminator: pp.ParserElement | None = None

    def replace(self, **changes: Any) -> "ParserState":
        """Return a copy of this state with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


StatedParser = Callable[[ParserState], pp.ParserElement]
ParserMiddleware = Callable[[Union[StatedParser, "NoInner"]], StatedParser]
