"""Adapters over the pyparsing combinator substrate.

Chat grammars are whitespace-sensitive, so every element built here has
pyparsing's implicit whitespace skipping turned off (:func:`raw`), and
inputs are parsed with tabs preserved.  :func:`run` is the
success/failure discriminator: it turns a pyparsing match into ``Ok``
and a ``ParseBaseException`` into ``Err``.
"""
from __future__ import annotations

from typing import Any

import pyparsing as pp

from chatparse.core.result import Err, Ok, Result


def raw(element: pp.ParserElement) -> pp.ParserElement:
    """Disable whitespace skipping on ``element`` and everything inside it."""
    return element.leave_whitespace(recursive=True)


def run(
    element: pp.ParserElement, text: str, *, parse_all: bool = False
) -> Result[Any, pp.ParseBaseException]:
    """Match ``element`` against the start of ``text``.

    Parameters
    ----------
    element:
        A parser that yields exactly one value.
    text:
        Complete input; trailing text is ignored unless ``parse_all``.
    parse_all:
        Require the whole input to be consumed.

    Returns
    -------
    Result
        ``Ok(value)`` on a match, ``Err(exception)`` otherwise.
    """
    try:
        results = element.parse_with_tabs().parse_string(text, parse_all=parse_all)
    except pp.ParseBaseException as exc:
        return Err(exc)
    return Ok(results[0] if results else None)
