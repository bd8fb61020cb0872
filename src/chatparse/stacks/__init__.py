"""Layered grammar stacks.

A stack is one named, independently extensible grammar.  Each stack is
an ordered list of layers; composing a stack folds the layers'
middlewares, lowest precedence first, into a single stated parser.

Example
-------
Replace the argument grammar for the lifetime of a handle:

.. code-block:: python

    from chatparse.stacks import ParserLayer

    handle = service.layer("argv", ParserLayer(
        name="raw-args",
        precedence=10,
        middleware=lambda inner: lambda state: inner(state),
    ))
    ...
    handle.dispose()
"""
from __future__ import annotations

from chatparse.stacks.errors import EmptyStackError, StackError, UnknownStackError
from chatparse.stacks.stack import (
    NO_INNER,
    LayerHandle,
    NoInner,
    ParserLayer,
    ParserStack,
    StackRegistry,
    create_stack,
)

__all__ = [
    "EmptyStackError",
    "StackError",
    "UnknownStackError",
    "NO_INNER",
    "LayerHandle",
    "NoInner",
    "ParserLayer",
    "ParserStack",
    "StackRegistry",
    "create_stack",
]
