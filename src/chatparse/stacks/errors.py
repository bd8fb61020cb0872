"""Errors raised by the stack engine."""
from __future__ import annotations


class StackError(Exception):
    """Base class for stack engine errors."""


class UnknownStackError(StackError, KeyError):
    """Raised when a stack name is not in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.stack_name = name
        self.available = available
        super().__init__(
            f"Stack {name!r} does not exist. Available stacks: {', '.join(available)}."
        )

    def __str__(self) -> str:
        return str(self.args[0])


class EmptyStackError(StackError, RuntimeError):
    """Raised when the "no inner parser" sentinel is used as a parser.

    This happens when a stack has no layers left, or when the
    lowest-precedence middleware delegates to its inner parser.
    """

    def __init__(self) -> None:
        super().__init__(
            "No inner parser: the lowest layer of a stack must supply a grammar "
            "instead of delegating, and the 'default' layer must not be removed."
        )
