"""Two-variant result type used for value-level outcomes.

A ``Result`` is exactly one of ``Ok(val)`` or ``Err(err)``.  The
``command`` grammar uses it so that an unknown command is ordinary data
rather than a parse failure; the service uses it to report whether the
combinator substrate matched.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``val``."""

    val: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``err``."""

    err: E

    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True, slots=True)
class CommandNotFound:
    """No command is registered under the dotted ``key``.

    Parameters
    ----------
    key:
        The dotted command path reconstructed from the input.
    """

    key: str
    type: Literal["NotFound"] = "NotFound"
