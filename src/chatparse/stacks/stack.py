"""Layer and stack model.

Each :class:`ParserStack` owns an ordered list of :class:`ParserLayer`
entries.  :meth:`ParserStack.compose` snapshots the list, sorts it by
precedence (stable, ascending) and folds the middlewares from
:data:`NO_INNER` upward; the result is the effective stated parser *at
the moment of the call*.  Nothing is cached, so registering or disposing
a layer is visible to the very next composition.

Layer mutation and snapshotting are serialized per stack with a lock;
a composition always sees a consistent list.
"""
from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from operator import attrgetter
from types import TracebackType
from typing import Any, Generic, TypeVar, final

from chatparse.stacks.errors import EmptyStackError, UnknownStackError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LAYER = "default"


@final
class NoInner:
    """Singleton sentinel fed to the lowest-precedence middleware.

    It stands for "there is no inner parser".  It is falsy, so a
    middleware can test ``if inner:``; calling it raises
    :class:`EmptyStackError` because it is not a stated parser.
    """

    __slots__ = ()

    @functools.cache
    def __new__(cls) -> "NoInner":
        return super().__new__(cls)

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_INNER"

    def __call__(self, state: Any) -> Any:
        raise EmptyStackError()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        raise TypeError("type 'NoInner' is not an acceptable base type")


NO_INNER = NoInner()

StatedParser = Callable[[Any], Any]
Middleware = Callable[[Any], StatedParser]


@dataclass(frozen=True)
class ParserLayer(Generic[T]):
    """One named, precedence-ordered contribution to a stack.

    Parameters
    ----------
    name:
        Identity of the layer within its stack.  Disposal removes every
        layer sharing this name.
    middleware:
        Takes the composition of all lower layers (or :data:`NO_INNER`)
        and returns the replacement stated parser.
    precedence:
        Ordering key; lower values are applied first and end up
        innermost.
    """

    name: str
    middleware: Middleware
    precedence: float = 0


class ParserStack(Generic[T]):
    """Ordered, lock-protected list of layers for one grammar.

    Parameters
    ----------
    name:
        Stack name, used in log messages.
    layers:
        Initial layers, in registration order.
    """

    def __init__(self, name: str, layers: Iterable[ParserLayer[T]] = ()) -> None:
        self.name = name
        self._layers: list[ParserLayer[T]] = list(layers)
        self._lock = threading.Lock()

    def add(self, layer: ParserLayer[T]) -> None:
        """Append ``layer``."""
        with self._lock:
            self._layers.append(layer)

    def remove(self, name: str) -> int:
        """Remove every layer called ``name``; return how many were removed."""
        with self._lock:
            kept = [layer for layer in self._layers if layer.name != name]
            removed = len(self._layers) - len(kept)
            self._layers = kept
        return removed

    def snapshot(self) -> tuple[ParserLayer[T], ...]:
        """Return the current layers in registration order."""
        with self._lock:
            return tuple(self._layers)

    def compose(self) -> StatedParser | NoInner:
        """Fold the current layers into one stated parser.

        Returns :data:`NO_INNER` when the stack has no layers.
        """
        ordered = sorted(self.snapshot(), key=attrgetter("precedence"))
        return functools.reduce(
            lambda inner, layer: layer.middleware(inner), ordered, NO_INNER
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._layers)

    def __repr__(self) -> str:
        names = [layer.name for layer in self.snapshot()]
        return f"ParserStack(name={self.name!r}, layers={names})"


def create_stack(name: str, default: Middleware) -> ParserStack[Any]:
    """Return a new stack holding only ``default`` as the ``"default"`` layer."""
    return ParserStack(name, [ParserLayer(name=DEFAULT_LAYER, middleware=default, precedence=0)])


class LayerHandle:
    """Disposer returned by :meth:`StackRegistry.layer`.

    ``dispose()`` removes every layer in the stack that shares the
    registered layer's name.  Calling it more than once is a no-op.
    Also usable as a context manager that disposes on exit.
    """

    def __init__(self, stack: ParserStack[Any], name: str) -> None:
        self._stack = stack
        self._name = name
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        removed = self._stack.remove(self._name)
        logger.debug(
            "Disposed layer %r from stack %r (%d removed)",
            self._name,
            self._stack.name,
            removed,
        )

    def __enter__(self) -> "LayerHandle":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return (
            f"LayerHandle(stack={self._stack.name!r}, layer={self._name!r}, "
            f"disposed={self._disposed})"
        )


class StackRegistry:
    """Fixed catalogue of named stacks.

    Parameters
    ----------
    defaults:
        Stack name to default middleware.  One stack is created per
        entry, seeded with its ``"default"`` layer.
    """

    def __init__(self, defaults: Mapping[str, Middleware]) -> None:
        self._stacks: dict[str, ParserStack[Any]] = {
            name: create_stack(name, middleware) for name, middleware in defaults.items()
        }

    def get(self, name: str) -> ParserStack[Any]:
        """Return the stack called ``name``.

        Raises
        ------
        UnknownStackError
            If no such stack exists.
        """
        try:
            return self._stacks[name]
        except KeyError:
            raise UnknownStackError(name, self.names()) from None

    def compose(self, name: str) -> StatedParser | NoInner:
        """Compose the stack called ``name`` from its current layers."""
        return self.get(name).compose()

    def layer(self, name: str, layer: ParserLayer[Any]) -> LayerHandle:
        """Append ``layer`` to stack ``name`` and return its disposer."""
        stack = self.get(name)
        stack.add(layer)
        logger.debug(
            "Registered layer %r on stack %r at precedence %r",
            layer.name,
            name,
            layer.precedence,
        )
        return LayerHandle(stack, layer.name)

    def names(self) -> list[str]:
        """Return the stack names in definition order."""
        return list(self._stacks)

    def __contains__(self, name: object) -> bool:
        return name in self._stacks

    def __iter__(self) -> Iterator[ParserStack[Any]]:
        return iter(self._stacks.values())

    def __repr__(self) -> str:
        return f"StackRegistry(stacks={self.names()})"
