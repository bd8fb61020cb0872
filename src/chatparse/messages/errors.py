"""User-facing errors raised during execution."""
from __future__ import annotations

from collections.abc import Sequence

from chatparse.messages.catalog import MessageCatalog

_DEFAULT_CATALOG = MessageCatalog()


class SessionError(Exception):
    """An error meant to be shown to the person who sent the input.

    Carries a message key and positional parameters instead of final
    text, so the host can render it in the session's locale.

    Parameters
    ----------
    key:
        Message key, e.g. ``"command-not-found"``.
    params:
        Values substituted into the message template.
    """

    def __init__(self, key: str, params: Sequence[object] = ()) -> None:
        self.key = key
        self.params = tuple(params)
        super().__init__(_DEFAULT_CATALOG.render(key, self.params))

    def render(self, catalog: MessageCatalog, locale: str | None = None) -> str:
        """Return the message rendered through ``catalog``."""
        return catalog.render(self.key, self.params, locale)

    def __repr__(self) -> str:
        return f"SessionError({self.key!r}, {list(self.params)!r})"
