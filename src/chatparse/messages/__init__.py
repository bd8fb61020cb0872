"""Localized user-facing messages.

Exports the ``MessageCatalog`` and the ``SessionError`` raised from
actions and the dispatcher.
"""
from __future__ import annotations

from chatparse.messages.catalog import BUILTIN_MESSAGES, MessageCatalog
from chatparse.messages.errors import SessionError

__all__ = [
    "BUILTIN_MESSAGES",
    "MessageCatalog",
    "SessionError",
]
