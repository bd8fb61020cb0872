"""Message catalog with per-locale templates.

Templates use positional ``str.format`` placeholders (``{0}``, ``{1}``).
Lookup tries the requested locale, then the catalog's default locale;
a key missing from both renders as the key itself.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

BUILTIN_MESSAGES: dict[str, dict[str, str]] = {
    "en-US": {
        "command-not-found": "Command not found: {0}",
        "syntax-error": "Syntax error: {0}",
    },
    "zh-CN": {
        "command-not-found": "未找到命令：{0}",
        "syntax-error": "语法错误：{0}",
    },
}


class MessageCatalog:
    """Mapping of locale to message templates.

    Parameters
    ----------
    default_locale:
        Locale used when no locale is requested or the requested one
        does not define a key.
    """

    def __init__(self, default_locale: str = "en-US") -> None:
        self.default_locale = default_locale
        self._messages: dict[str, dict[str, str]] = {}
        for locale, messages in BUILTIN_MESSAGES.items():
            self.define(locale, messages)

    def define(self, locale: str, messages: Mapping[str, str]) -> None:
        """Add or override templates for ``locale``."""
        self._messages.setdefault(locale, {}).update(messages)
        logger.debug("Defined %d message(s) for locale %r", len(messages), locale)

    def template(self, key: str, locale: str | None = None) -> str | None:
        """Return the raw template for ``key``, or ``None`` if undefined."""
        for candidate in (locale, self.default_locale):
            if candidate is None:
                continue
            template = self._messages.get(candidate, {}).get(key)
            if template is not None:
                return template
        return None

    def render(
        self,
        key: str,
        params: Sequence[object] = (),
        locale: str | None = None,
    ) -> str:
        """Format the template for ``key`` with ``params``.

        Parameters
        ----------
        key:
            Message key, e.g. ``"command-not-found"``.
        params:
            Positional values substituted into the template.
        locale:
            Preferred locale; falls back to ``default_locale``.

        Returns
        -------
        str
            The rendered message, or ``key`` when no template exists.
        """
        template = self.template(key, locale)
        if template is None:
            logger.debug("No template for %r in locale %r", key, locale)
            return key
        return template.format(*params)

    def locales(self) -> list[str]:
        """Return every locale with at least one template, sorted."""
        return sorted(self._messages)

    def __repr__(self) -> str:
        return f"MessageCatalog(default_locale={self.default_locale!r}, locales={self.locales()})"
