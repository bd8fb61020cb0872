"""Service configuration.

Configuration is a frozen dataclass.  It can be built directly, from a
mapping, or from YAML text/files::

    report_command_not_found: false
    prefixes: ["/", "!"]
    locale: zh-CN

The camelCase key ``doReportCommandNotFound`` is accepted as an alias of
``report_command_not_found``.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

_ALIASES: dict[str, str] = {
    "doReportCommandNotFound": "report_command_not_found",
    "doReportSyntaxError": "report_syntax_error",
    "prefix": "prefixes",
}


class ConfigError(ValueError):
    """Raised when configuration data is malformed."""


@dataclass(frozen=True)
class ParserConfig:
    """Options of a :class:`~chatparse.service.ParserService`.

    Parameters
    ----------
    report_command_not_found:
        Raise ``command-not-found`` when the input names an unknown
        command.  When ``False`` such input is silently ignored.
    report_syntax_error:
        Raise ``syntax-error`` when the input does not match the ``root``
        grammar at all.  When ``False`` such input is silently dropped.
    prefixes:
        Message prefixes that mark chat content as a command; the first
        matching prefix is stripped.
    locale:
        Default locale for rendered messages.
    """

    report_command_not_found: bool = True
    report_syntax_error: bool = False
    prefixes: tuple[str, ...] = ("/",)
    locale: str = "en-US"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ParserConfig":
        """Build a config from a mapping of option names to values.

        Raises
        ------
        ConfigError
            On unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown configuration key {key!r}")
            values[name] = value

        for name in ("report_command_not_found", "report_syntax_error"):
            if name in values and not isinstance(values[name], bool):
                raise ConfigError(f"{name!r} must be a boolean, got {values[name]!r}")

        if "prefixes" in values:
            prefixes = values["prefixes"]
            if isinstance(prefixes, str):
                prefixes = [prefixes]
            if not isinstance(prefixes, (list, tuple)) or not all(
                isinstance(p, str) for p in prefixes
            ):
                raise ConfigError(f"'prefixes' must be a list of strings, got {prefixes!r}")
            values["prefixes"] = tuple(prefixes)

        if "locale" in values and not isinstance(values["locale"], str):
            raise ConfigError(f"'locale' must be a string, got {values['locale']!r}")

        return cls(**values)

    @classmethod
    def from_yaml(cls, text: str) -> "ParserConfig":
        """Build a config from YAML text.  An empty document gives the defaults."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML configuration: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a YAML mapping")
        return cls.from_mapping(data)


def load_config(path: str | Path) -> ParserConfig:
    """Read a YAML configuration file."""
    return ParserConfig.from_yaml(Path(path).read_text(encoding="utf-8"))
