"""Parser service.

Exports the ``ParserService`` dispatch entry point and its
configuration.
"""
from __future__ import annotations

from chatparse.service.config import ConfigError, ParserConfig, load_config
from chatparse.service.service import STACK_NAMES, ParserService

__all__ = [
    "ConfigError",
    "ParserConfig",
    "load_config",
    "STACK_NAMES",
    "ParserService",
]
