"""Shared test fixtures for chat-parser.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from chatparse import CommandRegistry, ParserService


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "chatparse"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> CommandRegistry:
    """Registry with ``echo`` and ``admin.ban``."""
    registry = CommandRegistry()

    @registry.command("echo", description="Repeat the arguments")
    async def echo(argv):
        return " ".join(argv.args)

    @registry.command("admin.ban", description="Ban a user")
    async def ban(argv):
        return f"banned {argv.args[0]}"

    return registry


@pytest.fixture()
def service(registry: CommandRegistry) -> ParserService:
    return ParserService(registry)


@pytest.fixture()
def session() -> AsyncMock:
    """Session double whose ``execute`` records the bound argv."""
    session = AsyncMock()
    session.execute = AsyncMock(return_value="ok")
    return session
