#!/usr/bin/env python3
"""Example: Quickstart — chat-parser

Minimal working example: register commands, execute chat lines,
and extend the parser with a temporary layer.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install chat-parser
"""
from __future__ import annotations

import asyncio

import chatparse

registry = chatparse.CommandRegistry()


@registry.command("greet", description="Say hello")
async def greet(argv: chatparse.Argv) -> str:
    return f"Hello, {' '.join(argv.args) or 'stranger'}!"


@registry.command("admin.ban", description="Ban a user")
async def ban(argv: chatparse.Argv) -> str:
    reason = argv.options.get("reason", "no reason given")
    return f"Banned {argv.args[0]} ({reason})"


def lowercase_names(inner):
    def stated(state):
        return inner(state).add_parse_action(lambda tokens: tokens[0].lower())

    return stated


async def main() -> None:
    print(f"chat-parser version: {chatparse.__version__}")
    service = chatparse.ParserService(registry)
    session = chatparse.LocalSession()

    # Step 1: Execute command lines
    print(await service.execute(session, "greet world"))
    print(await service.execute(session, "admin.ban bob --reason='spamming links'"))

    # Step 2: Unknown commands raise a SessionError carrying a message key
    try:
        await service.execute(session, "nope")
    except chatparse.SessionError as exc:
        print(f"en-US: {service.render_error(exc)}")
        print(f"zh-CN: {service.render_error(exc, 'zh-CN')}")

    # Step 3: Chat messages go through the prefix middleware
    async def chat() -> str:
        return "(plain chat message)"

    print(await service.handle_message(session, "/greet everyone", chat))
    print(await service.handle_message(session, "greet everyone", chat))

    # Step 4: Case-insensitive command names while the layer is registered
    layer = chatparse.ParserLayer(name="lowercase", middleware=lowercase_names, precedence=10)
    with service.layer("commandName", layer):
        print(await service.execute(session, "GREET loudly"))


if __name__ == "__main__":
    asyncio.run(main())
