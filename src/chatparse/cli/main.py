"""CLI entry point for chat-parser.

Invoked as::

    chat-parser [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m chatparse.cli.main

Commands
--------
parse       Show how a command line is split into command and arguments
run         Execute a command line against the built-in demo commands
commands    List the commands available to run
stacks      List the parser stacks and their layers
grammar     Print the reference grammar
version     Show version information
"""
from __future__ import annotations

import asyncio
import dataclasses
import json
import sys
from typing import Any

import click
import pyparsing as pp
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from chatparse import (
    FULL_GRAMMAR,
    CommandRegistry,
    ConfigError,
    LocalSession,
    Ok,
    ParserConfig,
    ParserService,
    ParserState,
    SessionError,
    load_config,
    raw,
    run,
)

console = Console()
err_console = Console(stderr=True)


def _demo_registry() -> CommandRegistry:
    """Return a registry holding the demo commands available to ``run``."""
    registry = CommandRegistry()

    @registry.command("echo", description="Repeat the positional arguments")
    async def echo(argv: Any) -> str:
        return " ".join(argv.args)

    @registry.command("echo.options", description="Show the parsed options")
    async def echo_options(argv: Any) -> str:
        return json.dumps(argv.options, sort_keys=True)

    return registry


def _service(ctx: click.Context, **overrides: Any) -> ParserService:
    config: ParserConfig = ctx.obj["config"]
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return ParserService(_demo_registry(), config)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="chat-parser")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Layered chat-command parser: inspect, run and extend command lines."""
    ctx.ensure_object(dict)
    config = ParserConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as exc:
            err_console.print(f"[red]Config error[/red] in {config_path}: {exc}")
            sys.exit(1)
    ctx.obj["config"] = config


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from chatparse import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]chat-parser[/bold]", f"v{__version__}")
    table.add_row("pyparsing", pp.__version__)
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("text")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    default="table",
    help="Output format",
)
@click.pass_context
def parse_command(ctx: click.Context, text: str, output_format: str) -> None:
    """Split TEXT into its command path and arguments without running it."""
    service = _service(ctx)
    state = ParserState()
    sequence = raw(
        pp.Group(service.compose_stack("command")(state) + service.compose_stack("argv")(state))
    )
    outcome = run(sequence, text)
    if not isinstance(outcome, Ok):
        err_console.print(Text.assemble(("Syntax error: ", "red"), str(outcome.err)))
        sys.exit(1)

    command, argv = outcome.val
    resolved = isinstance(command, Ok)
    summary = {
        "command": command.val.name if resolved else command.err.key,
        "resolved": resolved,
        "args": list(argv.args),
        "options": argv.options,
        "source": argv.source,
    }

    if output_format == "json":
        console.print(Syntax(json.dumps(summary, indent=2, ensure_ascii=False), "json"))
        return
    if output_format == "yaml":
        text_out = yaml.dump(summary, default_flow_style=False, allow_unicode=True)
        console.print(Syntax(text_out, "yaml"))
        return

    table = Table(title="Parsed command line", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    status = "[green]yes[/green]" if resolved else "[yellow]no[/yellow]"
    table.add_row("Command", Text(summary["command"]))
    table.add_row("Resolved", status)
    table.add_row("Arguments", Text(" | ".join(argv.args) or "-"))
    table.add_row("Options", Text(json.dumps(argv.options, sort_keys=True)))
    table.add_row("Source", Text(repr(argv.source)))
    console.print(table)


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@cli.command(name="run")
@click.argument("text")
@click.option("--locale", default=None, help="Locale for error messages")
@click.option(
    "--report/--no-report",
    default=None,
    help="Override whether unknown commands are reported",
)
@click.pass_context
def run_command(ctx: click.Context, text: str, locale: str | None, report: bool | None) -> None:
    """Execute TEXT against the built-in demo commands.

    Available commands: echo, echo.options, parser.execute.
    """
    overrides = {} if report is None else {"report_command_not_found": report}
    service = _service(ctx, **overrides)
    session = LocalSession(locale or service.config.locale)

    try:
        response = asyncio.run(service.execute(session, text))
    except SessionError as exc:
        message = service.render_error(exc, session.locale)
        err_console.print(Text.assemble(("Error: ", "red"), message))
        sys.exit(1)

    if response is None:
        console.print("[dim](no response)[/dim]")
    else:
        console.print(Text(response))


# ---------------------------------------------------------------------------
# commands command
# ---------------------------------------------------------------------------


@cli.command(name="commands")
@click.pass_context
def commands_command(ctx: click.Context) -> None:
    """List the commands available to ``run``."""
    registry = _service(ctx).registry

    table = Table(title="Commands")
    table.add_column("Command", style="bold")
    table.add_column("Description")
    for key in registry.list_commands():
        table.add_row(key, registry.get(key).description)
    console.print(table)


# ---------------------------------------------------------------------------
# stacks command
# ---------------------------------------------------------------------------


@cli.command(name="stacks")
@click.pass_context
def stacks_command(ctx: click.Context) -> None:
    """List the parser stacks and their layers."""
    service = _service(ctx)

    table = Table(title="Parser stacks")
    table.add_column("Stack", style="bold")
    table.add_column("Layer")
    table.add_column("Precedence", justify="right")
    for stack in service.stacks:
        for layer in stack.snapshot():
            table.add_row(stack.name, layer.name, str(layer.precedence))
    console.print(table)


# ---------------------------------------------------------------------------
# grammar command
# ---------------------------------------------------------------------------


@cli.command(name="grammar")
def grammar_command() -> None:
    """Print the reference grammar of the built-in stacks."""
    console.print(Syntax(FULL_GRAMMAR, "text"))


if __name__ == "__main__":
    cli()
