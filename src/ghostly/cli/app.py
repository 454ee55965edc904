"""CLI application — Click-based commands for capturing and recalling terminal memory."""

from __future__ import annotations

import os

import click
from rich.text import Text

from ghostly import __version__
from ghostly.cli.formatters import (
    get_console,
    print_capture,
    print_error,
    print_search_results,
    print_stats,
)
from ghostly.config import GhostlyConfig, load_config
from ghostly.git import current_git_branch
from ghostly.memory.models import Document, MalformedDocumentError
from ghostly.memory.store import MemoryStore

_MENU = (
    "Capture last command",
    "Search memories",
    "View stats",
    "Exit",
)


@click.group()
@click.version_option(__version__, prog_name="ghostly")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors")
@click.pass_context
def cli(ctx: click.Context, no_color: bool) -> None:
    """Terminal memory CLI - remember your commands."""
    ctx.ensure_object(dict)
    config: GhostlyConfig = ctx.obj.get("config") or load_config()
    ctx.obj["config"] = config
    ctx.obj["store"] = MemoryStore(
        config.db_file,
        important_tools=config.important_tools,
        fix_limit=config.fix_limit,
    )
    ctx.obj["console"] = get_console(no_color)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load(ctx: click.Context) -> Document:
    """Load the document or exit 1 with a readable message."""
    try:
        return ctx.obj["store"].load()
    except (MalformedDocumentError, OSError) as e:
        print_error(ctx.obj["console"], f"Cannot read memory: {e}")
        ctx.exit(1)


def _save(ctx: click.Context, doc: Document) -> None:
    try:
        ctx.obj["store"].save(doc)
    except OSError as e:
        print_error(ctx.obj["console"], f"Cannot write memory: {e}")
        ctx.exit(1)


def _parse_exit_code(raw: str | None) -> int:
    try:
        return int(raw) if raw else 0
    except ValueError:
        return 0


def _capture(ctx: click.Context, command: str, exit_code: int, stderr: str) -> None:
    store: MemoryStore = ctx.obj["store"]
    cwd = os.getcwd()
    doc = _load(ctx)
    doc, result = store.record_capture(
        doc,
        cwd=cwd,
        command=command,
        exit_code=exit_code,
        stderr=stderr,
        git_branch=current_git_branch(cwd),
    )
    _save(ctx, doc)
    print_capture(ctx.obj["console"], command, result)


def _search(ctx: click.Context, query: str) -> None:
    doc = _load(ctx)
    print_search_results(ctx.obj["console"], ctx.obj["store"].search(doc, query))


def _stats(ctx: click.Context) -> None:
    doc = _load(ctx)
    print_stats(ctx.obj["console"], MemoryStore.stats(doc))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@cli.command("capture", context_settings={"ignore_unknown_options": True})
@click.argument("cmd", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("--exit-code", "exit_code", default=None, help="Exit code of the command")
@click.option("--stderr", default="", help="Captured stderr of the command")
@click.pass_context
def capture_cmd(
    ctx: click.Context, cmd: tuple[str, ...], exit_code: str | None, stderr: str
) -> None:
    """Capture a terminal command."""
    _capture(ctx, " ".join(cmd), _parse_exit_code(exit_code), stderr)


@cli.command("search")
@click.argument("query")
@click.pass_context
def search_cmd(ctx: click.Context, query: str) -> None:
    """Search past memories."""
    _search(ctx, query)


@cli.command("stats")
@click.pass_context
def stats_cmd(ctx: click.Context) -> None:
    """Show memory statistics."""
    _stats(ctx)


@cli.command("init")
@click.pass_context
def init_cmd(ctx: click.Context) -> None:
    """Initialize ghostly storage."""
    store: MemoryStore = ctx.obj["store"]
    config: GhostlyConfig = ctx.obj["config"]
    if not store.exists():
        _save(ctx, Document())
    else:
        _load(ctx)
    line = Text("✓ ", style="green")
    line.append(f"Ghostly initialized at {config.data_dir}")
    ctx.obj["console"].print(line)


@cli.command("interactive")
@click.pass_context
def interactive_cmd(ctx: click.Context) -> None:
    """Interactive mode."""
    console = ctx.obj["console"]
    console.print("[bold]What would you like to do?[/bold]")
    for i, label in enumerate(_MENU, start=1):
        console.print(f"  {i}. {label}")
    choice = click.prompt("Choice", type=click.IntRange(1, len(_MENU)), default=1)
    action = _MENU[choice - 1]

    if action == "Capture last command":
        command = click.prompt("Command")
        _capture(ctx, command, 0, "")
    elif action == "Search memories":
        query = click.prompt("Search")
        _search(ctx, query)
    elif action == "View stats":
        _stats(ctx)


cli.add_command(interactive_cmd, name="i")
