"""CLI formatters — Rich console output for captures, searches and stats."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from ghostly.memory.models import Episode
    from ghostly.memory.store import CaptureResult

_PREVIEW_CHARS = 60
_COMMAND_PREVIEW_CHARS = 40
_RULE_WIDTH = 30


def get_console(no_color: bool = False) -> Console:
    """Get a Rich Console, optionally with color disabled."""
    return Console(no_color=no_color, highlight=False)


def print_capture(console: Console, command: str, result: CaptureResult) -> None:
    if result.episode_stored:
        line = Text("✓ ", style="green")
        line.append("Episode saved: ")
        line.append(command[:_COMMAND_PREVIEW_CHARS], style="bright_black")
        console.print(line)

    if result.event.is_error and result.past_fixes:
        console.print(Text("\n💡 Past fixes:", style="yellow"))
        for episode in result.past_fixes:
            line = Text("  → ", style="cyan")
            line.append(episode.fix or "")
            console.print(line)


def print_search_results(console: Console, results: list[Episode]) -> None:
    if not results:
        console.print(Text("No memories found.", style="bright_black"))
        return

    console.print(Text(f"\nFound {len(results)} memories:\n", style="cyan"))
    for i, episode in enumerate(results, start=1):
        line = Text(f"{i}. ", style="yellow")
        line.append(episode.summary, style="white")
        console.print(line)
        if episode.problem:
            console.print(Text("   Problem: ", style="red").append(episode.problem[:_PREVIEW_CHARS]))
        if episode.fix:
            console.print(Text("   Fix: ", style="green").append(episode.fix[:_PREVIEW_CHARS]))
        console.print()


def print_stats(console: Console, stats: dict[str, int]) -> None:
    rule = Text("─" * _RULE_WIDTH, style="bright_black")
    console.print(Text("\n📊 Ghostly Statistics", style="cyan"))
    console.print(rule)
    console.print(f"Events:   {stats['events']}")
    console.print(f"Episodes: {stats['episodes']}")
    console.print(f"Projects: {stats['projects']}")
    console.print(rule)
    console.print()


def print_error(console: Console, message: str) -> None:
    console.print(Text(f"✗ {message}", style="red"))
