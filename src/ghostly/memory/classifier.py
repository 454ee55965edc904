"""Decide which captured commands are worth remembering."""

from __future__ import annotations

from collections.abc import Iterable

from ghostly.memory.projects import project_name

ERROR_PATTERNS = ("error", "fail", "exception", "not found", "cannot")

IMPORTANT_TOOLS = (
    "npm",
    "yarn",
    "pnpm",
    "git",
    "docker",
    "kubectl",
    "python",
    "cargo",
    "go",
    "make",
    "gradle",
    "mvn",
)


def first_token(command: str) -> str:
    """First whitespace-delimited word of command, or '' when there is none."""
    parts = command.split(maxsplit=1)
    return parts[0] if parts else ""


def is_error(exit_code: int, stderr: str) -> bool:
    if exit_code != 0:
        return True
    lowered = stderr.lower()
    return any(pattern in lowered for pattern in ERROR_PATTERNS)


def is_important(command: str, tools: Iterable[str] = IMPORTANT_TOOLS) -> bool:
    """True when the first word is one of the tracked tools (whole-word match)."""
    token = first_token(command)
    return bool(token) and token in set(tools)


def keywords(command: str, cwd: str) -> str:
    words = [first_token(command)]
    name = project_name(cwd)
    if name:
        words.append(name)
    return ", ".join(words)


def summary(command: str, is_error: bool) -> str:
    outcome = "error" if is_error else "success"
    return f"{first_token(command)} - {outcome}"
