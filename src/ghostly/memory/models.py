"""Memory record types + dict conversion (no I/O).

The persisted document uses snake_case field names:
- Serialize: typed records -> plain dicts (lists on disk)
- Parse: plain dicts -> typed records, validated, projects keyed by hash
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class MalformedDocumentError(ValueError):
    """The persisted memory document cannot be parsed into known records."""


# ── Records ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Event:
    """One raw captured command execution."""

    id: str
    timestamp: str
    cwd: str
    command: str
    project_hash: str
    is_error: bool
    exit_code: int = 0
    stderr: str = ""
    git_branch: str | None = None


@dataclass(frozen=True)
class Project:
    """A tracked working directory, identified by a short hash of its path."""

    hash: str
    name: str
    root: str
    first_seen: str
    last_seen: str


@dataclass(frozen=True)
class Episode:
    """A significant event kept as a searchable memory."""

    id: str
    project_hash: str
    timestamp: str
    summary: str
    fix: str | None
    keywords: str
    problem: str | None = None


@dataclass
class Document:
    """Everything ghostly remembers: events, episodes and projects."""

    events: list[Event] = field(default_factory=list)
    episodes: list[Episode] = field(default_factory=list)
    projects: dict[str, Project] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "events": [_event_to_dict(e) for e in self.events],
            "episodes": [_episode_to_dict(e) for e in self.episodes],
            "projects": [_project_to_dict(p) for p in self.projects.values()],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Document:
        """Build a validated document from decoded JSON.

        Missing top-level collections are upgraded to empty lists; anything
        else that does not match the record schema raises MalformedDocumentError.
        """
        if not isinstance(data, dict):
            raise MalformedDocumentError(
                f"expected a JSON object at top level, got {type(data).__name__}"
            )

        projects: dict[str, Project] = {}
        for raw in _records(data, "projects"):
            project = _project_from_dict(raw)
            if project.hash in projects:
                raise MalformedDocumentError(f"duplicate project hash {project.hash!r}")
            projects[project.hash] = project

        events = [_event_from_dict(raw) for raw in _records(data, "events")]
        episodes = [_episode_from_dict(raw) for raw in _records(data, "episodes")]

        for kind, items in (("event", events), ("episode", episodes)):
            for item in items:
                if item.project_hash not in projects:
                    raise MalformedDocumentError(
                        f"{kind} {item.id!r} refers to unknown project {item.project_hash!r}"
                    )

        return cls(events=events, episodes=episodes, projects=projects)


# ── Serializing (record -> dict) ──────────────────────────────


def _event_to_dict(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "timestamp": event.timestamp,
        "cwd": event.cwd,
        "git_branch": event.git_branch,
        "command": event.command,
        "exit_code": event.exit_code,
        "stderr": event.stderr,
        "project_hash": event.project_hash,
        "is_error": event.is_error,
    }


def _project_to_dict(project: Project) -> dict[str, Any]:
    return {
        "hash": project.hash,
        "name": project.name,
        "root": project.root,
        "first_seen": project.first_seen,
        "last_seen": project.last_seen,
    }


def _episode_to_dict(episode: Episode) -> dict[str, Any]:
    return {
        "id": episode.id,
        "project_hash": episode.project_hash,
        "timestamp": episode.timestamp,
        "summary": episode.summary,
        "problem": episode.problem,
        "fix": episode.fix,
        "keywords": episode.keywords,
    }


# ── Parsing (dict -> record) ──────────────────────────────────


def _records(data: dict, key: str) -> list[dict]:
    raw = data.get(key, [])
    if not isinstance(raw, list):
        raise MalformedDocumentError(f"{key!r} must be a list, got {type(raw).__name__}")
    for item in raw:
        if not isinstance(item, dict):
            raise MalformedDocumentError(f"{key!r} entries must be objects")
    return raw


def _require(raw: dict, key: str, kind: type) -> Any:
    if key not in raw:
        raise MalformedDocumentError(f"missing field {key!r} in {raw.get('id', raw)!r}")
    return _check(raw, key, kind)


def _optional(raw: dict, key: str, kind: type, default: Any = None) -> Any:
    if raw.get(key) is None:
        return default
    return _check(raw, key, kind)


def _check(raw: dict, key: str, kind: type) -> Any:
    value = raw[key]
    # bool is an int subclass; exit codes must be real integers
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise MalformedDocumentError(
            f"field {key!r} has type {type(value).__name__}, expected {kind.__name__}"
        )
    return value


def _event_from_dict(raw: dict) -> Event:
    return Event(
        id=_require(raw, "id", str),
        timestamp=_require(raw, "timestamp", str),
        cwd=_require(raw, "cwd", str),
        command=_require(raw, "command", str),
        project_hash=_require(raw, "project_hash", str),
        is_error=_require(raw, "is_error", bool),
        exit_code=_optional(raw, "exit_code", int, 0),
        stderr=_optional(raw, "stderr", str, ""),
        git_branch=_optional(raw, "git_branch", str),
    )


def _project_from_dict(raw: dict) -> Project:
    return Project(
        hash=_require(raw, "hash", str),
        name=_require(raw, "name", str),
        root=_require(raw, "root", str),
        first_seen=_require(raw, "first_seen", str),
        last_seen=_require(raw, "last_seen", str),
    )


def _episode_from_dict(raw: dict) -> Episode:
    return Episode(
        id=_require(raw, "id", str),
        project_hash=_require(raw, "project_hash", str),
        timestamp=_require(raw, "timestamp", str),
        summary=_require(raw, "summary", str),
        fix=_optional(raw, "fix", str),
        keywords=_optional(raw, "keywords", str, ""),
        problem=_optional(raw, "problem", str),
    )
