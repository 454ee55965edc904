"""Project identity: a short stable hash per working directory."""

from __future__ import annotations

import hashlib
from dataclasses import replace

from ghostly.memory.models import Project

HASH_LENGTH = 8


def hash_of(cwd: str) -> str:
    """8 hex chars of the MD5 of the cwd string, exactly as given (no normalization).

    Undecodable path bytes (lone surrogates from os.getcwd) hash as the raw bytes.
    """
    return hashlib.md5(cwd.encode("utf-8", "surrogateescape")).hexdigest()[:HASH_LENGTH]


def project_name(cwd: str) -> str:
    """Last '/'-separated segment of cwd; '' for '' or a trailing slash."""
    return cwd.rsplit("/", 1)[-1]


def upsert(
    projects: dict[str, Project], cwd: str, timestamp: str
) -> tuple[Project, dict[str, Project]]:
    """Create the project for cwd, or bump its last_seen.

    Returns the effective project and a new mapping; the input mapping is not
    modified and existing insertion order is kept.
    """
    key = hash_of(cwd)
    existing = projects.get(key)
    if existing is None:
        project = Project(
            hash=key,
            name=project_name(cwd),
            root=cwd,
            first_seen=timestamp,
            last_seen=timestamp,
        )
    else:
        project = replace(existing, last_seen=timestamp)

    updated = dict(projects)
    updated[key] = project
    return project, updated
