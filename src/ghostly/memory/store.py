"""Memory store — one JSON document holding events, episodes and projects.

The document is loaded whole, transformed in memory by `record_capture`, and
written back whole by `save`. There is no locking: when two shells capture at
the same time, the last save wins.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from ghostly.memory import classifier, episodes, projects
from ghostly.memory.models import Document, Episode, Event, MalformedDocumentError

logger = logging.getLogger(__name__)

PROBLEM_MAX_CHARS = 200
DEFAULT_FIX_LIMIT = 3


def now_iso() -> str:
    """UTC timestamp like 2026-02-18T09:30:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id() -> str:
    return str(uuid.uuid4())


def _encode(doc: Document) -> bytes:
    """UTF-8 JSON; lone surrogates (undecodable path bytes) force \\u escapes."""
    data = doc.to_dict()
    try:
        return json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(data, indent=2).encode("ascii")


@dataclass
class CaptureResult:
    """What a capture produced, for the caller to display."""

    event: Event
    episode: Episode | None = None
    past_fixes: list[Episode] = field(default_factory=list)

    @property
    def episode_stored(self) -> bool:
        return self.episode is not None


class MemoryStore:
    """Load/save the memory document and derive episodes from captures."""

    def __init__(
        self,
        path: Path,
        *,
        important_tools: Iterable[str] = classifier.IMPORTANT_TOOLS,
        fix_limit: int = DEFAULT_FIX_LIMIT,
    ) -> None:
        self.path = path
        self.important_tools = tuple(important_tools)
        self.fix_limit = fix_limit

    # ── Persistence ───────────────────────────────────────────

    def load(self) -> Document:
        """Read the document; a missing file is an empty memory, not an error."""
        if not self.path.exists():
            logger.debug("No memory document at %s, starting empty", self.path)
            return Document()

        raw = self.path.read_bytes()
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Memory document %s is not valid JSON: %s", self.path, e)
            raise MalformedDocumentError(f"{self.path}: invalid JSON ({e})") from e

        try:
            doc = Document.from_dict(data)
        except MalformedDocumentError as e:
            logger.warning("Memory document %s failed validation: %s", self.path, e)
            raise MalformedDocumentError(f"{self.path}: {e}") from e

        logger.debug(
            "Loaded %d events, %d episodes, %d projects from %s",
            len(doc.events),
            len(doc.episodes),
            len(doc.projects),
            self.path,
        )
        return doc

    def save(self, doc: Document) -> None:
        """Replace the document on disk in one step (temp file + rename).

        OSError propagates; on failure the previous document is left as it was.
        A new document is created private (0600); an existing one keeps its mode.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = _encode(doc)

        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with open(fd, "wb") as f:
                f.write(payload)
            if self.path.exists():
                os.chmod(tmp_path, stat.S_IMODE(self.path.stat().st_mode))
            Path(tmp_path).replace(self.path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.info(
            "Saved memory (%d events, %d episodes) to %s",
            len(doc.events),
            len(doc.episodes),
            self.path,
        )

    def exists(self) -> bool:
        return self.path.exists()

    # ── Capture ───────────────────────────────────────────────

    def record_capture(
        self,
        doc: Document,
        cwd: str,
        command: str,
        exit_code: int = 0,
        stderr: str = "",
        git_branch: str | None = None,
        now: Callable[[], str] = now_iso,
        make_id: Callable[[], str] = new_id,
    ) -> tuple[Document, CaptureResult]:
        """Add one command execution to a copy of doc.

        Always appends an Event and upserts the project. Appends an Episode
        when the command failed or ran an important tool. For errors, the
        result carries the project's most recent fixes (including this one).
        """
        timestamp = now()
        project, updated_projects = projects.upsert(doc.projects, cwd, timestamp)
        failed = classifier.is_error(exit_code, stderr)

        event = Event(
            id=make_id(),
            timestamp=timestamp,
            cwd=cwd,
            command=command,
            project_hash=project.hash,
            is_error=failed,
            exit_code=exit_code,
            stderr=stderr,
            git_branch=git_branch,
        )

        episode = None
        updated_episodes = doc.episodes
        if failed or classifier.is_important(command, self.important_tools):
            episode = Episode(
                id=make_id(),
                project_hash=project.hash,
                timestamp=timestamp,
                summary=classifier.summary(command, failed),
                problem=stderr[:PROBLEM_MAX_CHARS] if failed else None,
                # The captured command itself is stored as the fix
                fix=command,
                keywords=classifier.keywords(command, cwd),
            )
            updated_episodes = episodes.append(doc.episodes, episode)
            logger.debug("Episode %s: %s", episode.id, episode.summary)

        updated = Document(
            events=[*doc.events, event],
            episodes=updated_episodes,
            projects=updated_projects,
        )

        past_fixes: list[Episode] = []
        if failed:
            past_fixes = episodes.recent_fixes(updated_episodes, project.hash, self.fix_limit)

        return updated, CaptureResult(event=event, episode=episode, past_fixes=past_fixes)

    # ── Queries ───────────────────────────────────────────────

    def search(self, doc: Document, query: str) -> list[Episode]:
        return episodes.search(doc.episodes, query)

    def recent_fixes(
        self, doc: Document, project_hash: str, limit: int | None = None
    ) -> list[Episode]:
        return episodes.recent_fixes(
            doc.episodes, project_hash, self.fix_limit if limit is None else limit
        )

    @staticmethod
    def stats(doc: Document) -> dict[str, int]:
        return {
            "events": len(doc.events),
            "episodes": len(doc.episodes),
            "projects": len(doc.projects),
        }
