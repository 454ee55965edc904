"""Episode collection queries.

Episodes are kept oldest first. Nothing here mutates its input.
"""

from __future__ import annotations

from ghostly.memory.models import Episode

SEARCH_LIMIT = 10


def append(episodes: list[Episode], episode: Episode) -> list[Episode]:
    return [*episodes, episode]


def search(episodes: list[Episode], query: str) -> list[Episode]:
    """Case-insensitive substring search over summary, problem and fix.

    Only the 10 most recent matches are considered; they come back newest
    first. Older matches are dropped regardless of how well they match.
    """
    q = query.lower()
    matches = [e for e in episodes if _matches(e, q)]
    return list(reversed(matches[-SEARCH_LIMIT:]))


def recent_fixes(episodes: list[Episode], project_hash: str, limit: int) -> list[Episode]:
    """The last `limit` episodes with a fix for this project, oldest first."""
    if limit <= 0:
        return []
    fixes = [e for e in episodes if e.project_hash == project_hash and e.fix]
    return fixes[-limit:]


def _matches(episode: Episode, q: str) -> bool:
    for text in (episode.summary, episode.problem, episode.fix):
        if text is not None and q in text.lower():
            return True
    return False
