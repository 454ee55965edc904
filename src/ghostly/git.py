"""Best-effort git branch lookup for captured commands."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 5


def current_git_branch(cwd: str) -> str | None:
    """Current branch name in cwd, or None when it cannot be determined."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            capture_output=True,
            text=True,
            cwd=cwd or None,
            timeout=GIT_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("git branch lookup failed in %s: %s", cwd, e)
        return None

    if result.returncode != 0:
        logger.debug("Not a git repository: %s", cwd)
        return None

    return result.stdout.strip() or None
