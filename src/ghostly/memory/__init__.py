"""Terminal memory — captured commands, derived episodes, tracked projects.

Layout:
    ~/.ghostly/
    ├── memory.json        # {"events": [...], "episodes": [...], "projects": [...]}
    └── ghostly.toml       # Optional configuration

Every capture appends an event. Errors and runs of well-known tools
(npm, git, docker, ...) also become episodes, which are what `search` looks at.
"""

from ghostly.memory.models import Document, Episode, Event, MalformedDocumentError, Project
from ghostly.memory.store import CaptureResult, MemoryStore

__all__ = [
    "CaptureResult",
    "Document",
    "Episode",
    "Event",
    "MalformedDocumentError",
    "MemoryStore",
    "Project",
]
