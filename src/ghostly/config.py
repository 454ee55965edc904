"""Configuration loading from environment variables and ghostly.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from ghostly.memory.classifier import IMPORTANT_TOOLS

_DEFAULT_DATA_DIR = Path.home() / ".ghostly"
_CONFIG_FILENAME = "ghostly.toml"
_DB_FILENAME = "memory.json"


@dataclass
class GhostlyConfig:
    """Top-level Ghostly configuration."""

    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    important_tools: list[str] = field(default_factory=lambda: list(IMPORTANT_TOOLS))
    fix_limit: int = 3

    @property
    def db_file(self) -> Path:
        return self.data_dir / _DB_FILENAME


def _tool_list(value) -> list[str]:
    """A single tool name or a list of names."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"important_tools must be a list of strings, got {value!r}")
    return list(value)


def load_config(config_path: Path | None = None) -> GhostlyConfig:
    """Load configuration from environment variables and optional ghostly.toml.

    Priority: environment variables > ghostly.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.ghostly/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_DATA_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    data_dir = os.getenv("GHOSTLY_DATA_DIR", file_data.get("data_dir"))

    return GhostlyConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        log_level=os.getenv("GHOSTLY_LOG_LEVEL", file_data.get("log_level", "WARNING")),
        important_tools=_tool_list(file_data.get("important_tools", IMPORTANT_TOOLS)),
        fix_limit=int(os.getenv("GHOSTLY_FIX_LIMIT", file_data.get("fix_limit", 3))),
    )
