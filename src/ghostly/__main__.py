"""Entry point: python -m ghostly <command>

- capture CMD...   Record a command (with --exit-code / --stderr)
- search QUERY     Search remembered episodes
- stats            Show counts
- init             Create the storage directory
- interactive, i   Menu-driven mode
"""

from __future__ import annotations

import logging

from ghostly.config import load_config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    config = load_config()
    _setup_logging(config.log_level)

    from ghostly.cli import cli

    cli(obj={"config": config})


if __name__ == "__main__":
    main()
