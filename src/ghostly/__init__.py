"""Ghostly — remember what you ran in the terminal, and what fixed it."""

__version__ = "0.1.0"
