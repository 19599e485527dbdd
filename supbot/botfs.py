"""Locations of the bot's data directories."""

from __future__ import annotations

from pathlib import Path


def user_home() -> Path:
    """Return the user's home directory; raises RuntimeError if it is unknown."""
    return Path.home()


def data_dir() -> Path:
    """Return the base data directory."""
    return user_home() / ".local/share/sup"


def handlers_data_dir() -> Path:
    """Return the directory holding per-handler data."""
    return data_dir() / "handlers"


def handler_data_dir(handler: str) -> Path:
    """Return the data directory of one handler."""
    return data_dir() / handler