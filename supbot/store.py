"""Key/value store backed by SQLite, with namespaced views."""

from __future__ import annotations

import os
import sqlite3
from typing import Union

Key = Union[bytes, str]
Value = Union[bytes, str]


def _to_bytes(data: Key) -> bytes:
    return data.encode() if isinstance(data, str) else bytes(data)


class Store:
    """A persistent byte store; ``namespace`` gives a prefixed view of it."""

    def __init__(self, path: str | os.PathLike) -> None:
        self._conn = sqlite3.connect(os.fspath(path), check_same_thread=False)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key BLOB PRIMARY KEY, value BLOB NOT NULL)"
            )
        self._prefix = b""

    def get(self, key: Key) -> bytes:
        """Return the value for ``key``; raises KeyError if it is absent."""
        row = self._conn.execute(
            "SELECT value FROM kv WHERE key = ?", (self._prefix + _to_bytes(key),)
        ).fetchone()
        if row is None:
            raise KeyError(key)
        return bytes(row[0])

    def put(self, key: Key, value: Value) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (self._prefix + _to_bytes(key), _to_bytes(value)),
            )

    def namespace(self, name: str) -> "Store":
        """Return a view of the same database whose keys are prefixed ``name:``."""
        view = Store.__new__(Store)
        view._conn = self._conn
        view._prefix = f"{name}:".encode()
        return view

    def close(self) -> None:
        """Close the underlying database, shared by all namespaces."""
        self._conn.close()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()