"""Storage port — abstract interface for the local document store.

Core modules depend on this protocol, never on a specific backend.
"""

from __future__ import annotations

from typing import Protocol


class PersistenceError(Exception):
    """Raised when the underlying store cannot be read or written."""


class DecodeError(ValueError):
    """Raised when a stored document does not match its expected shape."""


class StoragePort(Protocol):
    """Key-value store of JSON documents used by core modules."""

    def get_document(self, key: str) -> str | None: ...

    def put_document(self, key: str, value: str) -> None: ...
