# src/todo_collections/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core only needs "a slot that holds bytes"; where the slot lives (file, memory,
something else) is the storage layer's business.
"""

from typing import Protocol


class BlobStore(Protocol):
    """Single readable/writable slot for the serialized application state."""

    def read(self) -> bytes | None:
        """Return the stored bytes, or None if the slot is empty/absent."""
        ...

    def write(self, data: bytes) -> None:
        """Replace the slot contents. Raises OSError on failure."""
        ...
