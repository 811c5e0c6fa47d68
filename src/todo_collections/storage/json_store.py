# src/todo_collections/storage/json_store.py

"""
JSON persistence for AppData.

Document shape:
    {"collections": [{"name": str,
                      "tasks": [{"name": str, "completed": bool}],
                      "filter": "All" | "Active" | "Completed"}],
     "current_index": int}

Loading never fails: a missing slot or a malformed document yields an empty AppData.
Saving is the opposite: any failure raises PersistenceError so data loss is visible.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..core.models import Collection, Filter, Task
from ..core.ports import BlobStore
from ..core.state import AppData

logger = logging.getLogger(__name__)

CURRENT_INDEX_KEY = "current_index"
_CURRENT_INDEX_ALIASES = (CURRENT_INDEX_KEY, "currentIndex")


class PersistenceError(RuntimeError):
    """The application state could not be written to storage."""


class FileBlobStore:
    """BlobStore backed by one file; writes go through a temp file + os.replace."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> bytes | None:
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def write(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, self.path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise


# ---- codec ----


def task_to_dict(task: Task) -> dict[str, Any]:
    return {"name": task.name, "completed": task.completed}


def collection_to_dict(collection: Collection) -> dict[str, Any]:
    # pending_input is transient and never written.
    return {
        "name": collection.name,
        "tasks": [task_to_dict(t) for t in collection.tasks],
        "filter": collection.filter.value,
    }


def app_data_to_dict(data: AppData) -> dict[str, Any]:
    return {
        "collections": [collection_to_dict(c) for c in data.collections],
        CURRENT_INDEX_KEY: data.current_index,
    }


def _expect(obj: Any, kind: type, what: str) -> Any:
    if not isinstance(obj, kind) or (kind is int and isinstance(obj, bool)):
        raise ValueError(f"{what}: expected {kind.__name__}, got {type(obj).__name__}")
    return obj


def task_from_dict(raw: Any) -> Task:
    raw = _expect(raw, Mapping, "task")
    return Task(
        name=_expect(raw.get("name"), str, "task.name"),
        completed=_expect(raw.get("completed"), bool, "task.completed"),
    )


def collection_from_dict(raw: Any) -> Collection:
    raw = _expect(raw, Mapping, "collection")
    filter_raw = raw.get("filter", Filter.ALL.value)
    try:
        selector = Filter(_expect(filter_raw, str, "collection.filter"))
    except ValueError:
        raise ValueError(f"collection.filter: unknown value {filter_raw!r}") from None
    return Collection(
        name=_expect(raw.get("name"), str, "collection.name"),
        tasks=[task_from_dict(t) for t in _expect(raw.get("tasks", []), list, "collection.tasks")],
        filter=selector,
    )


def app_data_from_dict(raw: Any) -> AppData:
    """Strict decode; raises ValueError on any shape problem."""
    raw = _expect(raw, Mapping, "document")
    collections = [
        collection_from_dict(c) for c in _expect(raw.get("collections", []), list, "collections")
    ]
    current_index = 0
    for key in _CURRENT_INDEX_ALIASES:
        if key in raw:
            current_index = _expect(raw[key], int, key)
            break
    data = AppData(collections=collections, current_index=current_index)
    data.clamp_current_index()
    return data


def dumps(data: AppData) -> bytes:
    return json.dumps(app_data_to_dict(data), ensure_ascii=False, indent=2).encode("utf-8")


def loads(blob: bytes | str) -> AppData:
    return app_data_from_dict(json.loads(blob))


# ---- load / save ----


def load_app_data(store: BlobStore) -> AppData:
    """Read AppData from `store`, falling back to an empty state on any problem."""
    try:
        blob = store.read()
    except OSError:
        logger.exception("Failed to read stored state; starting empty.")
        return AppData()

    if blob is None:
        logger.info("No stored state found; starting empty.")
        return AppData()

    try:
        data = loads(blob)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        # json.JSONDecodeError is a ValueError; deeply nested documents exhaust the decoder stack.
        logger.warning("Stored state is malformed (%s); starting empty.", e)
        return AppData()

    logger.info(
        "Loaded %d collection(s), %d task(s).",
        len(data.collections),
        sum(len(c.tasks) for c in data.collections),
    )
    return data


def save_app_data(store: BlobStore, data: AppData) -> None:
    """Write AppData to `store`. Raises PersistenceError on failure."""
    try:
        blob = dumps(data)
        store.write(blob)
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"Could not save application state: {e}") from e
    logger.info("Saved %d collection(s).", len(data.collections))
