# src/todo_collections/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- resolves the storage slot for the application id,
- builds the App from persisted data (or an empty default),
- writes the state back at shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import BlobStore
from ..core.state import App
from ..storage.json_store import FileBlobStore, load_app_data, save_app_data

logger = logging.getLogger(__name__)


def create_store(*, settings=None) -> BlobStore:
    if settings is None:
        settings = get_settings()
    return FileBlobStore(settings.data_path)


def create_app(*, settings=None, store: BlobStore | None = None) -> App:
    """
    Create the App from the provided settings.

    Keeping settings/store injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()
    if store is None:
        store = create_store(settings=settings)

    data = load_app_data(store)
    return App(data, app_name=getattr(settings, "app_name", "Todo"))


def shutdown(app: App, store: BlobStore, *, settings=None) -> None:
    """Persist the final state. PersistenceError propagates: a failed save must be surfaced."""
    if settings is None:
        settings = get_settings()
    if not getattr(settings, "save_on_exit", True):
        logger.info("Saving on exit is disabled; state not written.")
        return
    save_app_data(store, app.data)
