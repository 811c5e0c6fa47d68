# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_collections.core.messages import AddTask, CreateCollection, DispatchToCollection, SetPendingInput
from todo_collections.core.state import App
from todo_collections.storage.json_store import FileBlobStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap/main.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_id="todo-test",
        app_name="Todo",
        log_level="INFO",
        data_dir=tmp_path,
        data_path=tmp_path / "data.json",
        log_dir=tmp_path / "logs",
        save_on_exit=True,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> FileBlobStore:
    return FileBlobStore(settings.data_path)


@pytest.fixture()
def app() -> App:
    return App()


def add_tasks(app: App, index: int, *names: str) -> None:
    for name in names:
        app.update(DispatchToCollection(index, SetPendingInput(name)))
        app.update(DispatchToCollection(index, AddTask()))


@pytest.fixture()
def two_lists() -> App:
    """App with "Work" (2 tasks) and "Home" (1 task); "Home" is current."""
    app = App()
    app.update(CreateCollection("Work"))
    add_tasks(app, 0, "Ship report", "Review PR")
    app.update(CreateCollection("Home"))
    add_tasks(app, 1, "Water plants")
    return app


@pytest.fixture()
def restore_logging():
    """setup_logging() rewires the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
