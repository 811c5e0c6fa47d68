# tests/test_bootstrap.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from todo_collections.cli import main as main_module
from todo_collections.cli.bootstrap import create_app, shutdown
from todo_collections.core.messages import CreateCollection
from todo_collections.storage.json_store import FileBlobStore, PersistenceError, load_app_data


class _ReadOnlyStore:
    def read(self) -> bytes | None:
        return None

    def write(self, data: bytes) -> None:
        raise PermissionError(13, "Permission denied")


def test_first_start_is_empty_and_state_survives_restart(settings: SimpleNamespace, store: FileBlobStore) -> None:
    app = create_app(settings=settings, store=store)
    assert app.data.collections == []
    assert app.title() == "Todo - Home"

    app.update(CreateCollection("Work"))
    shutdown(app, store, settings=settings)

    again = create_app(settings=settings, store=FileBlobStore(settings.data_path))
    assert [c.name for c in again.data.collections] == ["Work"]
    assert again.title() == "Todo - Work"


def test_corrupt_document_starts_empty(settings: SimpleNamespace, store: FileBlobStore) -> None:
    settings.data_path.write_text("{oops", "utf-8")
    assert create_app(settings=settings, store=store).data.collections == []


def test_save_on_exit_disabled(settings: SimpleNamespace, store: FileBlobStore) -> None:
    settings.save_on_exit = False
    app = create_app(settings=settings, store=store)
    app.update(CreateCollection("Work"))
    shutdown(app, store, settings=settings)
    assert not settings.data_path.exists()


def test_shutdown_surfaces_save_failure(settings: SimpleNamespace) -> None:
    app = create_app(settings=settings, store=_ReadOnlyStore())
    with pytest.raises(PersistenceError):
        shutdown(app, _ReadOnlyStore(), settings=settings)


def test_main_saves_on_exit(
    settings: SimpleNamespace, monkeypatch: pytest.MonkeyPatch, restore_logging
) -> None:
    def fake_loop(app) -> None:
        app.update(CreateCollection("Work"))

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "run_console_loop", fake_loop)

    assert main_module.main() == 0
    data = load_app_data(FileBlobStore(settings.data_path))
    assert [c.name for c in data.collections] == ["Work"]


def test_main_reports_save_failure(
    settings: SimpleNamespace,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    restore_logging,
) -> None:
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "run_console_loop", lambda app: None)
    monkeypatch.setattr(main_module, "create_store", lambda settings: _ReadOnlyStore())

    assert main_module.main() == 1
    assert "NOT saved" in capsys.readouterr().err


def test_main_saves_even_if_console_crashes(
    settings: SimpleNamespace, monkeypatch: pytest.MonkeyPatch, restore_logging
) -> None:
    def crashing_loop(app) -> None:
        app.update(CreateCollection("Work"))
        raise RuntimeError("terminal went away")

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "run_console_loop", crashing_loop)

    assert main_module.main() == 1
    assert [c.name for c in load_app_data(FileBlobStore(settings.data_path)).collections] == ["Work"]


def test_main_saves_when_interrupted(
    settings: SimpleNamespace, monkeypatch: pytest.MonkeyPatch, restore_logging
) -> None:
    def interrupted_loop(app) -> None:
        app.update(CreateCollection("Work"))
        raise KeyboardInterrupt

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "run_console_loop", interrupted_loop)

    assert main_module.main() == 130
    assert [c.name for c in load_app_data(FileBlobStore(settings.data_path)).collections] == ["Work"]
