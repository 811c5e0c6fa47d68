# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_collections.config import DEFAULT_APP_ID, Settings

_VARS = (
    "TODO_APP_ID",
    "TODO_APP_NAME",
    "TODO_LOG_LEVEL",
    "TODO_DATA_DIR",
    "TODO_DATA_PATH",
    "TODO_LOG_DIR",
    "TODO_SAVE_ON_EXIT",
    "XDG_DATA_HOME",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_resolve_under_xdg_data_home(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("XDG_DATA_HOME", str(tmp_path))

    s = Settings.from_env()

    assert s.app_id == DEFAULT_APP_ID
    assert s.app_name == "Todo"
    assert s.log_level == "INFO"
    assert s.data_dir == tmp_path / DEFAULT_APP_ID
    assert s.data_path == tmp_path / DEFAULT_APP_ID / "data.json"
    assert s.log_dir == s.data_dir
    assert s.save_on_exit is True


def test_app_id_keys_the_storage_location(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("XDG_DATA_HOME", str(tmp_path))
    clean_env.setenv("TODO_APP_ID", "com.example.todo")

    assert Settings.from_env().data_path == tmp_path / "com.example.todo" / "data.json"


def test_explicit_paths_win(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TODO_DATA_DIR", str(tmp_path / "d"))
    clean_env.setenv("TODO_DATA_PATH", str(tmp_path / "elsewhere.json"))
    clean_env.setenv("TODO_LOG_DIR", str(tmp_path / "logs"))

    s = Settings.from_env()

    assert s.data_dir == tmp_path / "d"
    assert s.data_path == tmp_path / "elsewhere.json"
    assert s.log_dir == tmp_path / "logs"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("false", False), ("0", False), ("no", False), ("yes", True), ("ON", True), ("", True)],
)
def test_save_on_exit_parsing(clean_env: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    clean_env.setenv("TODO_SAVE_ON_EXIT", raw)
    assert Settings.from_env().save_on_exit is expected


def test_blank_values_fall_back_to_defaults(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TODO_APP_NAME", "  ")
    clean_env.setenv("TODO_LOG_LEVEL", "")
    s = Settings.from_env()
    assert s.app_name == "Todo"
    assert s.log_level == "INFO"
