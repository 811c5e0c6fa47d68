# src/todo_collections/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Storage location resolved once, keyed by the application id.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_APP_ID = "todo-collections"
DATA_FILE_NAME = "data.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _xdg_data_home() -> Path:
    return _env_path("XDG_DATA_HOME", Path.home() / ".local" / "share")


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_id: str
    app_name: str
    log_level: str

    # ---- Persistence ----
    data_dir: Path
    data_path: Path
    log_dir: Path
    save_on_exit: bool

    @staticmethod
    def from_env() -> "Settings":
        app_id = _env(_k("APP_ID"), DEFAULT_APP_ID).strip()
        app_name = _env(_k("APP_NAME"), "Todo")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), _xdg_data_home() / app_id)
        data_path = _env_path(_k("DATA_PATH"), data_dir / DATA_FILE_NAME)
        log_dir = _env_path(_k("LOG_DIR"), data_dir)
        save_on_exit = _env_bool(_k("SAVE_ON_EXIT"), True)

        return Settings(
            app_id=app_id,
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            data_path=data_path,
            log_dir=log_dir,
            save_on_exit=save_on_exit,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
