# src/pocket_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
- Bad values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = _env(name, default).lower()
    return raw if raw in choices else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    store_backend: str
    store_path: Path
    storage_key: str
    write_mode: str

    # ---- Tasks ----
    id_strategy: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "pocket-todo")
        log_level = _env(_k("LOG_LEVEL"), "WARNING").upper()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/pocket_todo"))
        store_backend = _env_choice(_k("STORE_BACKEND"), ("sqlite", "memory"), "sqlite")
        store_path = _env_path(_k("STORE_PATH"), data_dir / "store.sqlite3")
        # Same key the mobile app used, so exported stores load unchanged.
        storage_key = _env(_k("STORAGE_KEY"), "@TodoList:tasks")
        write_mode = _env_choice(_k("WRITE_MODE"), ("serial", "concurrent"), "serial")

        id_strategy = _env_choice(_k("ID_STRATEGY"), ("uuid", "counter"), "uuid")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_backend=store_backend,
            store_path=store_path,
            storage_key=storage_key,
            write_mode=write_mode,
            id_strategy=id_strategy,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
