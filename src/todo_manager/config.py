# src/todo_manager/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a local default.
- Storage keys are configurable but default to the historic names so existing
  data keeps loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TODO"

DEFAULT_TASKS_KEY = "todo-app-tasks"
DEFAULT_SESSION_KEY = "todo-app-session"
DEFAULT_EXPORT_FILENAME = "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path

    # ---- Storage keys ----
    tasks_key: str
    session_key: str

    # ---- Session ----
    session_max_age_hours: int

    # ---- Tasks ----
    export_dir: Path
    export_filename: str
    seed_demo: bool

    @property
    def session_max_age_ms(self) -> int:
        return self.session_max_age_hours * 60 * 60 * 1000

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo") or "todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.sqlite3")

        tasks_key = _env(_k("TASKS_KEY"), DEFAULT_TASKS_KEY).strip() or DEFAULT_TASKS_KEY
        session_key = _env(_k("SESSION_KEY"), DEFAULT_SESSION_KEY).strip() or DEFAULT_SESSION_KEY

        session_max_age_hours = max(0, _env_int(_k("SESSION_MAX_AGE_HOURS"), 24))

        export_dir = _env_path(_k("EXPORT_DIR"), Path("."))
        export_filename = (
            _env(_k("EXPORT_FILENAME"), DEFAULT_EXPORT_FILENAME).strip() or DEFAULT_EXPORT_FILENAME
        )
        seed_demo = _env_bool(_k("SEED_DEMO"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            tasks_key=tasks_key,
            session_key=session_key,
            session_max_age_hours=session_max_age_hours,
            export_dir=export_dir,
            export_filename=export_filename,
            seed_demo=seed_demo,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
