# src/todo_manager/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..auth.session import UserSession
from ..tasks.task_store import TaskStore
from .ports import KeyValueStorage


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    storage: KeyValueStorage
    store: TaskStore

    user: UserSession | None = None
    export_dir: Path = Path(".")

    # Set by /logout (and similar) to make the console loop stop after the command.
    exit_requested: bool = False
