# src/todo_manager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage, persistence and the renderer into a TaskStore,
- seeds demo tasks when the stored list is empty.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..auth.session import get_current_user
from ..config import get_settings
from ..core.ports import KeyValueStorage, ViewRenderer
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.persistence import TaskPersistence
from ..tasks.task_models import Task, now_ms
from ..tasks.task_store import TaskStore, new_task_id

logger = logging.getLogger(__name__)

DEMO_TITLES = (
    ("Review the task list", True, 60_000),
    ("Add input validation", False, 40_000),
    ("Try filters and export", False, 20_000),
)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def open_storage(settings=None) -> KeyValueStorage:
    if settings is None:
        settings = get_settings()
    _ensure_local_dirs(settings)
    return SqliteKeyValueStore(settings.storage_path)


def demo_tasks(now: int | None = None) -> list[Task]:
    """Newest first, matching the store's prepend order."""
    base = now_ms() if now is None else now
    seeded = [
        Task(id=new_task_id(), title=title, done=done, created_at=base - age)
        for title, done, age in DEMO_TITLES
    ]
    return sorted(seeded, key=lambda t: t.created_at, reverse=True)


def create_initial_state(
    *,
    settings=None,
    storage: KeyValueStorage | None = None,
    renderer: ViewRenderer | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    The session gate is NOT checked here; callers run check_authentication()
    first and only build the state for a valid session.
    """
    if settings is None:
        settings = get_settings()
    if storage is None:
        storage = open_storage(settings)

    persistence = TaskPersistence(storage, settings.tasks_key)
    tasks = persistence.load()
    if not tasks and settings.seed_demo:
        tasks = demo_tasks()
        persistence.save(tasks)
        logger.info("Stored task list empty; seeded %d demo tasks", len(tasks))

    store = TaskStore(persistence, renderer, tasks=tasks)

    state = AppState(
        settings=settings,
        storage=storage,
        store=store,
        user=get_current_user(storage, key=settings.session_key),
        export_dir=Path(settings.export_dir),
    )
    return state
