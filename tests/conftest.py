# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_manager.auth.session import start_session
from todo_manager.cli.bootstrap import create_initial_state
from todo_manager.core.state import AppState
from todo_manager.tasks.persistence import TaskPersistence
from todo_manager.tasks.task_models import Task
from todo_manager.tasks.task_store import TaskStore

from .fakes import MemoryKeyValueStore, RecordingRenderer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "storage.sqlite3",
        tasks_key="todo-app-tasks",
        session_key="todo-app-session",
        session_max_age_hours=24,
        session_max_age_ms=24 * 60 * 60 * 1000,
        export_dir=tmp_path / "exports",
        export_filename="tasks.json",
        seed_demo=False,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def persistence(kv: MemoryKeyValueStore) -> TaskPersistence:
    return TaskPersistence(kv, "todo-app-tasks")


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(id="c", title="third", done=False, created_at=3000),
        Task(id="b", title="second", done=True, created_at=2000),
        Task(id="a", title="first", done=False, created_at=1000),
    ]


@pytest.fixture()
def store(persistence: TaskPersistence, renderer: RecordingRenderer, sample_tasks) -> TaskStore:
    return TaskStore(persistence, renderer, tasks=sample_tasks)


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStore, sample_tasks) -> AppState:
    """
    AppState wired with an in-memory storage and a logged-in user.

    NOTE: the stored list is pre-populated so bootstrap loads it back through
    the real persistence layer.
    """
    start_session(kv, "alice", "alice@example.com", key=settings.session_key)
    TaskPersistence(kv, settings.tasks_key).save(sample_tasks)
    return create_initial_state(settings=settings, storage=kv, renderer=RecordingRenderer())
