# tests/fakes.py

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field

from todo_manager.tasks.task_models import TaskView


@dataclass(slots=True)
class MemoryKeyValueStore:
    """
    In-memory KeyValueStorage (localStorage stand-in) for unit tests.
    """

    data: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)


@dataclass(slots=True)
class FailingKeyValueStore:
    """
    Storage that fails every call, like a full quota or a locked database.
    """

    error: Exception = field(default_factory=lambda: OSError("quota exceeded"))
    calls: int = 0

    def get_item(self, key: str) -> str | None:
        self.calls += 1
        raise self.error

    def set_item(self, key: str, value: str) -> None:
        self.calls += 1
        raise self.error

    def remove_item(self, key: str) -> None:
        self.calls += 1
        raise self.error


def locked_db_error() -> Exception:
    return sqlite3.OperationalError("database is locked")


@dataclass(slots=True)
class RecordingRenderer:
    """Captures every TaskView the store pipeline produces."""

    views: list[TaskView] = field(default_factory=list)

    def render(self, view: TaskView) -> None:
        self.views.append(view)

    @property
    def last(self) -> TaskView:
        return self.views[-1]


@dataclass(slots=True)
class SequenceIds:
    """Deterministic id factory; replays the given ids in order."""

    ids: list[str]

    def __call__(self) -> str:
        return self.ids.pop(0)
