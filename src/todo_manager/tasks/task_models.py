# src/todo_manager/tasks/task_models.py

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds (the stored timestamp unit)."""
    return int(time.time() * 1000)


class FilterMode(StrEnum):
    """Which tasks are visible in the list."""

    ALL = "all"
    ACTIVE = "active"
    DONE = "done"

    @classmethod
    def from_raw(cls, raw: str | None) -> FilterMode:
        if not raw:
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except Exception:
            return cls.ALL


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    done: bool
    created_at: int  # epoch ms

    def to_dict(self) -> dict[str, Any]:
        """Wire shape (camelCase createdAt) shared by storage and export files."""
        return {
            "id": self.id,
            "title": self.title,
            "done": self.done,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from an already validated wire dict.

        No checks here: run validate_import() first.
        """
        return cls(
            id=raw["id"],
            title=raw["title"],
            done=raw["done"],
            created_at=int(raw["createdAt"]),
        )


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    done: int
    active: int


@dataclass(frozen=True, slots=True)
class TaskView:
    """Snapshot handed to the renderer after every mutation."""

    mode: FilterMode
    visible: tuple[Task, ...]
    stats: TaskStats

    @property
    def is_empty(self) -> bool:
        return not self.visible
