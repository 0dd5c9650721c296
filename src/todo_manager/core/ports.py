# src/todo_manager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends and front-ends swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """
    String key -> string value storage (browser localStorage semantics).

    Implementations may raise on I/O problems (quota, permissions, locked DB).
    Callers in the core treat such failures as best-effort and swallow them.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TaskRepo(Protocol):
    """Persistence side of the task store (save / load / erase)."""

    def save(self, tasks: Sequence[Any]) -> None: ...
    def load(self) -> list[Any]: ...
    def clear(self) -> None: ...


class ViewRenderer(Protocol):
    """
    Front-end side of the store pipeline.

    Receives the freshly derived TaskView after every mutation.
    Must not mutate the store from inside render().
    """

    def render(self, view: Any) -> None: ...
