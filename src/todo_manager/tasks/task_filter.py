# src/todo_manager/tasks/task_filter.py

"""
Pure derivations over a task collection.

Nothing here mutates its input; order of the source collection is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from .task_models import FilterMode, Task, TaskStats, TaskView

_MODE_ALIASES = {
    "a": FilterMode.ALL,
    "all": FilterMode.ALL,
    "todo": FilterMode.ACTIVE,
    "open": FilterMode.ACTIVE,
    "active": FilterMode.ACTIVE,
    "d": FilterMode.DONE,
    "done": FilterMode.DONE,
    "completed": FilterMode.DONE,
}


def parse_filter_mode(raw: str | None) -> FilterMode:
    """User text -> FilterMode. Unknown input falls back to ALL."""
    key = (raw or "").strip().lower()
    return _MODE_ALIASES.get(key, FilterMode.from_raw(key))


def visible_tasks(tasks: Iterable[Task], mode: FilterMode) -> list[Task]:
    if mode == FilterMode.ACTIVE:
        return [t for t in tasks if not t.done]
    if mode == FilterMode.DONE:
        return [t for t in tasks if t.done]
    return list(tasks)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    total = 0
    done = 0
    for t in tasks:
        total += 1
        if t.done:
            done += 1
    return TaskStats(total=total, done=done, active=total - done)


def derive_view(tasks: Iterable[Task], mode: FilterMode) -> TaskView:
    items = list(tasks)
    return TaskView(
        mode=mode,
        visible=tuple(visible_tasks(items, mode)),
        stats=compute_stats(items),
    )
