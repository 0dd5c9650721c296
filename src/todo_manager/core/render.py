# src/todo_manager/core/render.py

"""Plain-text rendering of task views (console front-end)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from ..tasks.task_models import FilterMode, Task, TaskStats, TaskView

_MODE_LABELS = {
    FilterMode.ALL: "all",
    FilterMode.ACTIVE: "active",
    FilterMode.DONE: "done",
}


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_counter(stats: TaskStats) -> str:
    return f"{stats.total} tasks • {stats.done} done"


def format_task_line(index: int, task: Task) -> str:
    mark = "x" if task.done else " "
    return f"{index:>3}. [{mark}] {task.title}  ({task.id})"


def format_view(view: TaskView) -> str:
    lines = [f"Tasks [{_MODE_LABELS[view.mode]}]  {format_counter(view.stats)}"]
    if view.is_empty:
        lines.append("  (no tasks)")
    else:
        lines.extend(format_task_line(i, t) for i, t in enumerate(view.visible, start=1))
    return "\n".join(lines)


def format_task_detail(task: Task) -> str:
    return (
        "Task detail\n"
        f"  ID: {task.id}\n"
        f"  Title: {task.title}\n"
        f"  Status: {'Done' if task.done else 'Active'}\n"
        f"  Created: {format_timestamp(task.created_at)}"
    )


class TextRenderer:
    """ViewRenderer that writes format_view() output through `write`."""

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def render(self, view: TaskView) -> None:
        self._write(format_view(view))
