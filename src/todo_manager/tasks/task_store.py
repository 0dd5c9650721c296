# src/todo_manager/tasks/task_store.py

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Callable, Iterable
from dataclasses import replace

from ..core.ports import TaskRepo, ViewRenderer
from .errors import EmptyTitleError, TaskNotFoundError
from .task_filter import compute_stats, derive_view, visible_tasks
from .task_models import FilterMode, Task, TaskStats, TaskView, now_ms

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 8


def new_task_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class TaskStore:
    """
    In-memory task collection; the single owner of all Task records.

    Order is insertion order with new tasks prepended (newest first).

    Every mutator runs the same pipeline once the change is applied:
        mutate -> derive TaskView -> renderer.render(view) -> repo.save(tasks)
    so persisting after a mutation is part of the contract, not incidental.
    reset_all() is the one exception: it erases the persisted key instead of
    saving an empty list.

    Validation failures (EmptyTitleError) and lookup misses never change state.
    """

    def __init__(
        self,
        repo: TaskRepo | None = None,
        renderer: ViewRenderer | None = None,
        *,
        tasks: Iterable[Task] = (),
        mode: FilterMode = FilterMode.ALL,
        id_factory: Callable[[], str] = new_task_id,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._repo = repo
        self._renderer = renderer
        self._tasks: list[Task] = list(tasks)
        self._mode = mode
        self._id_factory = id_factory
        self._clock = clock
        logger.info("TaskStore ready total=%d mode=%s", len(self._tasks), self._mode)

    # ---- reads ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def mode(self) -> FilterMode:
        return self._mode

    def __len__(self) -> int:
        return len(self._tasks)

    def find(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def get(self, task_id: str) -> Task:
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def visible(self) -> list[Task]:
        return visible_tasks(self._tasks, self._mode)

    def stats(self) -> TaskStats:
        return compute_stats(self._tasks)

    def view(self) -> TaskView:
        return derive_view(self._tasks, self._mode)

    # ---- pipeline ----

    def _commit(self, *, persist: bool = True) -> TaskView:
        view = self.view()
        if self._renderer is not None:
            try:
                self._renderer.render(view)
            except Exception:
                logger.exception("Renderer failed; continuing with persistence.")
        if persist and self._repo is not None:
            self._repo.save(self._tasks)
        return view

    def refresh(self) -> TaskView:
        """Run the pipeline without a mutation (initial render + flush)."""
        return self._commit()

    def _allocate_id(self) -> str:
        existing = {t.id for t in self._tasks}
        while True:
            tid = self._id_factory()
            if tid not in existing:
                return tid
            logger.debug("Task id collision %s, regenerating", tid)

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- mutators ----

    def add(self, title: str | None) -> Task | None:
        """Prepend a new task. Blank titles are a silent no-op (returns None)."""
        trimmed = (title or "").strip()
        if not trimmed:
            return None

        task = Task(id=self._allocate_id(), title=trimmed, done=False, created_at=self._clock())
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s", task.id)
        self._commit()
        return task

    def toggle(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("toggle: no task id=%s", task_id)
            return None

        updated = replace(self._tasks[idx], done=not self._tasks[idx].done)
        self._tasks[idx] = updated
        logger.debug("Task toggled id=%s done=%s", task_id, updated.done)
        self._commit()
        return updated

    def rename(self, task_id: str, new_title: str | None) -> Task:
        trimmed = (new_title or "").strip()
        if not trimmed:
            raise EmptyTitleError()
        idx = self._index_of(task_id)
        if idx is None:
            raise TaskNotFoundError(task_id)

        updated = replace(self._tasks[idx], title=trimmed)
        self._tasks[idx] = updated
        logger.debug("Task renamed id=%s", task_id)
        self._commit()
        return updated

    def remove(self, task_id: str) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("remove: no task id=%s", task_id)
            return False

        del self._tasks[idx]
        logger.debug("Task removed id=%s", task_id)
        self._commit()
        return True

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.done]
        removed = before - len(self._tasks)
        logger.debug("Cleared %d completed tasks", removed)
        self._commit()
        return removed

    def set_filter(self, mode: FilterMode) -> TaskView:
        self._mode = mode
        return self._commit()

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Wholesale swap (import). Callers validate first."""
        self._tasks = list(tasks)
        logger.info("Task collection replaced total=%d", len(self._tasks))
        self._commit()

    def reset_all(self) -> None:
        self._tasks = []
        if self._repo is not None:
            self._repo.clear()
        logger.info("Task collection reset")
        self._commit(persist=False)
