# src/todo_manager/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for recoverable task errors (never fatal to the app)."""


class EmptyTitleError(TaskError, ValueError):
    def __init__(self) -> None:
        super().__init__("empty title")


class TaskNotFoundError(TaskError, KeyError):
    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"task not found: {self.task_id}"


class ImportFormatError(TaskError):
    """Imported data failed the schema check; the whole batch was rejected."""

    def __init__(self, message: str = "invalid format") -> None:
        super().__init__(message)
