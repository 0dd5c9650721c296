# src/todo_manager/tasks/task_import.py

"""
Export / import of task lists as plain JSON files.

The file format is a bare JSON list of task objects:
    [{"id": "...", "title": "...", "done": false, "createdAt": 1700000000000}, ...]

Import is all-or-nothing: any invalid element rejects the whole batch and the
store is left untouched. A valid batch replaces the collection (no merge).
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..config import DEFAULT_EXPORT_FILENAME
from .errors import ImportFormatError
from .task_models import Task

if TYPE_CHECKING:
    from .task_store import TaskStore

logger = logging.getLogger(__name__)

INVALID_FORMAT = "invalid format"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single validation problem.

    `code` is a stable identifier suitable for tests; `index` is the offending
    element (None for problems with the container itself).
    """

    code: str
    message: str
    index: int | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    issues: Sequence[ValidationIssue]
    tasks: tuple[Task, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues


def _is_number(v: Any) -> bool:
    # bool is an int subclass; json also yields inf/nan for 1e400, NaN, Infinity.
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v)


def _check_item(i: int, item: Any, seen_ids: set[str]) -> list[ValidationIssue]:
    if not isinstance(item, dict):
        return [ValidationIssue("not_an_object", "element is not an object", i)]

    issues: list[ValidationIssue] = []
    tid = item.get("id")
    title = item.get("title")

    if not isinstance(tid, str):
        issues.append(ValidationIssue("bad_id", "id must be a string", i))
    elif tid in seen_ids:
        issues.append(ValidationIssue("duplicate_id", f"duplicate id {tid!r}", i))
    else:
        seen_ids.add(tid)

    if not isinstance(title, str):
        issues.append(ValidationIssue("bad_title", "title must be a string", i))
    elif not title.strip():
        issues.append(ValidationIssue("empty_title", "title must not be blank", i))

    if not isinstance(item.get("done"), bool):
        issues.append(ValidationIssue("bad_done", "done must be a boolean", i))

    if not _is_number(item.get("createdAt")):
        issues.append(ValidationIssue("bad_created_at", "createdAt must be a number", i))

    return issues


def validate_import(data: Any) -> ValidationResult:
    """
    Structural schema check on untrusted, already JSON-parsed input.

    Never raises; callers branch on `.ok`. On success `.tasks` holds the
    decoded tasks in input order.
    """
    if not isinstance(data, list):
        return ValidationResult(issues=(ValidationIssue("not_a_list", "expected a JSON list"),))

    issues: list[ValidationIssue] = []
    seen: set[str] = set()
    for i, item in enumerate(data):
        issues.extend(_check_item(i, item, seen))

    if issues:
        return ValidationResult(issues=tuple(issues))
    return ValidationResult(issues=(), tasks=tuple(Task.from_dict(raw) for raw in data))


def parse_import_text(text: str) -> ValidationResult:
    try:
        data = json.loads(text)
    except (ValueError, TypeError):
        return ValidationResult(issues=(ValidationIssue("bad_json", "not valid JSON"),))
    return validate_import(data)


def import_text(store: TaskStore, text: str) -> int:
    """
    Validate `text` and wholesale-replace the store's collection.

    Raises ImportFormatError (generic "invalid format") on any violation;
    the store is untouched in that case. Returns the number of imported tasks.
    """
    result = parse_import_text(text)
    if not result.ok:
        logger.info(
            "Import rejected: %s",
            "; ".join(f"{x.code}@{x.index}" if x.index is not None else x.code for x in result.issues),
        )
        raise ImportFormatError(INVALID_FORMAT)

    store.replace_all(result.tasks)
    logger.info("Imported %d tasks", len(result.tasks))
    return len(result.tasks)


def _read_text(path: Path) -> str:
    try:
        return path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ImportFormatError(INVALID_FORMAT) from e


def import_file(store: TaskStore, path: str | Path) -> int:
    """Read the whole file, then import it (see import_text)."""
    return import_text(store, _read_text(Path(path)))


async def import_file_async(store: TaskStore, path: str | Path) -> int:
    """
    Same as import_file, but the read happens off the event loop.

    The store is only touched once the read has completed, as a single swap.
    """
    text = await asyncio.to_thread(_read_text, Path(path))
    return import_text(store, text)


def export_tasks(
    tasks: Sequence[Task],
    directory: str | Path,
    filename: str = DEFAULT_EXPORT_FILENAME,
) -> Path:
    """
    Write tasks to `<directory>/<filename>` as pretty-printed JSON (indent=2).

    I/O errors propagate: export is an explicit user action.
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / filename
    payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)
    path.write_text(payload, "utf-8")
    logger.info("Exported %d tasks to %s", len(tasks), path)
    return path
