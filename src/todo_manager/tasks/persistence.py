# src/todo_manager/tasks/persistence.py

"""
Task persistence over a KeyValueStorage.

Stored blob (JSON text under a single fixed key):
    {"version": 1, "tasks": [<task wire dict>, ...]}

Policy:
- save/clear are best-effort: storage failures are logged and swallowed,
  in-memory state is never affected.
- load is fail-open: missing key, malformed JSON, unknown version or a failed
  schema check all yield an empty collection.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.ports import KeyValueStorage
from .task_import import validate_import
from .task_models import Task

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# What a storage backend may raise on quota / permission / lock problems.
STORAGE_ERRORS: tuple[type[BaseException], ...] = (OSError, sqlite3.Error)


@dataclass(frozen=True, slots=True)
class DecodeResult:
    ok: bool
    tasks: tuple[Task, ...] = ()
    error: str | None = None


def encode_tasks(tasks: Sequence[Task]) -> str:
    return json.dumps(
        {"version": SCHEMA_VERSION, "tasks": [t.to_dict() for t in tasks]},
        ensure_ascii=False,
    )


def decode_tasks(raw: str | None) -> DecodeResult:
    """Decode a stored blob. Never raises; branch on `.ok`."""
    if raw is None:
        return DecodeResult(ok=False, error="missing")
    try:
        data = json.loads(raw)
    except (ValueError, TypeError):
        return DecodeResult(ok=False, error="bad_json")

    if not isinstance(data, dict):
        return DecodeResult(ok=False, error="not_an_envelope")
    version = data.get("version")
    if version != SCHEMA_VERSION:
        return DecodeResult(ok=False, error=f"unsupported_version:{version!r}")

    result = validate_import(data.get("tasks"))
    if not result.ok:
        return DecodeResult(ok=False, error=result.issues[0].code)
    return DecodeResult(ok=True, tasks=result.tasks)


class TaskPersistence:
    """Save / load / clear the task collection under a fixed storage key."""

    def __init__(self, storage: KeyValueStorage, key: str) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            self._storage.set_item(self._key, encode_tasks(tasks))
        except STORAGE_ERRORS:
            logger.exception("Failed to persist %d tasks under key=%s", len(tasks), self._key)

    def load(self) -> list[Task]:
        try:
            raw = self._storage.get_item(self._key)
        except STORAGE_ERRORS:
            logger.exception("Failed to read tasks under key=%s", self._key)
            return []

        result = decode_tasks(raw)
        if not result.ok:
            if result.error != "missing":
                logger.warning("Ignoring stored tasks key=%s (%s)", self._key, result.error)
            return []
        logger.debug("Loaded %d tasks from key=%s", len(result.tasks), self._key)
        return list(result.tasks)

    def clear(self) -> None:
        try:
            self._storage.remove_item(self._key)
        except STORAGE_ERRORS:
            logger.exception("Failed to erase tasks under key=%s", self._key)
