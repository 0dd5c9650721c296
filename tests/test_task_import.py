# tests/test_task_import.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todo_manager.tasks.errors import ImportFormatError
from todo_manager.tasks.task_import import (
    export_tasks,
    import_file,
    import_file_async,
    import_text,
    validate_import,
)
from todo_manager.tasks.task_models import Task
from todo_manager.tasks.task_store import TaskStore

GOOD = {"id": "n1", "title": "imported", "done": True, "createdAt": 42}


def _with(**overrides) -> dict:
    item = dict(GOOD)
    for k, v in overrides.items():
        if v is _MISSING:
            item.pop(k)
        else:
            item[k] = v
    return item


_MISSING = object()


def test_validate_accepts_well_formed_list() -> None:
    result = validate_import([GOOD, _with(id="n2", done=False, createdAt=1.5)])
    assert result.ok
    assert [t.id for t in result.tasks] == ["n1", "n2"]
    assert result.tasks[1].created_at == 1


def test_validate_accepts_empty_list() -> None:
    result = validate_import([])
    assert result.ok and result.tasks == ()


@pytest.mark.parametrize("data", [None, {}, GOOD, "[]", 3, True])
def test_validate_rejects_non_list(data) -> None:
    result = validate_import(data)
    assert not result.ok
    assert result.issues[0].code == "not_a_list"


@pytest.mark.parametrize(
    "item, code",
    [
        ("nope", "not_an_object"),
        (_with(id=_MISSING), "bad_id"),
        (_with(id=7), "bad_id"),
        (_with(title=_MISSING), "bad_title"),
        (_with(title=None), "bad_title"),
        (_with(title="   "), "empty_title"),
        (_with(done=_MISSING), "bad_done"),
        (_with(done="true"), "bad_done"),
        (_with(done=1), "bad_done"),
        (_with(createdAt=_MISSING), "bad_created_at"),
        (_with(createdAt="42"), "bad_created_at"),
        (_with(createdAt=True), "bad_created_at"),
        (_with(createdAt=float("inf")), "bad_created_at"),
        (_with(createdAt=float("nan")), "bad_created_at"),
    ],
)
def test_validate_rejects_bad_element(item, code) -> None:
    result = validate_import([GOOD | {"id": "other"}, item])
    assert not result.ok
    assert code in {i.code for i in result.issues}
    assert all(i.index == 1 for i in result.issues)
    assert result.tasks == ()


def test_validate_rejects_duplicate_ids() -> None:
    result = validate_import([GOOD, dict(GOOD)])
    assert [i.code for i in result.issues] == ["duplicate_id"]


def test_import_text_replaces_whole_collection(store: TaskStore) -> None:
    count = import_text(store, json.dumps([GOOD]))
    assert count == 1
    assert store.tasks == (Task(id="n1", title="imported", done=True, created_at=42),)


@pytest.mark.parametrize(
    "text",
    ["{not json", json.dumps({"tasks": [GOOD]}), json.dumps([GOOD, {"id": "x"}])],
)
def test_bad_import_leaves_store_untouched(store: TaskStore, renderer, text) -> None:
    before = store.tasks
    with pytest.raises(ImportFormatError, match="invalid format"):
        import_text(store, text)
    assert store.tasks == before
    assert renderer.views == []


@pytest.mark.parametrize("created_at", ["1e400", "-Infinity", "NaN"])
def test_import_rejects_non_finite_created_at(store: TaskStore, created_at: str) -> None:
    text = '[{"id": "n1", "title": "t", "done": false, "createdAt": ' + created_at + "}]"
    before = store.tasks
    with pytest.raises(ImportFormatError, match="invalid format"):
        import_text(store, text)
    assert store.tasks == before


def test_export_then_import_file(tmp_path: Path, store: TaskStore, sample_tasks) -> None:
    path = export_tasks(store.tasks, tmp_path / "out")

    assert path == tmp_path / "out" / "tasks.json"
    text = path.read_text("utf-8")
    assert text.startswith("[\n  {")  # pretty-printed, bare list, no version field
    assert json.loads(text)[0] == {"id": "c", "title": "third", "done": False, "createdAt": 3000}

    other = TaskStore()
    assert import_file(other, path) == 3
    assert list(other.tasks) == sample_tasks


def test_export_custom_filename(tmp_path: Path, sample_tasks) -> None:
    path = export_tasks(sample_tasks, tmp_path, "backup.json")
    assert path.name == "backup.json"


def test_import_missing_file_is_format_error(tmp_path: Path, store: TaskStore) -> None:
    before = store.tasks
    with pytest.raises(ImportFormatError):
        import_file(store, tmp_path / "missing.json")
    assert store.tasks == before


@pytest.mark.asyncio
async def test_import_file_async_swaps_after_read(tmp_path: Path, store: TaskStore) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([GOOD]), "utf-8")

    count = await import_file_async(store, path)

    assert count == 1
    assert [t.id for t in store.tasks] == ["n1"]


@pytest.mark.asyncio
async def test_import_file_async_rejects_bad_file(tmp_path: Path, store: TaskStore) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[1, 2, 3]", "utf-8")
    before = store.tasks

    with pytest.raises(ImportFormatError):
        await import_file_async(store, path)
    assert store.tasks == before
