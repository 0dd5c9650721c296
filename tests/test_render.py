# tests/test_render.py

from __future__ import annotations

from todo_manager.core.render import TextRenderer, format_task_detail, format_view
from todo_manager.tasks.task_filter import derive_view
from todo_manager.tasks.task_models import FilterMode, Task


def test_format_view_lists_visible_tasks(sample_tasks) -> None:
    text = format_view(derive_view(sample_tasks, FilterMode.ALL))
    lines = text.splitlines()

    assert lines[0] == "Tasks [all]  3 tasks • 1 done"
    assert lines[1] == "  1. [ ] third  (c)"
    assert lines[2] == "  2. [x] second  (b)"


def test_format_view_empty() -> None:
    assert "(no tasks)" in format_view(derive_view([], FilterMode.ACTIVE))


def test_format_task_detail() -> None:
    text = format_task_detail(Task(id="a", title="x", done=True, created_at=0))
    assert "Title: x" in text and "Status: Done" in text


def test_text_renderer_writes_view(sample_tasks) -> None:
    out: list[str] = []
    TextRenderer(out.append).render(derive_view(sample_tasks, FilterMode.DONE))
    assert out and "second" in out[0] and "third" not in out[0]
