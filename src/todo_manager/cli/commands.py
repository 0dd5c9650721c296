# src/todo_manager/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..auth.session import clear_session
from ..core.render import format_counter, format_task_detail, format_view
from ..core.state import AppState
from ..tasks.errors import EmptyTitleError, ImportFormatError, TaskNotFoundError
from ..tasks.task_filter import parse_filter_mode
from ..tasks.task_import import export_tasks, import_file_async
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NOT_FOUND = "Task not found."
IMPORT_FAILED = "The file is not valid or is corrupted."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 2

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text without a leading / adds it as a new task)")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(state: AppState, ref: str) -> Task | None:
    """
    A task reference is either a task id or the 1-based position in the
    currently visible list (as printed by /list).
    """
    store = state.store
    task = store.find(ref)
    if task is not None:
        return task
    if ref.isdigit():
        visible = store.visible()
        idx = int(ref) - 1
        if 0 <= idx < len(visible):
            return visible[idx]
    return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return format_view(state.store.view())


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.store.add(" ".join(args))
    if task is None:
        return "Title required."
    return f"Added: {task.title}"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /toggle <id|#>"
    task = resolve_task(state, args[0])
    if task is None:
        return NOT_FOUND
    updated = state.store.toggle(task.id)
    if updated is None:
        return NOT_FOUND
    return f"{'Done' if updated.done else 'Active'}: {updated.title}"


def cmd_rename(state: AppState, args: list[str]) -> str:
    if len(args) < 1:
        return "Usage: /rename <id|#> <new title>"
    task = resolve_task(state, args[0])
    if task is None:
        return NOT_FOUND
    try:
        updated = state.store.rename(task.id, " ".join(args[1:]))
    except EmptyTitleError:
        return "The title cannot be empty."
    except TaskNotFoundError:
        return NOT_FOUND
    return f"Renamed: {updated.title}"


def cmd_remove(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <id|#>"
    task = resolve_task(state, args[0])
    if task is None or not state.store.remove(task.id):
        return NOT_FOUND
    return f"Removed: {task.title}"


def cmd_view(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /view <id|#>"
    task = resolve_task(state, args[0])
    if task is None:
        return NOT_FOUND
    return format_task_detail(task)


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Current filter: {state.store.mode}. Use /filter all | active | done."
    mode = parse_filter_mode(args[0])
    state.store.set_filter(mode)
    return f"Filter: {mode}"


def cmd_clear_done(state: AppState, args: list[str]) -> str:
    removed = state.store.clear_completed()
    return f"Removed {removed} completed task(s)."


def cmd_reset(state: AppState, args: list[str]) -> str:
    """
    /reset      -> ask for confirmation
    /reset yes  -> delete ALL tasks and the stored list
    """
    if not args or args[0].lower() not in ("yes", "y", "--yes"):
        return "This deletes ALL tasks and cannot be undone. Confirm with: /reset yes"
    state.store.reset_all()
    return "All tasks deleted."


def cmd_export(state: AppState, args: list[str]) -> str:
    directory = Path(args[0]).expanduser() if args else state.export_dir
    filename = str(getattr(state.settings, "export_filename", "tasks.json"))
    try:
        path = export_tasks(state.store.tasks, directory, filename)
    except OSError as e:
        logger.warning("Export failed dir=%s: %s", directory, e)
        return f"Export failed: {e}"
    return f"Exported {len(state.store)} task(s) to {path}"


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /import <path>  -> read the file off the console thread, then replace the list.

    `emit` gets a progress line before the read starts; the reply is the outcome.
    """
    if len(args) != 1:
        return "Usage: /import <path/to/tasks.json>"
    path = Path(args[0]).expanduser()
    if emit is not None:
        emit(f"Reading {path} ...")
    try:
        count = asyncio.run(import_file_async(state.store, path))
    except ImportFormatError:
        return IMPORT_FAILED
    return f"Imported {count} task(s)."


def cmd_stats(state: AppState, args: list[str]) -> str:
    stats = state.store.stats()
    return f"{format_counter(stats)} • {stats.active} active"


def cmd_whoami(state: AppState, args: list[str]) -> str:
    if state.user is None:
        return "Not logged in."
    email = f" <{state.user.email}>" if state.user.email else ""
    return f"Logged in as {state.user.username}{email}"


def cmd_logout(state: AppState, args: list[str]) -> str:
    key = str(getattr(state.settings, "session_key", "todo-app-session"))
    clear_session(state.storage, key=key)
    name = state.user.username if state.user else "user"
    state.user = None
    state.exit_requested = True
    return f"Logged out {name}. Bye."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the visible tasks.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.", aliases=["new"])
registry.register(
    "toggle", cmd_toggle, help_text="Mark done/active: /toggle <id|#>.", aliases=["done", "t"]
)
registry.register(
    "rename", cmd_rename, help_text="Change a title: /rename <id|#> <title>.", aliases=["edit"]
)
registry.register("rm", cmd_remove, help_text="Delete a task: /rm <id|#>.", aliases=["remove", "del"])
registry.register("view", cmd_view, help_text="Show task details: /view <id|#>.", aliases=["show"])
registry.register("filter", cmd_filter, help_text="Filter the list: /filter all | active | done.")
registry.register("clear-done", cmd_clear_done, help_text="Delete all completed tasks.")
registry.register("reset", cmd_reset, help_text="Delete ALL tasks: /reset yes.")
registry.register("export", cmd_export, help_text="Export tasks to JSON: /export [dir].")
registry.register("import", cmd_import, help_text="Replace tasks from a JSON file: /import <path>.")
registry.register("stats", cmd_stats, help_text="Show task counters.")
registry.register("whoami", cmd_whoami, help_text="Show the logged-in user.")
registry.register("logout", cmd_logout, help_text="End the session and quit.")
