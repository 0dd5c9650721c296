# src/todo_manager/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.render import format_view
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    One REPL step.

    - "/command ..." goes to the command registry.
    - Anything else is a new task title (like typing into the input box).

    Returns the text to show, or None when there is nothing to say.
    """
    text = line.strip()
    if not text:
        return None

    if text.startswith("/"):
        try:
            return command_registry.handle(state, text, emit=_print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            return "Internal error while handling a command."

    task = state.store.add(text)
    if task is None:
        return None
    return f"Added: {task.title}"


def run_console_loop(state: AppState, read: InputFn = input) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.store))
    who = f" Logged in as {state.user.username}." if state.user else ""
    _print_ts(f"[CONSOLE]{who} Type a task to add it. Use /help for commands, /exit to quit.\n")
    print(format_view(state.store.view()))

    while True:
        try:
            user_input = read("\n> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply:
            _print_ts(reply)

        if state.exit_requested:
            break

    logger.info("Console connector finished.")
