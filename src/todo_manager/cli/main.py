# src/todo_manager/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens storage, checks the session gate, builds AppState,
then runs the console REPL in the main thread.

Subcommands:
- run (default): open the task list (requires a valid session)
- login <username> [--email E]: start a session
- logout: end the session
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from ..auth.session import check_authentication, clear_session, start_session
from ..cli.bootstrap import create_initial_state, open_storage
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.render import TextRenderer
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOGIN_REQUIRED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo-manager")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("run", help="Open the task list (default)")

    p_login = sub.add_parser("login", help="Start a session")
    p_login.add_argument("username", help="User name shown in the console")
    p_login.add_argument("--email", default="", help="Optional e-mail stored with the session")

    sub.add_parser("logout", help="End the current session")
    return parser


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape).

    Tasks are already persisted after every mutation; nothing to flush here.
    """
    try:
        storage = getattr(state, "storage", None)
        if storage is not None and hasattr(storage, "close"):
            storage.close()
    except Exception:
        logger.debug("Storage close failed.", exc_info=True)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    storage = open_storage(settings)
    command = args.command or "run"

    if command == "login":
        try:
            session = start_session(
                storage, args.username, args.email, key=settings.session_key
            )
        except ValueError as e:
            print(f"Login failed: {e}")
            return EXIT_LOGIN_REQUIRED
        print(f"Logged in as {session.username}. Run `todo-manager` to open your tasks.")
        return EXIT_OK

    if command == "logout":
        clear_session(storage, key=settings.session_key)
        print("Logged out.")
        return EXIT_OK

    if not check_authentication(
        storage, key=settings.session_key, max_age_ms=settings.session_max_age_ms
    ):
        logger.info("No valid session; login required.")
        print("Session missing or expired. Log in with: todo-manager login <username>")
        return EXIT_LOGIN_REQUIRED

    logger.info("Starting %s...", getattr(settings, "app_name", "todo"))

    # Every mutation re-renders the list on stdout.
    state = create_initial_state(settings=settings, storage=storage, renderer=TextRenderer())
    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
