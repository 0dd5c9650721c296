# src/todo_manager/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILENAME = "todo.log"

# Loggers whose INFO/DEBUG lines would duplicate the REPL's own replies
# ("Added: ...", "Imported 3 task(s).") or interleave with the rendered list.
_QUIET_ON_CONSOLE = (
    "todo_manager.tasks",
    "todo_manager.storage",
    "todo_manager.auth",
)

# Marker attribute so setup_logging() only replaces handlers it installed.
_OWNED = "_todo_manager_handler"


class _ReplConsoleFilter(logging.Filter):
    """
    Decide what reaches stderr while the prompt is active.

    App loggers under _QUIET_ON_CONSOLE only surface problems (WARNING+);
    the rest of the app passes through at the handler level. Third-party
    loggers and captured py.warnings only show at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("todo_manager."):
            return record.levelno >= logging.ERROR
        if name.startswith(_QUIET_ON_CONSOLE):
            return record.levelno >= logging.WARNING
        return True


class _ReplConsoleFormatter(logging.Formatter):
    """
    No timestamps: the line sits between the task list and the next prompt.

    INFO is the bare message; anything louder is prefixed with its level.
    Tracebacks are left to the log file.
    """

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.levelno <= logging.INFO:
            return msg
        return f"{record.levelname.lower()}: {msg}"


def _file_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """
    Install the console and file handlers on the root logger.

    Calling it again swaps the previously installed pair; handlers added by
    anyone else (pytest's caplog, for one) stay attached. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        if getattr(h, _OWNED, False):
            root.removeHandler(h)
            h.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_ReplConsoleFormatter())
    console.addFilter(_ReplConsoleFilter())
    setattr(console, _OWNED, True)
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(_file_formatter())
    setattr(file_handler, _OWNED, True)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
