# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for storage and logs (default: .local/todo).",
    "TODO_STORAGE_PATH": "Key-value SQLite path (default: <data_dir>/storage.sqlite3).",
    "TODO_EXPORT_DIR": "Default directory for /export (default: current directory).",
    "TODO_EXPORT_FILENAME": "Export file name (default: tasks.json).",
    # Storage keys
    "TODO_TASKS_KEY": "Key holding the task list (default: todo-app-tasks).",
    "TODO_SESSION_KEY": "Key holding the session record (default: todo-app-session).",
    # Session / tasks
    "TODO_SESSION_MAX_AGE_HOURS": "Session lifetime after login (default: 24).",
    "TODO_SEED_DEMO": "Seed demo tasks when the stored list is empty (true/false, default: true).",
}
