# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Keep local paths in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: pocket-todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Storage
    "TODO_DATA_DIR": "Local data directory (default: .local/pocket_todo).",
    "TODO_STORE_BACKEND": "Key-value backend: sqlite | memory (default: sqlite).",
    "TODO_STORE_PATH": "SQLite file path (default: <data_dir>/store.sqlite3).",
    "TODO_STORAGE_KEY": "Key the task list is stored under (default: @TodoList:tasks).",
    "TODO_WRITE_MODE": (
        "serial: one write in flight, FIFO (default). "
        "concurrent: independent writes, last to finish wins."
    ),
    # Tasks
    "TODO_ID_STRATEGY": "Task id allocation: uuid | counter (default: uuid).",
}
