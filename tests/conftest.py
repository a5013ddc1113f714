# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_todo.core.state import AppState
from pocket_todo.tasks.task_ids import CounterIdFactory
from pocket_todo.tasks.task_store import TaskStore

from .fakes import FakeNotifier, RecordingKVStore

KEY = "@TodoList:tasks"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="pocket-todo-test",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        store_backend="memory",
        store_path=tmp_path / "data" / "store.sqlite3",
        storage_key=KEY,
        write_mode="serial",
        id_strategy="counter",
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def kv() -> RecordingKVStore:
    return RecordingKVStore()


@pytest.fixture()
def store() -> TaskStore:
    """In-memory store (no persistence): mutations need no event loop."""
    return TaskStore(id_factory=CounterIdFactory())


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, notifier: FakeNotifier) -> AppState:
    return AppState(settings=settings, store=store, notifier=notifier)
