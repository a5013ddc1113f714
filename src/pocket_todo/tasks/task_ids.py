# src/pocket_todo/tasks/task_ids.py

from __future__ import annotations

import itertools
import threading
import uuid
from collections.abc import Callable

IdFactory = Callable[[], str]


def new_task_id() -> str:
    """Default allocator: random UUID4 as 32 hex chars."""
    return uuid.uuid4().hex


class CounterIdFactory:
    """
    Deterministic ids: "<prefix>1", "<prefix>2", ...

    Useful for tests and demos where readable ids matter more than global
    uniqueness. The store re-draws on collision with hydrated ids.
    """

    def __init__(self, prefix: str = "task-", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self._prefix}{n}"


def make_id_factory(strategy: str) -> IdFactory:
    s = (strategy or "").strip().lower()
    if s == "counter":
        return CounterIdFactory()
    if s in ("", "uuid"):
        return new_task_id
    raise ValueError(f"Unknown id strategy: {strategy!r} (expected 'uuid' or 'counter')")
