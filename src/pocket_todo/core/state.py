# src/pocket_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import Notifier


@dataclass
class AppState:
    # Settings object (real Settings or a SimpleNamespace in tests).
    settings: Any

    store: TaskStore

    # User-facing notices (greeting, rejected input) shown by the view layer.
    notifier: Notifier

    # Text typed but not yet submitted (the input field).
    pending_input: str = ""
