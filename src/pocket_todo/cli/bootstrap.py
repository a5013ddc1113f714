# src/pocket_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value store, persistence and task store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Notifier
from ..core.state import AppState
from ..storage import open_kv_store
from ..tasks.task_ids import make_id_factory
from ..tasks.task_store import TaskStore
from ..tasks.task_sync import TaskListPersistence

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.store_backend == "sqlite":
        settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, notifier: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). The store is not hydrated here;
    call `await state.store.hydrate()` from inside the event loop.
    """
    if settings is None:
        settings = get_settings()
    if notifier is None:
        from ..connectors.console_connector import ConsoleNotifier

        notifier = ConsoleNotifier()

    _ensure_local_dirs(settings)

    kv = open_kv_store(settings.store_backend, settings.store_path)
    persistence = TaskListPersistence(
        kv,
        key=settings.storage_key,
        notifier=notifier,
        write_mode=settings.write_mode,
    )
    store = TaskStore(persistence, id_factory=make_id_factory(settings.id_strategy))

    logger.info(
        "State wired backend=%s key=%s write_mode=%s ids=%s",
        settings.store_backend,
        settings.storage_key,
        persistence.write_mode.value,
        settings.id_strategy,
    )
    return AppState(settings=settings, store=store, notifier=notifier)
