# src/pocket_todo/core/events.py

"""
View -> core events.

A front end (console today, any screen tomorrow) only does three things to
the task list: submit text, toggle a task, delete a task. It reads back
`state.store.tasks` and `state.pending_input` to render.

Tasks can be referenced by id or by their 1-based position as displayed.
"""

from __future__ import annotations

import logging

from ..tasks.task_models import Task
from .state import AppState

logger = logging.getLogger(__name__)


def set_input(state: AppState, text: str) -> None:
    state.pending_input = text or ""


def submit_text(state: AppState, text: str | None = None) -> Task | None:
    """
    Add a task from `text` (or from the pending input when omitted).

    The pending input is cleared only when a task was actually added; blank
    input leaves it as typed.
    """
    if text is not None:
        state.pending_input = text

    task = state.store.add(state.pending_input)
    if task is None:
        return None

    state.pending_input = ""
    logger.info("Task submitted id=%s", task.id)
    return task


def resolve_task_ref(state: AppState, ref: str) -> str | None:
    """Map "3" (display position) or a raw id to a task id."""
    ref = (ref or "").strip()
    if not ref:
        return None

    if state.store.get(ref) is not None:
        return ref

    if ref.isdigit():
        pos = int(ref)
        tasks = state.store.tasks
        if 1 <= pos <= len(tasks):
            return tasks[pos - 1].id

    return None


def toggle_task(state: AppState, ref: str) -> Task | None:
    task_id = resolve_task_ref(state, ref)
    # Unknown refs still go through the store: toggle is a no-op there.
    return state.store.toggle(task_id if task_id is not None else ref)


def delete_task(state: AppState, ref: str) -> Task | None:
    """Remove a task and return it (None if nothing matched)."""
    task_id = resolve_task_ref(state, ref)
    task = state.store.get(task_id) if task_id is not None else None
    state.store.delete(task_id if task_id is not None else ref)
    return task
