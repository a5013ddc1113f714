# src/pocket_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    A task is either pending or completed; `toggle` is the only transition
    and it goes both ways. Deleting a task removes it from the list, it is
    not a status.
    """

    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    is_completed: bool = False

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.is_completed else TaskStatus.PENDING

    def toggled(self) -> Task:
        return replace(self, is_completed=not self.is_completed)


class TaskListError(RuntimeError):
    """Base class for recoverable task-list storage errors."""


class HydrationFailure(TaskListError):
    """Persisted task list could not be read or parsed."""


class PersistenceFailure(TaskListError):
    """The key-value store rejected a write."""
