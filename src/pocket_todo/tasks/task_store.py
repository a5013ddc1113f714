# src/pocket_todo/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .task_codec import is_storable_text
from .task_ids import IdFactory, new_task_id
from .task_models import HydrationFailure, Task
from .task_sync import TaskListPersistence

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory owner of the ordered task list (newest first).

    Mutations are synchronous and take effect immediately; each one hands a
    snapshot of the full list to the persistence layer, which writes it in the
    background. Without a persistence layer the store is purely in-memory.

    Invariants:
    - task ids are unique within the list
    - new tasks are prepended
    - toggle/delete never reorder the remaining tasks
    """

    def __init__(
        self,
        persistence: TaskListPersistence | None = None,
        *,
        id_factory: IdFactory | None = None,
        tasks: Iterable[Task] | None = None,
    ) -> None:
        self._persistence = persistence
        self._new_id = id_factory or new_task_id
        self._tasks: list[Task] = list(tasks or [])
        self._hydrated = False
        self.ready = False
        self.hydration_error: HydrationFailure | None = None

    # ---- read access ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def persistence(self) -> TaskListPersistence | None:
        return self._persistence

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def counts(self) -> tuple[int, int]:
        """Return (pending, completed)."""
        done = sum(1 for t in self._tasks if t.is_completed)
        return len(self._tasks) - done, done

    # ---- mutations ----

    def add(self, text: str) -> Task | None:
        clean = (text or "").strip()
        if not clean:
            return None
        if not is_storable_text(clean):
            logger.warning("Add rejected: text is not valid unicode (len=%d)", len(clean))
            return None

        task = Task(id=self._allocate_id(), text=clean, is_completed=False)
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s total=%d", task.id, len(self._tasks))
        self._persist()
        return task

    def toggle(self, task_id: str) -> Task | None:
        toggled: Task | None = None
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                toggled = task.toggled()
                self._tasks[i] = toggled
                break

        if toggled is None:
            logger.debug("Toggle ignored: no task id=%s", task_id)
        else:
            logger.debug("Task %s -> %s", task_id, toggled.status.value)
        self._persist()
        return toggled

    def delete(self, task_id: str) -> bool:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = len(self._tasks) < before

        if removed:
            logger.debug("Task deleted id=%s total=%d", task_id, len(self._tasks))
        else:
            logger.debug("Delete ignored: no task id=%s", task_id)
        self._persist()
        return removed

    async def hydrate(self) -> bool:
        """
        Load the persisted list once, replacing in-memory state.

        Returns True when the list was replaced. A missing blob leaves the list
        untouched. A corrupt or unreadable blob is reported to the user and
        logged; the list stays as it was and the error is kept on
        `hydration_error`.
        """
        if self._hydrated:
            logger.warning("hydrate() called more than once; ignoring")
            return False
        self._hydrated = True

        if self._persistence is None:
            self.ready = True
            return False

        try:
            loaded = await self._persistence.load()
        except HydrationFailure as e:
            self.hydration_error = e
            logger.error("Failed to load tasks: %s", e, exc_info=e.__cause__ or e)
            self._persistence.report("Load failed", "There was an error loading your saved tasks.")
            return False
        finally:
            self.ready = True

        if loaded is None:
            logger.info("No saved tasks under key=%s", self._persistence.key)
            return False

        self._tasks = loaded
        logger.info("Loaded %d saved tasks", len(self._tasks))
        self._persist()
        return True

    # ---- persistence glue ----

    def _allocate_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            task_id = self._new_id()
            if task_id not in taken:
                return task_id
            logger.debug("Id collision on %s; drawing another", task_id)

    def _persist(self) -> None:
        if self._persistence is None:
            return
        self._persistence.schedule_save(self._tasks)

    async def flush(self) -> None:
        if self._persistence is not None:
            await self._persistence.flush()

    async def aclose(self) -> None:
        if self._persistence is not None:
            await self._persistence.aclose()
