# src/pocket_todo/tasks/task_sync.py

from __future__ import annotations

"""
Write-through persistence of the task list.

Every change to the list is encoded in full and written under one fixed key.
Writes never block the caller:
- serial mode: one writer task drains a FIFO queue, one write in flight at a
  time, so the store always ends with the latest list;
- concurrent mode: each write is its own asyncio task; the last one to finish
  wins in the store.

Failed writes are logged and reported through the notifier. They are not
retried and never roll back the in-memory list.
"""

import asyncio
import logging
from collections.abc import Iterable
from enum import StrEnum

from ..core.ports import KeyValueStore, Notifier
from .task_codec import TaskDecodeError, decode_tasks, encode_tasks
from .task_models import HydrationFailure, PersistenceFailure, Task

logger = logging.getLogger(__name__)

STORAGE_KEY = "@TodoList:tasks"


class WriteMode(StrEnum):
    SERIAL = "serial"
    CONCURRENT = "concurrent"

    @classmethod
    def parse(cls, raw: str | None) -> WriteMode:
        if not raw:
            return cls.SERIAL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            logger.warning("Unknown write mode %r; using %s", raw, cls.SERIAL.value)
            return cls.SERIAL


class TaskListPersistence:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        key: str = STORAGE_KEY,
        notifier: Notifier | None = None,
        write_mode: WriteMode | str = WriteMode.SERIAL,
    ) -> None:
        if not key:
            raise ValueError("storage key is required")
        self._kv = kv
        self.key = key
        self._notifier = notifier
        self.write_mode = WriteMode.parse(str(write_mode))

        self._queue: asyncio.Queue[bytes] | None = None
        self._worker: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[bool]] = set()

        self.writes = 0
        self.failed_writes = 0
        self.last_error: PersistenceFailure | None = None

    # ---- reading ----

    async def load(self) -> list[Task] | None:
        """
        Read and decode the persisted list.

        Returns None when nothing was stored yet. Any read or decode problem is
        raised as HydrationFailure; the blob is treated as a single unit.
        """
        try:
            blob = await self._kv.get(self.key)
        except Exception as e:
            raise HydrationFailure(f"could not read {self.key!r}: {e}") from e

        if blob is None:
            logger.debug("No persisted task list under key=%s", self.key)
            return None

        try:
            tasks = decode_tasks(blob)
        except TaskDecodeError as e:
            raise HydrationFailure(f"corrupt task list under {self.key!r}: {e}") from e

        logger.debug("Loaded %d tasks from key=%s", len(tasks), self.key)
        return tasks

    # ---- writing ----

    def schedule_save(self, tasks: Iterable[Task]) -> None:
        """
        Encode `tasks` now and schedule one write.

        Must be called from inside a running event loop. A list that cannot be
        encoded is reported like a failed write; nothing is raised.
        """
        try:
            payload = encode_tasks(tasks)
        except ValueError as e:
            logger.error("Task list encode failed key=%s", self.key, exc_info=e)
            self._record_failure(PersistenceFailure(f"could not encode {self.key!r}: {e}"), e)
            return
        loop = asyncio.get_running_loop()

        if self.write_mode is WriteMode.CONCURRENT:
            t = loop.create_task(self._write(payload))
            self._inflight.add(t)
            t.add_done_callback(self._inflight.discard)
            return

        if self._queue is None:
            self._queue = asyncio.Queue()
        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._run_writer(), name="task-list-writer")
        self._queue.put_nowait(payload)

    async def _run_writer(self) -> None:
        assert self._queue is not None
        while True:
            payload = await self._queue.get()
            try:
                await self._write(payload)
            finally:
                self._queue.task_done()

    async def _write(self, payload: bytes) -> bool:
        try:
            await self._kv.set(self.key, payload)
        except Exception as e:
            logger.error("Task list write failed key=%s bytes=%d", self.key, len(payload), exc_info=e)
            self._record_failure(PersistenceFailure(f"could not write {self.key!r}: {e}"), e)
            return False

        self.writes += 1
        logger.debug("Task list written key=%s bytes=%d", self.key, len(payload))
        return True

    def _record_failure(self, failure: PersistenceFailure, cause: BaseException) -> None:
        failure.__cause__ = cause
        self.failed_writes += 1
        self.last_error = failure
        self.report("Save failed", "There was an error saving your tasks.")

    def report(self, title: str, message: str) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(title, message)
        except Exception:
            logger.debug("Notifier failed title=%s", title, exc_info=True)

    @property
    def pending(self) -> int:
        queued = self._queue.qsize() if self._queue is not None else 0
        return queued + len(self._inflight)

    async def flush(self) -> None:
        """Wait until every scheduled write has finished (successfully or not)."""
        if self._queue is not None and self._worker is not None and not self._worker.done():
            await self._queue.join()
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def aclose(self) -> None:
        await self.flush()
        worker, self._worker = self._worker, None
        if worker is not None and not worker.done():
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass
