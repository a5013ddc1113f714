# tests/test_task_sync.py

from __future__ import annotations

import pytest

from pocket_todo.tasks.task_codec import decode_tasks, encode_tasks
from pocket_todo.tasks.task_ids import CounterIdFactory
from pocket_todo.tasks.task_models import HydrationFailure, PersistenceFailure, Task
from pocket_todo.tasks.task_store import TaskStore
from pocket_todo.tasks.task_sync import TaskListPersistence, WriteMode

from .conftest import KEY
from .fakes import FakeNotifier, RecordingKVStore


def _make_store(
    kv: RecordingKVStore,
    notifier: FakeNotifier,
    write_mode: WriteMode = WriteMode.SERIAL,
) -> TaskStore:
    persistence = TaskListPersistence(kv, key=KEY, notifier=notifier, write_mode=write_mode)
    return TaskStore(persistence, id_factory=CounterIdFactory())


@pytest.mark.asyncio
async def test_every_mutation_writes_full_list_in_order(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    store = _make_store(kv, notifier)

    a = store.add("a")
    store.add("b")
    store.toggle(a.id)  # type: ignore[union-attr]
    store.delete("missing")  # no-op delete still writes
    store.toggle("missing")
    store.add("   ")  # blank add does not write
    await store.flush()

    assert len(kv.writes) == 5
    assert all(key == KEY for key, _ in kv.writes)
    lists = [decode_tasks(blob) for _, blob in kv.writes]
    assert [len(x) for x in lists] == [1, 2, 2, 2, 2]
    assert decode_tasks(kv.data[KEY]) == list(store.tasks)
    assert notifier.notices == []


@pytest.mark.asyncio
async def test_write_failure_notifies_and_keeps_memory(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    store = _make_store(kv, notifier)
    kv.fail_writes = True

    task = store.add("Buy milk")
    await store.flush()

    assert store.tasks == (task,)
    assert notifier.titles == ["Save failed"]
    persistence = store.persistence
    assert persistence is not None
    assert persistence.failed_writes == 1
    assert isinstance(persistence.last_error, PersistenceFailure)

    # Not retried; later writes go through once the store recovers.
    kv.fail_writes = False
    store.add("Walk dog")
    await store.flush()
    assert len(kv.writes) == 1
    assert [t.text for t in decode_tasks(kv.data[KEY])] == ["Walk dog", "Buy milk"]


@pytest.mark.asyncio
async def test_serial_mode_keeps_latest_state_despite_slow_first_write(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    kv.delays = [0.05, 0.0]
    store = _make_store(kv, notifier, WriteMode.SERIAL)

    store.add("first")
    store.add("second")
    await store.flush()

    assert [t.text for t in decode_tasks(kv.data[KEY])] == ["second", "first"]


@pytest.mark.asyncio
async def test_concurrent_mode_last_finished_write_wins(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    kv.delays = [0.05, 0.0]
    store = _make_store(kv, notifier, WriteMode.CONCURRENT)

    store.add("first")
    store.add("second")
    await store.flush()

    # The slow, older write lands last.
    assert [t.text for t in decode_tasks(kv.data[KEY])] == ["first"]
    assert len(kv.writes) == 2


@pytest.mark.asyncio
async def test_hydrate_replaces_state_and_writes_back(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    saved = [Task(id="7", text="Walk dog"), Task(id="3", text="Buy milk", is_completed=True)]
    kv.data[KEY] = encode_tasks(saved)
    store = _make_store(kv, notifier)

    assert await store.hydrate() is True
    await store.flush()

    assert list(store.tasks) == saved
    assert store.ready is True
    assert len(kv.writes) == 1
    assert notifier.notices == []


@pytest.mark.asyncio
async def test_hydrate_without_saved_data_keeps_empty_list(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    store = _make_store(kv, notifier)

    assert await store.hydrate() is False
    await store.flush()

    assert store.tasks == ()
    assert store.ready is True
    assert kv.writes == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "blob",
    [
        b'[{"id": "1", "text": "a"',
        b"[" * 200_000,
        b'[{"id": "1", "text": "caf\\udce9", "isCompleted": false}]',
    ],
)
async def test_hydrate_from_corrupt_blob_reports_failure(
    kv: RecordingKVStore, notifier: FakeNotifier, blob: bytes
) -> None:
    kv.data[KEY] = blob
    store = _make_store(kv, notifier)

    assert await store.hydrate() is False

    assert store.tasks == ()
    assert store.ready is True
    assert isinstance(store.hydration_error, HydrationFailure)
    assert notifier.titles == ["Load failed"]
    # The corrupt blob is left alone until the next real mutation.
    assert kv.writes == []


@pytest.mark.asyncio
async def test_hydrate_read_error_reports_failure(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    kv.fail_reads = True
    store = _make_store(kv, notifier)

    assert await store.hydrate() is False
    assert isinstance(store.hydration_error, HydrationFailure)
    assert notifier.titles == ["Load failed"]


@pytest.mark.asyncio
async def test_hydrate_runs_once(kv: RecordingKVStore, notifier: FakeNotifier) -> None:
    kv.data[KEY] = encode_tasks([Task(id="1", text="saved")])
    store = _make_store(kv, notifier)

    assert await store.hydrate() is True
    store.add("new")
    assert await store.hydrate() is False
    await store.aclose()

    assert [t.text for t in store.tasks] == ["new", "saved"]


@pytest.mark.asyncio
async def test_aclose_drains_pending_writes(kv: RecordingKVStore, notifier: FakeNotifier) -> None:
    kv.delays = [0.01, 0.01, 0.01]
    store = _make_store(kv, notifier)

    for text in ("a", "b", "c"):
        store.add(text)
    await store.aclose()

    assert len(kv.writes) == 3
    assert store.persistence is not None and store.persistence.pending == 0


def test_write_mode_parse_falls_back_to_serial() -> None:
    assert WriteMode.parse("CONCURRENT") is WriteMode.CONCURRENT
    assert WriteMode.parse("bogus") is WriteMode.SERIAL
    assert WriteMode.parse(None) is WriteMode.SERIAL


def test_schedule_save_requires_running_loop(kv: RecordingKVStore) -> None:
    persistence = TaskListPersistence(kv, key=KEY)
    with pytest.raises(RuntimeError):
        persistence.schedule_save([])


@pytest.mark.asyncio
async def test_unencodable_list_is_reported_not_raised(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    persistence = TaskListPersistence(kv, key=KEY, notifier=notifier)

    persistence.schedule_save([Task(id="1", text="caf\udce9")])
    await persistence.aclose()

    assert kv.writes == []
    assert persistence.failed_writes == 1
    assert isinstance(persistence.last_error, PersistenceFailure)
    assert notifier.titles == ["Save failed"]


@pytest.mark.asyncio
async def test_add_rejects_unencodable_text_without_writing(
    kv: RecordingKVStore, notifier: FakeNotifier
) -> None:
    store = _make_store(kv, notifier)
    store.add("Buy milk")

    assert store.add("caf\udce9") is None
    await store.flush()

    assert [t.text for t in store.tasks] == ["Buy milk"]
    assert len(kv.writes) == 1
    assert notifier.notices == []
