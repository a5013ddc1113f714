# src/pocket_todo/tasks/task_codec.py

"""
Wire format of the persisted task list.

The whole list is one JSON array of records, UTF-8 encoded:

    [{"id": "...", "text": "...", "isCompleted": false}, ...]

Field names match the blobs written by the mobile app under `@TodoList:tasks`,
so an exported store can be read as-is. Decoding is all-or-nothing: a single
bad record rejects the blob.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .task_models import Task

RECORD_FIELDS = frozenset({"id", "text", "isCompleted"})


class TaskDecodeError(ValueError):
    """Blob is not a valid serialized task list."""


def is_storable_text(value: str) -> bool:
    """True if `value` survives UTF-8 encoding (no lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def task_to_record(task: Task) -> dict[str, Any]:
    return {"id": task.id, "text": task.text, "isCompleted": task.is_completed}


def record_to_task(raw: Any, index: int = 0) -> Task:
    if not isinstance(raw, dict):
        raise TaskDecodeError(f"record {index}: expected an object, got {type(raw).__name__}")

    keys = set(raw)
    if keys != RECORD_FIELDS:
        missing = sorted(RECORD_FIELDS - keys)
        extra = sorted(keys - RECORD_FIELDS)
        raise TaskDecodeError(f"record {index}: missing={missing} extra={extra}")

    task_id = raw["id"]
    text = raw["text"]
    done = raw["isCompleted"]

    if not isinstance(task_id, str) or not task_id:
        raise TaskDecodeError(f"record {index}: id must be a non-empty string")
    if not isinstance(text, str) or not text.strip() or text != text.strip():
        raise TaskDecodeError(f"record {index}: text must be a non-empty trimmed string")
    # JSON escapes can smuggle in lone surrogates that UTF-8 cannot re-encode.
    if not is_storable_text(task_id) or not is_storable_text(text):
        raise TaskDecodeError(f"record {index}: id and text must be valid unicode")
    # bool check must be exact: JSON 0/1 would otherwise pass as completion flags.
    if type(done) is not bool:
        raise TaskDecodeError(f"record {index}: isCompleted must be a boolean")

    return Task(id=task_id, text=text, is_completed=done)


def encode_tasks(tasks: Iterable[Task]) -> bytes:
    records = [task_to_record(t) for t in tasks]
    return json.dumps(records, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode_tasks(blob: bytes) -> list[Task]:
    try:
        text = blob.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TaskDecodeError(f"blob is not UTF-8: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TaskDecodeError(f"blob is not JSON: {e}") from e
    except RecursionError as e:
        raise TaskDecodeError("blob is nested too deeply") from e

    if not isinstance(data, list):
        raise TaskDecodeError(f"expected a JSON array, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[str] = set()
    for i, raw in enumerate(data):
        task = record_to_task(raw, i)
        if task.id in seen:
            raise TaskDecodeError(f"record {i}: duplicate id {task.id!r}")
        seen.add(task.id)
        tasks.append(task)
    return tasks
