"""
Persistence adapters (key -> bytes).

- memory_kv.py: in-process dict, for tests and throwaway sessions
- sqlite_kv.py: durable single-file SQLite store
"""

from __future__ import annotations

from pathlib import Path

from ..core.ports import KeyValueStore
from .memory_kv import MemoryKVStore
from .sqlite_kv import SqliteKVStore

__all__ = ["MemoryKVStore", "SqliteKVStore", "open_kv_store"]


def open_kv_store(backend: str, path: str | Path) -> KeyValueStore:
    b = (backend or "").strip().lower()
    if b == "memory":
        return MemoryKVStore()
    if b == "sqlite":
        return SqliteKVStore(path)
    raise ValueError(f"Unknown store backend: {backend!r} (expected 'sqlite' or 'memory')")
