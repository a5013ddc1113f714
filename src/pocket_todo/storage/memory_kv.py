# src/pocket_todo/storage/memory_kv.py

from __future__ import annotations


class MemoryKVStore:
    """Dict-backed key-value store. Nothing survives the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self.data: dict[str, bytes] = dict(initial or {})

    async def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"value must be bytes, got {type(value).__name__}")
        self.data[key] = bytes(value)
