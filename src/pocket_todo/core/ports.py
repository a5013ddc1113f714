# src/pocket_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends and user-facing notification swappable and lets
tests run against in-memory fakes.
"""

from typing import Awaitable, Protocol


class KeyValueStore(Protocol):
    """
    Persistence adapter: opaque bytes under string keys.

    - get() returns None when the key was never written.
    - set() raises on failure; callers decide how to report it.
    """

    def get(self, key: str) -> Awaitable[bytes | None]: ...

    def set(self, key: str, value: bytes) -> Awaitable[None]: ...


class Notifier(Protocol):
    """Non-blocking user-visible notification (alert, toast, console line)."""

    def notify(self, title: str, message: str) -> None: ...
