# src/pocket_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.events import delete_task, submit_text, toggle_task
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%d", name, len(args))
        return handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Anything else you type is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task_list(state: AppState) -> str:
    tasks = state.store.tasks
    if not tasks:
        return "No tasks yet. Type something to add one."
    lines = []
    for i, task in enumerate(tasks, start=1):
        mark = "x" if task.is_completed else " "
        lines.append(f"{i:>3}. [{mark}] {task.text}")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return format_task_list(state)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task = submit_text(state, " ".join(args))
    if task is None:
        return "Nothing to add: the task text is empty or not valid text."
    return format_task_list(state)


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /done 2        -> toggle the second task as displayed
    /done <id>     -> toggle by id
    """
    if not args:
        return "Usage: /done <number|id>"
    task = toggle_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r}. Use /list to see numbers."
    return format_task_list(state)


def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /del <number|id>"
    task = delete_task(state, args[0])
    if task is None:
        return f"No task {args[0]!r}. Use /list to see numbers."
    if emit is not None:
        emit(f"Deleted: {task.text}")
    return format_task_list(state)


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    pending, done = state.store.counts()
    settings = state.settings
    persistence = state.store.persistence
    lines = [
        "Status:",
        f"  Tasks: {pending} pending, {done} completed",
        f"  Store: {getattr(settings, 'store_backend', '?')} ({getattr(settings, 'store_path', '-')})",
    ]
    if persistence is not None:
        lines.append(f"  Key: {persistence.key}")
        lines.append(
            f"  Writes: {persistence.writes} ok, {persistence.failed_writes} failed "
            f"({persistence.write_mode.value})"
        )
    if state.store.hydration_error is not None:
        lines.append(f"  Load error: {state.store.hydration_error}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks, newest first.", aliases=["ls", "l"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register(
    "done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["toggle", "x"]
)
registry.register("del", cmd_del, help_text="Delete a task: /del <number|id>.", aliases=["delete", "rm"])
registry.register("status", cmd_status, help_text="Show task counts and storage state.")
