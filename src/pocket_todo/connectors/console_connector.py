# src/pocket_todo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import format_task_list
from ..cli.commands import registry as command_registry
from ..core.events import set_input, submit_text
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleNotifier:
    """Notifier that prints a timestamped line; never blocks the loop."""

    def notify(self, title: str, message: str) -> None:
        _print_ts(f"[{title}] {message}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one line of input.

    Slash commands go to the registry; anything else is submitted as a task.
    Returns the text to show, or None when there is nothing to print.
    """
    line = line.strip()
    if not line:
        return None

    try:
        cmd_response = command_registry.handle(state, line, emit=_print_ts)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if cmd_response is not None:
        return cmd_response

    set_input(state, line)
    try:
        task = submit_text(state)
    except Exception:
        logger.exception("Adding a task crashed.")
        return "Internal error while adding a task."

    if task is None:
        state.notifier.notify("Not added", "That text can't be saved as a task.")
        return None
    return format_task_list(state)


async def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(state.settings, "app_name", "pocket-todo"))
    logger.info("Console connector started.")
    state.notifier.notify(app_name, "Type a task and press Enter. Use /help for commands, /exit to quit.")
    print(format_task_list(state), flush=True)

    while True:
        try:
            # input() blocks; run it off the loop so background writes keep flowing.
            user_input = await asyncio.to_thread(input, "> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.strip().lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            print(reply, flush=True)

        # Let freshly scheduled writes start before blocking on input again.
        await asyncio.sleep(0)

    logger.info("Console connector finished.")
