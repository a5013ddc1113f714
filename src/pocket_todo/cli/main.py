# src/pocket_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, hydrates the task list once, then runs
the console connector until /exit, EOF or Ctrl+C. Pending writes are flushed
before the process exits.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        await state.store.hydrate()
        await run_console_loop(state)
    finally:
        await state.store.aclose()
        persistence = state.store.persistence
        if persistence is not None:
            logger.info(
                "Writes done ok=%d failed=%d", persistence.writes, persistence.failed_writes
            )


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
