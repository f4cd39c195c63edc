# src/todo_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, resolves the session, then runs the
console task list until exit or sign-out.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import close_state, create_initial_state, open_session
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        if not await open_session(state):
            logger.info("No authenticated session; task list stays empty.")

        if settings.console_enabled:
            await run_console_loop(state)
        else:
            logger.info("Console disabled; loaded %s tasks.",
                        len(state.controller.cache) if state.controller else 0)
    finally:
        await close_state(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
