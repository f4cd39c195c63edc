# src/todo_sync/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(state: AppState) -> None:
    """
    Interactive task list.

    Slash commands go to the registry; a plain line is a shortcut for
    "/add <line>". Returns when the user exits or signs out.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todo-sync"))
    logger.info("Console connector started.")

    if state.controller is None:
        _print_ts(state.notice or "Log in to see your tasks.")
        return

    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    print(render_tasks(state.controller))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            raw = await asyncio.to_thread(input, ">>> ")
            user_input = raw.strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        line = user_input if user_input.startswith("/") else f"/add {raw}"

        try:
            response = await command_registry.handle(state, line, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            print(response)

        if state.signed_out:
            # Leave the task list; the next run starts from the login step.
            _print_ts(state.notice or "Signed out.")
            break

    logger.info("Console connector finished.")
