# src/ticklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "ticklist> "


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] | None = None,
    write: Callable[[str], None] | None = None,
) -> None:
    """
    Read commands until /exit, EOF or Ctrl+C.

    Bare text (no leading '/') is treated as a title search. `read`/`write`
    are injectable so the loop can be driven from tests.
    """
    read = read or input
    write = write or print

    logger.info("Console connector started (tasks=%s).", state.tasks_path)
    write("Type /help for commands, /exit to quit.")

    while True:
        try:
            user_input = read(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        line = user_input if user_input.startswith("/") else f"/search {user_input}"
        try:
            response = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            write(response)

    logger.info("Console connector finished.")
