# src/ticklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState from the tasks file, runs the console
REPL, then writes the tasks file back.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskParseError

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    try:
        state = create_initial_state(settings=settings)
    except TaskParseError:
        # Unparseable file is never overwritten.
        logger.exception("Cannot read tasks file %s", settings.tasks_path)
        return 2

    try:
        run_console_loop(state)
    finally:
        ok = save_tasks(state)
        logger.info("Bye.")

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
