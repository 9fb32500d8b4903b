# src/ticklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the TaskStore into AppState and fills it from the tasks file,
- writes the store back on shutdown.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    Path(settings.tasks_path).parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings and load the tasks file.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore()
    tasks_path = Path(settings.tasks_path)
    store.load_from_file(tasks_path)

    return AppState(
        settings=settings,
        task_store=store,
        tasks_path=tasks_path,
        autosave=bool(getattr(settings, "autosave", True)),
    )


def save_tasks(state: AppState) -> bool:
    """Write the store to its tasks file. Failures are logged, not raised."""
    try:
        state.task_store.save_to_file(state.tasks_path)
    except OSError:
        logger.exception("Failed to save tasks to %s", state.tasks_path)
        return False
    state.dirty = False
    return True
