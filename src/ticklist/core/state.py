# src/ticklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are kept on the state so commands can read them without globals.
    settings: object

    task_store: TaskRepo
    tasks_path: Path
    autosave: bool = True

    # Set by mutating commands, cleared after a successful save.
    dirty: bool = False
