# src/ticklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the presentation layer.

Commands depend on this Protocol rather than on TaskStore directly,
so tests can drive them with a fake repo.
"""

from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def add(self, title: str, deadline: str, category: str = "") -> Task: ...

    def mark_completed(self, title: str) -> bool: ...

    def delete(self, title: str) -> bool: ...

    def get(self, title: str) -> Task | None: ...

    def list_tasks(self, sort_by_deadline: bool = False) -> list[Task]: ...

    def list_completed(self) -> list[Task]: ...

    def search(self, substring: str) -> list[Task]: ...

    def filter_by_category(self, category: str) -> list[Task]: ...

    def list_categories(self) -> list[str]: ...

    def load_from_file(self, path: str | Path) -> int: ...

    def save_to_file(self, path: str | Path) -> None: ...
