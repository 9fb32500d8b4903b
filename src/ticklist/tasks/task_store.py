# src/ticklist/tasks/task_store.py

from __future__ import annotations

import itertools
import logging
from pathlib import Path

from .task_codec import decode_line, encode_line
from .task_models import Task, TaskParseError, deadline_key

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store backed by a flat text file.

    Layout:
    - every task lives in an arena keyed by a generated id
    - active / completed sequences hold arena ids in order
    - the title index maps a title to the newest active id with that title
    - categories remember every non-empty category ever added (never shrinks)

    Adding a title that is already active keeps both entries in the active
    sequence; only the newest one is reachable through the title index.

    Not thread-safe.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._active: list[int] = []
        self._completed: list[int] = []
        self._by_title: dict[str, int] = {}
        self._categories: set[str] = set()

    def __len__(self) -> int:
        return len(self._active)

    # ---- low-level helpers ----

    def _store(self, task: Task) -> int:
        task_id = next(self._ids)
        self._tasks[task_id] = task
        return task_id

    def _insert_active(self, task: Task) -> Task:
        task_id = self._store(task)
        self._active.append(task_id)
        self._by_title[task.title] = task_id
        if task.category:
            self._categories.add(task.category)
        return task

    def _insert_completed(self, task: Task) -> None:
        self._completed.append(self._store(task))

    # ---- mutations ----

    def add(self, title: str, deadline: str, category: str = "") -> Task:
        if title in self._by_title:
            logger.debug("Duplicate title %r; index now points at the newest task", title)
        task = self._insert_active(Task(title=title, deadline=deadline, category=category or ""))
        logger.debug("Task added title=%r deadline=%s category=%r", title, deadline, task.category)
        return task

    def mark_completed(self, title: str) -> bool:
        task_id = self._by_title.pop(title, None)
        if task_id is None:
            logger.debug("mark_completed: no active task titled %r", title)
            return False

        task = self._tasks[task_id]
        task.mark_completed()
        self._completed.append(task_id)
        self._active.remove(task_id)
        logger.debug("Task completed title=%r", title)
        return True

    def delete(self, title: str) -> bool:
        task_id = self._by_title.pop(title, None)
        if task_id is None:
            logger.debug("delete: no active task titled %r", title)
            return False

        self._active.remove(task_id)
        del self._tasks[task_id]
        logger.debug("Task deleted title=%r", title)
        return True

    # ---- queries ----

    def get(self, title: str) -> Task | None:
        task_id = self._by_title.get(title)
        return self._tasks[task_id] if task_id is not None else None

    def list_tasks(self, sort_by_deadline: bool = False) -> list[Task]:
        """
        Active tasks in insertion order, or ascending by deadline.

        Sorting works on a copy and is stable. A malformed deadline raises
        DeadlineParseError and nothing is returned.
        """
        tasks = [self._tasks[i] for i in self._active]
        if sort_by_deadline:
            tasks.sort(key=lambda t: deadline_key(t.deadline))
        return tasks

    def list_completed(self) -> list[Task]:
        return [self._tasks[i] for i in self._completed]

    def search(self, substring: str) -> list[Task]:
        return [t for t in self.list_tasks() if substring in t.title]

    def filter_by_category(self, category: str) -> list[Task]:
        return [t for t in self.list_tasks() if t.category == category]

    def list_categories(self) -> list[str]:
        return sorted(self._categories)

    # ---- persistence ----

    def save_to_file(self, path: str | Path) -> None:
        """
        Overwrite `path` with active tasks, then completed ones (DONE:-prefixed).

        OSError propagates to the caller; in-memory state is not touched.
        """
        path = Path(path)
        lines = [encode_line(t) for t in self.list_tasks()]
        lines += [encode_line(t, done=True) for t in self.list_completed()]

        with path.open("w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line + "\n")

        logger.debug(
            "Saved tasks file=%s active=%d completed=%d",
            path,
            len(self._active),
            len(self._completed),
        )

    def load_from_file(self, path: str | Path) -> int:
        """
        Append tasks from `path` to this store and return how many were read.

        A missing or unreadable file yields nothing. DONE: lines go straight
        into the completed sequence and are not reachable by title.

        Content that is not UTF-8, or a line with fewer than three fields,
        raises TaskParseError and leaves the store unchanged. Lines end at
        '\\n' only.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            logger.info("No tasks file at %s; starting empty", path)
            return 0
        except UnicodeDecodeError as e:
            raise TaskParseError(f"{path} is not valid UTF-8: {e.reason}") from e
        except OSError:
            logger.warning("Tasks file %s is unreadable; starting empty", path, exc_info=True)
            return 0

        decoded: list[tuple[Task, bool]] = []
        for line_no, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            decoded.append(decode_line(line, line_no=line_no))

        for task, done in decoded:
            if done:
                self._insert_completed(task)
            else:
                self._insert_active(task)
        loaded = len(decoded)

        logger.info(
            "Loaded tasks file=%s total=%d active=%d completed=%d",
            path,
            loaded,
            len(self._active),
            len(self._completed),
        )
        return loaded
