# src/ticklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


class TaskError(Exception):
    """Base error for the task store."""


class DeadlineParseError(TaskError, ValueError):
    """Deadline string is not in DD.MM.YYYY shape."""


class TaskParseError(TaskError, ValueError):
    """A persisted line could not be decoded into a task."""

    def __init__(self, message: str, *, line_no: int | None = None, line: str = "") -> None:
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no
        self.line = line


@dataclass(slots=True)
class Task:
    """
    One to-do entry.

    `category` is an empty string for uncategorized tasks.
    """

    title: str
    deadline: str
    category: str = ""
    completed: bool = False

    def mark_completed(self) -> None:
        self.completed = True

    def combine(self, other: Task) -> Task:
        """Join two tasks into a new one ("A & B"), keeping this task's deadline."""
        return Task(title=f"{self.title} & {other.title}", deadline=self.deadline)


def deadline_key(deadline: str) -> int:
    """
    Ordering key for a DD.MM.YYYY deadline: the integer YYYYMMDD.

    Single-digit day/month are zero-padded. No calendar validation.
    """
    parts = deadline.split(".")
    if len(parts) < 3:
        raise DeadlineParseError(f"deadline must look like DD.MM.YYYY, got {deadline!r}")

    day, month, year = parts[0], parts[1], parts[2]
    if not (day and month and year):
        raise DeadlineParseError(f"deadline has empty parts: {deadline!r}")
    if len(day) == 1:
        day = "0" + day
    if len(month) == 1:
        month = "0" + month

    raw = year + month + day
    if not raw.isdecimal():
        raise DeadlineParseError(f"deadline has non-numeric parts: {deadline!r}")
    return int(raw)
