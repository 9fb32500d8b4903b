# src/ticklist/tasks/task_codec.py

"""
Line codec for the tasks file.

One task per line, fields separated by ';':
- plain:        title;deadline;flag
- categorized:  title;deadline;flag;category

`flag` is "1" or "0". Completed tasks carry a leading "DONE:" marker.
Separators inside fields are not escaped, so a ';' in a title or category
does not survive a save/load cycle.
"""

from __future__ import annotations

from .task_models import Task, TaskParseError

SEP = ";"
DONE_MARKER = "DONE:"


def encode_line(task: Task, *, done: bool = False) -> str:
    fields = [task.title, task.deadline, "1" if task.completed else "0"]
    if task.category:
        fields.append(task.category)
    line = SEP.join(fields)
    return DONE_MARKER + line if done else line


def decode_line(line: str, *, line_no: int | None = None) -> tuple[Task, bool]:
    """
    Parse one line (without its newline) into (task, done).

    `done` reports whether the DONE: marker was present; `task.completed`
    comes from the flag field.
    """
    raw = line
    done = raw.startswith(DONE_MARKER)
    if done:
        raw = raw[len(DONE_MARKER) :]

    fields = raw.split(SEP)
    if len(fields) < 3:
        raise TaskParseError(
            f"expected at least 3 ';'-separated fields, got {len(fields)}",
            line_no=line_no,
            line=line,
        )

    title, deadline, flag = fields[0], fields[1], fields[2]
    category = fields[3] if len(fields) > 3 else ""
    task = Task(title=title, deadline=deadline, category=category, completed=flag == "1")
    return task, done
