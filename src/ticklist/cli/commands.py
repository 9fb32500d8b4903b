# src/ticklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..core.state import AppState
from ..tasks.task_models import DeadlineParseError, Task

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

ARG_SEP = "|"


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        The argument text after the command name is passed through as-is
        (stripped), since task titles may contain spaces.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name.lower())
        if not handler:
            return f"Unknown command: /{name.lower()}. Use /help to list available commands."

        return handler(state, rest.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_task(task: Task) -> str:
    line = f"{'[X] ' if task.completed else '[ ] '}{task.title:<20} | Due: {task.deadline:<12}"
    if task.category:
        line += f" | Category: {task.category}"
    return line


def format_tasks(tasks: Iterable[Task], empty: str = "No tasks.") -> str:
    lines = [format_task(t) for t in tasks]
    return "\n".join(lines) if lines else empty


def _split_args(arg: str) -> list[str]:
    return [p.strip() for p in arg.split(ARG_SEP)]


def _persist(state: AppState) -> str | None:
    """Save after a mutation when autosave is on. Returns an error note on failure."""
    state.dirty = True
    if not state.autosave:
        return None
    try:
        state.task_store.save_to_file(state.tasks_path)
    except OSError:
        logger.exception("Autosave to %s failed", state.tasks_path)
        return f"(could not save to {state.tasks_path}; changes are kept in memory)"
    state.dirty = False
    return None


def _with_note(reply: str, note: str | None) -> str:
    return f"{reply}\n{note}" if note else reply


# ---- commands ----


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, arg: str) -> str:
    """
    /add <title> | <DD.MM.YYYY>
    /add <title> | <DD.MM.YYYY> | <category>
    """
    parts = _split_args(arg)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return "Usage: /add <title> | <DD.MM.YYYY> [| <category>]"

    title, deadline = parts[0], parts[1]
    category = parts[2] if len(parts) > 2 else ""
    task = state.task_store.add(title, deadline, category)
    return _with_note(f"Added: {format_task(task)}", _persist(state))


def cmd_list(state: AppState, arg: str) -> str:
    return format_tasks(state.task_store.list_tasks())


def cmd_sorted(state: AppState, arg: str) -> str:
    try:
        tasks = state.task_store.list_tasks(sort_by_deadline=True)
    except DeadlineParseError as e:
        logger.info("Sort by deadline aborted: %s", e)
        return f"Cannot sort: {e}"
    return format_tasks(tasks)


def cmd_done(state: AppState, arg: str) -> str:
    if not arg:
        return "Usage: /done <title>"
    if not state.task_store.mark_completed(arg):
        return f"No active task titled {arg!r}."
    return _with_note(f"Completed: {arg}", _persist(state))


def cmd_rm(state: AppState, arg: str) -> str:
    if not arg:
        return "Usage: /rm <title>"
    if not state.task_store.delete(arg):
        return f"No active task titled {arg!r}."
    return _with_note(f"Deleted: {arg}", _persist(state))


def cmd_completed(state: AppState, arg: str) -> str:
    return format_tasks(state.task_store.list_completed(), empty="No completed tasks.")


def cmd_search(state: AppState, arg: str) -> str:
    if not arg:
        return "Usage: /search <text>"
    return format_tasks(state.task_store.search(arg), empty=f"Nothing matches {arg!r}.")


def cmd_cats(state: AppState, arg: str) -> str:
    cats = state.task_store.list_categories()
    if not cats:
        return "No categories yet."
    return "\n".join(["Available categories:"] + [f" - {c}" for c in cats])


def cmd_cat(state: AppState, arg: str) -> str:
    """
    /cat <category>  -> tasks in that category
    /cat             -> list categories to choose from
    """
    if not arg:
        return cmd_cats(state, arg)
    tasks = state.task_store.filter_by_category(arg)
    return f"Tasks in category {arg}:\n" + format_tasks(tasks)


def cmd_merge(state: AppState, arg: str) -> str:
    """/merge <title> | <title> -> add "<first> & <second>" due on the first task's deadline."""
    parts = _split_args(arg)
    if len(parts) != 2 or not all(parts):
        return "Usage: /merge <title> | <title>"

    first = state.task_store.get(parts[0])
    second = state.task_store.get(parts[1])
    missing = [t for t, task in zip(parts, (first, second)) if task is None]
    if missing:
        return "No active task titled " + ", ".join(repr(m) for m in missing) + "."

    combined = first.combine(second)
    task = state.task_store.add(combined.title, combined.deadline, combined.category)
    return _with_note(f"Added: {format_task(task)}", _persist(state))


def cmd_save(state: AppState, arg: str) -> str:
    try:
        state.task_store.save_to_file(state.tasks_path)
    except OSError as e:
        logger.exception("Save to %s failed", state.tasks_path)
        return f"Save failed: {e}"
    state.dirty = False
    return f"Saved to {state.tasks_path}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <title> | <DD.MM.YYYY> [| <category>]."
)
registry.register("list", cmd_list, help_text="Show active tasks.", aliases=["ls"])
registry.register("sorted", cmd_sorted, help_text="Show active tasks sorted by deadline.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <title>.")
registry.register("rm", cmd_rm, help_text="Delete an active task: /rm <title>.", aliases=["del"])
registry.register("completed", cmd_completed, help_text="Show completed tasks.")
registry.register("search", cmd_search, help_text="Find tasks by title text: /search <text>.")
registry.register("cat", cmd_cat, help_text="Show tasks in a category: /cat <category>.")
registry.register("cats", cmd_cats, help_text="List known categories.")
registry.register(
    "merge", cmd_merge, help_text="Combine two tasks into a new one: /merge <title> | <title>."
)
registry.register("save", cmd_save, help_text="Write tasks to the tasks file now.")
