# tests/test_task_persistence.py

from __future__ import annotations

from pathlib import Path

import pytest

from ticklist.tasks.task_models import Task, TaskParseError
from ticklist.tasks.task_store import TaskStore


def _snapshot(store: TaskStore) -> tuple[list[Task], list[Task], list[str]]:
    return store.list_tasks(), store.list_completed(), store.list_categories()


def test_save_writes_active_then_done_lines(tmp_path: Path) -> None:
    store = TaskStore()
    store.add("Buy milk", "01.05.2024")
    store.add("Pay rent", "03.05.2024", "home")
    store.add("Walk dog", "29.04.2024", "home")
    store.mark_completed("Pay rent")

    path = tmp_path / "tasks.txt"
    store.save_to_file(path)

    assert path.read_text("utf-8").splitlines() == [
        "Buy milk;01.05.2024;0",
        "Walk dog;29.04.2024;0;home",
        "DONE:Pay rent;03.05.2024;1;home",
    ]


def test_save_overwrites_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("old;01.01.2000;0\n" * 5, "utf-8")

    store = TaskStore()
    store.add("new", "02.02.2024")
    store.save_to_file(path)

    assert path.read_text("utf-8") == "new;02.02.2024;0\n"


def test_round_trip_preserves_order_and_state(tmp_path: Path) -> None:
    store = TaskStore()
    store.add("c", "03.01.2024", "work")
    store.add("a", "01.01.2024")
    store.add("b", "02.01.2024", "home")
    store.add("d", "04.01.2024", "errands")
    store.mark_completed("d")
    store.mark_completed("a")

    path = tmp_path / "tasks.txt"
    store.save_to_file(path)

    fresh = TaskStore()
    assert fresh.load_from_file(path) == 4
    assert fresh.list_tasks() == store.list_tasks()
    assert fresh.list_completed() == store.list_completed()

    # categories of DONE: lines are not recorded on load
    assert store.list_categories() == ["errands", "home", "work"]
    assert fresh.list_categories() == ["home", "work"]


def test_load_missing_file_yields_empty_store(tmp_path: Path) -> None:
    store = TaskStore()
    assert store.load_from_file(tmp_path / "nope.txt") == 0
    assert store.list_tasks() == []
    assert store.list_completed() == []


def test_load_directory_path_is_treated_as_empty(tmp_path: Path) -> None:
    store = TaskStore()
    assert store.load_from_file(tmp_path) == 0
    assert len(store) == 0


def test_done_lines_bypass_title_index_and_categories(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        "Walk dog;29.04.2024;0;home\n"
        "DONE:Old chore;01.01.2024;1;garage\n"
        "DONE:Plain done;02.01.2024;1\n",
        "utf-8",
    )

    store = TaskStore()
    store.load_from_file(path)

    assert [t.title for t in store.list_tasks()] == ["Walk dog"]
    assert [t.title for t in store.list_completed()] == ["Old chore", "Plain done"]
    assert all(t.completed for t in store.list_completed())
    assert store.get("Old chore") is None
    assert store.search("Old") == []
    assert store.mark_completed("Old chore") is False
    assert store.list_categories() == ["home"]


def test_load_keeps_flag_from_file_for_active_lines(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("odd;01.01.2024;1\n", "utf-8")

    store = TaskStore()
    store.load_from_file(path)

    (task,) = store.list_tasks()
    assert task.completed is True
    assert store.get("odd") is task


def test_load_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("a;01.01.2024;0\n\n   \nb;02.01.2024;0\n", "utf-8")

    store = TaskStore()
    assert store.load_from_file(path) == 2
    assert [t.title for t in store.list_tasks()] == ["a", "b"]


def test_load_malformed_line_reports_line_number(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text("a;01.01.2024;0;work\nbroken line\n", "utf-8")

    store = TaskStore()
    with pytest.raises(TaskParseError) as exc_info:
        store.load_from_file(path)

    assert exc_info.value.line_no == 2
    assert exc_info.value.line == "broken line"

    # nothing from the good lines before it is kept
    assert store.list_tasks() == []
    assert store.get("a") is None
    assert store.list_categories() == []


def test_load_non_utf8_file_raises_and_keeps_store(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_bytes(b"Caf\xe9 run;01.05.2024;0\nPay rent;03.05.2024;0;home\n")

    store = TaskStore()
    store.add("existing", "01.01.2024")
    with pytest.raises(TaskParseError):
        store.load_from_file(path)

    assert [t.title for t in store.list_tasks()] == ["existing"]


def test_load_splits_on_newline_only(tmp_path: Path) -> None:
    store = TaskStore()
    store.add("form\x0cfeed", "01.01.2024")
    store.add("carriage\rreturn", "02.01.2024", "odd cat")

    path = tmp_path / "tasks.txt"
    store.save_to_file(path)

    fresh = TaskStore()
    assert fresh.load_from_file(path) == 2
    assert fresh.list_tasks() == store.list_tasks()


def test_save_to_unwritable_path_raises_and_keeps_store(tmp_path: Path) -> None:
    store = TaskStore()
    store.add("a", "01.01.2024", "x")
    before = _snapshot(store)

    with pytest.raises(OSError):
        store.save_to_file(tmp_path / "missing-dir" / "tasks.txt")

    assert _snapshot(store) == before
