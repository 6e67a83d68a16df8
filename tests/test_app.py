# tests/test_app.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

tk = pytest.importorskip("tkinter")
pytest.importorskip("customtkinter")
pytest.importorskip("tkcalendar")

import taskdesk  # noqa: E402
from taskdesk_core import TaskBoard  # noqa: E402


def _window(board: TaskBoard) -> SimpleNamespace:
    """Stand-in for the main window; only what ``_add_task`` touches."""
    return SimpleNamespace(board=board, refresh_all=lambda: None)


def test_purple_theme_keeps_bundled_keys() -> None:
    with open(taskdesk.BASE_THEME_FILE, "r", encoding="utf-8") as f:
        base = json.load(f)
    theme = taskdesk.purple_theme(base)
    assert set(base) <= set(theme)
    assert set(base["CTkButton"]) <= set(theme["CTkButton"])
    assert theme["CTkButton"]["fg_color"] == ["#8B5CF6", "#6D28D9"]
    assert theme["_name"] == "taskdesk-purple"
    assert base["CTkButton"]["fg_color"] != theme["CTkButton"]["fg_color"]


def test_theme_file_written_once(tmp_path: Path) -> None:
    path = tmp_path / "theme.json"
    taskdesk.write_purple_theme_if_missing(str(path))
    written = json.loads(path.read_text(encoding="utf-8"))
    assert written["CTkOptionMenu"]["button_color"] == ["#8B5CF6", "#6D28D9"]

    path.write_text("{}", encoding="utf-8")
    taskdesk.write_purple_theme_if_missing(str(path))
    assert path.read_text(encoding="utf-8") == "{}"


def test_add_task_releases_id_when_dialog_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenDialog:
        def __init__(self, *args, **kwargs):
            raise tk.TclError('grab failed: window not viewable')

    monkeypatch.setattr(taskdesk, "AddTaskDialog", BrokenDialog)
    board = TaskBoard()
    with pytest.raises(tk.TclError):
        taskdesk.TaskManagerApp._add_task(_window(board))
    assert board.ids.peek() == 1
    assert board.create_task("First").id == 1


def test_add_task_releases_id_on_cancel(monkeypatch: pytest.MonkeyPatch) -> None:
    class CancelledDialog:
        def __init__(self, *args, **kwargs):
            pass

        def show(self):
            return None

    monkeypatch.setattr(taskdesk, "AddTaskDialog", CancelledDialog)
    board = TaskBoard()
    taskdesk.TaskManagerApp._add_task(_window(board))
    assert board.ids.peek() == 1


def test_add_task_keeps_id_of_created_task(monkeypatch: pytest.MonkeyPatch) -> None:
    class AcceptedDialog:
        def __init__(self, master, board, task_id):
            self.board = board
            self.task_id = task_id

        def show(self):
            return self.board.create_task("Created", task_id=self.task_id)

    refreshed: list[bool] = []
    monkeypatch.setattr(taskdesk, "AddTaskDialog", AcceptedDialog)
    board = TaskBoard()
    window = SimpleNamespace(board=board, refresh_all=lambda: refreshed.append(True))
    taskdesk.TaskManagerApp._add_task(window)
    assert [row.id for row in board.rows()] == [1]
    assert board.ids.peek() == 2
    assert refreshed == [True]
