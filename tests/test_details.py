# tests/test_details.py

from __future__ import annotations

from datetime import datetime

from taskdesk_core import TaskBoard, format_task_details


def test_no_selection_gives_empty_text(board: TaskBoard) -> None:
    board.create_task("Only")
    assert board.details_for(None) == ""


def test_unknown_id_gives_no_text(board: TaskBoard) -> None:
    assert board.details_for(5) is None


def test_simple_details_have_no_extra_line(board: TaskBoard) -> None:
    task = board.create_task("Write report", "Quarterly numbers")
    text = format_task_details(task)
    assert text == (
        "ID: 1\n"
        "Title: Write report\n"
        "Status: Pending\n"
        "\n"
        "Description:\n"
        "Quarterly numbers\n"
    )
    assert "Meeting Time" not in text
    assert "Bug ID" not in text


def test_meeting_details_include_time(board: TaskBoard, meeting_time: datetime) -> None:
    task = board.create_task("Standup", "", "Meeting", meeting_time)
    text = board.details_for(task.id)
    assert text.endswith("\nMeeting Time: 2025-03-14 09:30")
    assert "Bug ID" not in text


def test_bugfix_details_include_bug_id(board: TaskBoard) -> None:
    task = board.create_task("Fix crash", "", "BugFix", "BUG-9")
    text = board.details_for(task.id)
    assert text.endswith("\nBug ID: BUG-9")
    assert "Meeting Time" not in text


def test_empty_bug_id_still_gets_a_line(board: TaskBoard) -> None:
    task = board.create_task("Fix crash", "", "BugFix", "")
    assert board.details_for(task.id).endswith("\nBug ID: ")


def test_meeting_details_keep_seconds(board: TaskBoard) -> None:
    task = board.create_task("Standup", "", "Meeting", datetime(2025, 3, 14, 9, 30, 45))
    assert "Meeting Time: 2025-03-14 09:30:45" in board.details_for(task.id)
