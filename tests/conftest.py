# tests/conftest.py

from __future__ import annotations

from datetime import datetime

import pytest

from taskdesk_core import TaskBoard


@pytest.fixture()
def meeting_time() -> datetime:
    return datetime(2025, 3, 14, 9, 30)


@pytest.fixture()
def board() -> TaskBoard:
    """Empty board; every test starts with ids at 1."""
    return TaskBoard()


@pytest.fixture()
def scenario_board(board: TaskBoard, meeting_time: datetime) -> TaskBoard:
    """Write report / Standup / Fix crash, the first Completed, the second Later."""
    report = board.create_task("Write report", "")
    standup = board.create_task("Standup", "", "Meeting", meeting_time)
    board.create_task("Fix crash", "", "BugFix", "BUG-9")
    board.mark_completed(report.id)
    board.mark_later(standup.id)
    return board
