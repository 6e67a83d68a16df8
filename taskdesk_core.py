# TaskDesk core — tasks, project ordering and detail text
# -----------------------------------------------------------
# Everything the desktop window needs that is not a widget:
#   • Task envelope (id, title, description, status) + one of three kinds
#       (Simple, Meeting with a meeting time, BugFix with a bug id)
#   • TaskStore (id lookup) and Project (display order), kept in step by
#       TaskBoard so both always hold the same Task objects
#   • Creation workflow with title validation and contiguous id handout
#   • Detail text for the selected task
#
# This module does not import tkinter, so it can be used (and tested) without
# a display.

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import NamedTuple, Union

logger = logging.getLogger(__name__)

# -------------------------------
# CONFIG
# -------------------------------
PROJECT_NAME = "Default Project"
TASK_KINDS = ("Simple", "Meeting", "BugFix")
MEETING_TIME_FORMAT = "%Y-%m-%d %H:%M"
SEED_DEMO_DATA = os.environ.get("TASKDESK_NO_DEMO", "") not in ("1", "true", "yes")


# -------------------------------
# Errors
# -------------------------------
class TaskDeskError(Exception):
    """Base class for errors the window reports to the user."""


class ValidationError(TaskDeskError, ValueError):
    """Raised when a task cannot be built from the entered fields."""


class NoSelectionError(TaskDeskError):
    """Raised when a status action is triggered without a selected task."""


# -------------------------------
# Model
# -------------------------------
class TaskStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    LATER = "Later"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SimpleKind:
    label = "Simple"


@dataclass(frozen=True)
class MeetingKind:
    meeting_time: datetime
    label = "Meeting"


@dataclass(frozen=True)
class BugFixKind:
    bug_id: str
    label = "BugFix"


TaskKind = Union[SimpleKind, MeetingKind, BugFixKind]


@dataclass
class Task:
    """A single task.

    ``kind`` is fixed at construction and carries the only per-variant data.
    ``status`` starts as Pending and is changed only through the mark methods;
    any status may follow any other.
    """

    id: int
    title: str
    description: str
    kind: TaskKind
    status: TaskStatus = TaskStatus.PENDING

    @property
    def type_name(self) -> str:
        return self.kind.label

    def mark_completed(self) -> None:
        self.status = TaskStatus.COMPLETED

    def mark_later(self) -> None:
        self.status = TaskStatus.LATER


def format_meeting_time(value: datetime) -> str:
    if value.second:
        return value.strftime(MEETING_TIME_FORMAT + ":%S")
    return value.strftime(MEETING_TIME_FORMAT)


def parse_meeting_time(raw: str) -> datetime | None:
    """Parse ``YYYY-MM-DD HH:MM`` (or ISO) text, returning None when unreadable."""
    if not raw:
        return None
    value = raw.strip()
    for fmt in (MEETING_TIME_FORMAT, MEETING_TIME_FORMAT + ":%S", "%Y-%m-%dT%H:%M", "%d.%m.%Y %H:%M"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


# -------------------------------
# Storage
# -------------------------------
class TaskStore:
    def __init__(self):
        self._tasks: list[Task] = []
        # id -> task, first insert wins so a reused id still resolves to the
        # earliest task, matching a linear scan of ``_tasks``.
        self._task_index: dict[int, Task] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._task_index

    def add(self, task: Task) -> None:
        self._tasks.append(task)
        self._task_index.setdefault(task.id, task)

    def get_by_id(self, task_id: int | None) -> Task | None:
        if task_id is None:
            return None
        return self._task_index.get(task_id)

    def get_all(self) -> list[Task]:
        return list(self._tasks)


@dataclass
class Project:
    name: str
    tasks: list[Task] = field(default_factory=list)

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)


class IdSequence:
    """Monotonic task ids starting at 1.

    Only the most recently reserved id can be handed back; that is all a
    cancelled dialog needs and it keeps the issued ids gap-free.
    """

    def __init__(self, start: int = 1):
        self._next = start

    def peek(self) -> int:
        return self._next

    def reserve(self) -> int:
        nid = self._next
        self._next += 1
        return nid

    def release(self, task_id: int) -> bool:
        if task_id != self._next - 1:
            return False
        self._next -= 1
        return True


# -------------------------------
# Creation workflow
# -------------------------------
def build_task(
    task_id: int,
    title: str,
    description: str = "",
    kind: str = "Simple",
    extra: datetime | str | None = None,
) -> Task:
    """Build a Pending task of the requested kind.

    ``extra`` is the meeting time for ``"Meeting"`` (a datetime or text
    ``parse_meeting_time`` reads; None means now) and the bug id for
    ``"BugFix"``; it is ignored for ``"Simple"``. The title is the only
    user-facing validation; unreadable meeting text is a caller error and
    raises ValueError.
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise ValidationError("Title is required")

    if kind == "Simple":
        task_kind: TaskKind = SimpleKind()
    elif kind == "Meeting":
        if extra is None:
            meeting_time = datetime.now().replace(second=0, microsecond=0)
        elif isinstance(extra, datetime):
            meeting_time = extra
        else:
            meeting_time = parse_meeting_time(str(extra))
            if meeting_time is None:
                raise ValueError(f"Unreadable meeting time: {extra!r}")
        task_kind = MeetingKind(meeting_time)
    elif kind == "BugFix":
        task_kind = BugFixKind("" if extra is None else str(extra))
    else:
        raise ValueError(f"Unknown task type: {kind!r}")

    return Task(
        id=task_id,
        title=clean_title,
        description=(description or "").strip(),
        kind=task_kind,
    )


# -------------------------------
# Detail text
# -------------------------------
def format_task_details(task: Task) -> str:
    details = (
        f"ID: {task.id}\n"
        f"Title: {task.title}\n"
        f"Status: {task.status}\n"
        "\n"
        "Description:\n"
        f"{task.description}\n"
    )
    kind = task.kind
    if isinstance(kind, MeetingKind):
        details += f"\nMeeting Time: {format_meeting_time(kind.meeting_time)}"
    elif isinstance(kind, BugFixKind):
        details += f"\nBug ID: {kind.bug_id}"
    return details


def details_for(store: TaskStore, task_id: int | None) -> str | None:
    """Detail text for the selected id.

    No selection gives an empty string; an id the store does not know gives
    None so the caller can leave its current text alone.
    """
    if task_id is None:
        return ""
    task = store.get_by_id(task_id)
    if task is None:
        return None
    return format_task_details(task)


class TaskRow(NamedTuple):
    id: int
    status: str
    title: str
    type_name: str


def task_row(task: Task) -> TaskRow:
    return TaskRow(task.id, str(task.status), task.title, task.type_name)


# -------------------------------
# Board
# -------------------------------
class TaskBoard:
    """One project, its store and id sequence, updated together."""

    def __init__(self, project_name: str = PROJECT_NAME):
        self.project = Project(project_name)
        self.store = TaskStore()
        self.ids = IdSequence()

    def __len__(self) -> int:
        return len(self.store)

    def reserve_id(self) -> int:
        return self.ids.reserve()

    def release_id(self, task_id: int) -> None:
        if self.ids.release(task_id):
            logger.debug("Released task id %s", task_id)

    def add_task(self, task: Task) -> Task:
        self.project.add_task(task)
        self.store.add(task)
        logger.info("Added %s task %s: %s", task.type_name, task.id, task.title)
        return task

    def create_task(
        self,
        title: str,
        description: str = "",
        kind: str = "Simple",
        extra: datetime | str | None = None,
        *,
        task_id: int | None = None,
    ) -> Task:
        owns_id = task_id is None
        tid = self.reserve_id() if owns_id else task_id
        try:
            task = build_task(tid, title, description, kind, extra)
        except Exception:
            if owns_id:
                self.release_id(tid)
            raise
        return self.add_task(task)

    def get_task(self, task_id: int | None) -> Task | None:
        return self.store.get_by_id(task_id)

    def tasks(self) -> list[Task]:
        return list(self.project.tasks)

    def rows(self) -> list[TaskRow]:
        return [task_row(t) for t in self.project.tasks]

    def details_for(self, task_id: int | None) -> str | None:
        return details_for(self.store, task_id)

    def mark_completed(self, task_id: int | None) -> Task | None:
        return self._mark(task_id, TaskStatus.COMPLETED)

    def mark_later(self, task_id: int | None) -> Task | None:
        return self._mark(task_id, TaskStatus.LATER)

    def _mark(self, task_id: int | None, status: TaskStatus) -> Task | None:
        if task_id is None:
            raise NoSelectionError("Select a task first.")
        task = self.store.get_by_id(task_id)
        if task is None:
            logger.debug("Ignoring status change for unknown task id %s", task_id)
            return None
        if status is TaskStatus.COMPLETED:
            task.mark_completed()
        else:
            task.mark_later()
        logger.info("Task %s marked %s", task.id, task.status)
        return task

    def status_counts(self) -> dict[TaskStatus, int]:
        counts = {status: 0 for status in TaskStatus}
        for task in self.project.tasks:
            counts[task.status] += 1
        return counts


def seed_demo_tasks(board: TaskBoard, now: datetime | None = None) -> list[Task]:
    """Fill an empty board with the three sample tasks shown on first start."""
    now = now or datetime.now().replace(second=0, microsecond=0)
    meeting = board.create_task(
        "Team Sync",
        "Weekly alignment meeting with dev team",
        "Meeting",
        now + timedelta(days=1),
    )
    bugfix = board.create_task(
        "Fix Login Bug",
        "Resolve NullReference exception in login flow",
        "BugFix",
        "BUG-1234",
    )
    docs = board.create_task("Write Docs", "Update API documentation for auth module.")
    bugfix.mark_completed()
    docs.mark_later()
    return [meeting, bugfix, docs]
