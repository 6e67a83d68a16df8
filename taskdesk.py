# TaskDesk — Dark GUI Task Manager (Dark Mode, Purple Accent)
# -----------------------------------------------------------
# Features:
#   • Dark GUI built with CustomTkinter (purple accent theme)
#   • One in-memory project; nothing is written to disk except the theme file
#   • Task table (ID, Status, Title, Type) with a read-only detail pane
#   • "Add Task" dialog for Simple, Meeting and BugFix tasks
#   • "Mark Completed" / "Mark Later" for the selected task
#   • tkcalendar DateEntry for the meeting date
#
# Usage:
#   pip install customtkinter tkcalendar
#   python taskdesk.py
#
# Set TASKDESK_NO_DEMO=1 to start with an empty list.

import json
import logging
import os
import sys
from datetime import datetime, date

import tkinter as tk
from tkinter import messagebox

try:
    import customtkinter as ctk
except ImportError:
    print("Please install customtkinter: pip install customtkinter")
    raise

try:
    from tkcalendar import DateEntry
except ImportError:
    print("Please install tkcalendar: pip install tkcalendar")
    raise

from taskdesk_core import (
    SEED_DEMO_DATA,
    TASK_KINDS,
    NoSelectionError,
    Task,
    TaskBoard,
    TaskRow,
    TaskStatus,
    ValidationError,
    seed_demo_tasks,
)

logger = logging.getLogger(__name__)

# -------------------------------
# CONFIG
# -------------------------------
DATA_DIR = os.path.join(os.path.expanduser("~"), ".taskdesk")
THEME_FILE = os.path.join(DATA_DIR, "taskdesk_purple_theme.json")
BASE_THEME_FILE = os.path.join(os.path.dirname(ctk.__file__), "assets", "themes", "dark-blue.json")
APP_TITLE = "Task Manager"

# Purple accent on top of the bundled dark theme: [light mode, dark mode]
ACCENT_OVERRIDES = {
    "CTkButton": {
        "fg_color": ["#8B5CF6", "#6D28D9"],
        "hover_color": ["#7C3AED", "#5B21B6"],
    },
    "CTkOptionMenu": {
        "button_color": ["#8B5CF6", "#6D28D9"],
        "button_hover_color": ["#7C3AED", "#5B21B6"],
    },
    "CTkEntry": {"border_color": ["#3F3F46", "#3F3F46"]},
    "CTkTextbox": {"border_color": ["#3F3F46", "#3F3F46"]},
}

HOURS = [f"{h:02d}" for h in range(24)]
MINUTES = [f"{m:02d}" for m in range(0, 60, 5)]

STATUS_COLORS = {
    TaskStatus.PENDING: ("#312E81", "#F9FAFB"),
    TaskStatus.COMPLETED: ("#22C55E", "#0B1120"),
    TaskStatus.LATER: ("#F59E0B", "#0B1120"),
}

# Column widths for the task table: ID, Status, Title, Type
COLUMN_WIDTHS = (40, 100, 260, 90)

# -------------------------------
# Helpers
# -------------------------------

def ensure_dirs():
    os.makedirs(DATA_DIR, exist_ok=True)


def purple_theme(base: dict) -> dict:
    """Return ``base`` with the purple accent applied to the widgets TaskDesk draws."""
    theme = json.loads(json.dumps(base))
    theme["_name"] = "taskdesk-purple"
    for widget, colors in ACCENT_OVERRIDES.items():
        theme.setdefault(widget, {}).update(colors)
    return theme


def write_purple_theme_if_missing(path: str | None = None):
    """Write the purple theme next to the app settings unless it already exists.

    Starts from the dark-blue theme bundled with CustomTkinter so every key the
    widgets look up is present.
    """
    path = path or THEME_FILE
    if os.path.exists(path):
        return
    with open(BASE_THEME_FILE, "r", encoding="utf-8") as f:
        base = json.load(f)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(purple_theme(base), f, indent=2)


def setup_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr. Call once, before the window is built."""
    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    logging.captureWarnings(True)


def create_dark_date_entry(master) -> DateEntry:
    """Return a DateEntry that matches the dark UI theme."""
    entry = DateEntry(
        master,
        date_pattern='yyyy-mm-dd',
        font=("Segoe UI", 13),
        background="#1E1B4B",
        foreground="#E5E7EB",
        borderwidth=0,
        width=12,
        selectbackground="#8B5CF6",
        selectforeground="#F9FAFB",
        fieldbackground="#111827",
        normalbackground="#1E1B4B",
        normalforeground="#F9FAFB",
        headersbackground="#312E81",
        headersforeground="#E5E7EB",
    )
    try:
        entry.configure(insertbackground="#F9FAFB")
    except (tk.TclError, AttributeError):
        # Some tkcalendar builds forward unknown options to the popup Calendar.
        pass
    return entry


def make_textbox_readonly(textbox: ctk.CTkTextbox):
    """Block typing but keep selection and Ctrl+C working."""
    def block_edit(event):
        if event.state & (0x4 | 0x20000 | 0x100000):  # Control or Command
            if event.keysym.lower() in ("c", "a"):
                return None
        if event.keysym in ("Left", "Right", "Up", "Down", "Prior", "Next", "Home", "End"):
            return None
        return "break"

    textbox.configure(wrap="word")
    textbox.bind("<Key>", block_edit)
    textbox.bind("<<Paste>>", lambda _event: "break")
    textbox.bind("<<Cut>>", lambda _event: "break")


def set_textbox_text(textbox: ctk.CTkTextbox, text: str):
    textbox.delete("1.0", tk.END)
    textbox.insert("1.0", text)


# -------------------------------
# GUI Components
# -------------------------------
class TaskRowWidget(ctk.CTkFrame):
    def __init__(self, master, row: TaskRow, *, on_select=None, selected: bool = False):
        super().__init__(master)
        self.row = row
        self.on_select = on_select
        self._default_border_color = "#1E1B4B"
        self._selected_border_color = "#7C3AED"

        self.configure(
            fg_color="#0F172A",
            corner_radius=10,
            border_width=1,
            border_color=self._default_border_color,
        )

        status = TaskStatus(row.status)
        badge_bg, badge_fg = STATUS_COLORS.get(status, ("#312E81", "#F9FAFB"))
        cells = [
            ctk.CTkLabel(self, text=str(row.id), anchor="w", text_color="#C7D2FE"),
            ctk.CTkLabel(
                self,
                text=row.status,
                fg_color=badge_bg,
                text_color=badge_fg,
                corner_radius=8,
                font=("Segoe UI", 12),
            ),
            ctk.CTkLabel(self, text=row.title, anchor="w", font=("Segoe UI", 13, "bold")),
            ctk.CTkLabel(self, text=row.type_name, anchor="w", text_color="#9CA3AF"),
        ]
        for column, (cell, width) in enumerate(zip(cells, COLUMN_WIDTHS)):
            cell.configure(width=width)
            cell.grid(row=0, column=column, sticky="ew", padx=(10, 4), pady=6)
            cell.bind("<Button-1>", self._handle_click, add="+")
        self.grid_columnconfigure(2, weight=1)

        self.bind("<Button-1>", self._handle_click, add="+")
        self.set_selected(selected)

    def _handle_click(self, _event):
        if callable(self.on_select):
            self.on_select(self)

    def set_selected(self, selected: bool) -> None:
        border = self._selected_border_color if selected else self._default_border_color
        self.configure(border_color=border)


class TaskDetailPane(ctk.CTkFrame):
    def __init__(self, master):
        super().__init__(
            master,
            fg_color="#0B1220",
            corner_radius=18,
            border_width=1,
            border_color="#1E293B",
        )
        ctk.CTkLabel(
            self,
            text="Details",
            font=("Segoe UI", 16, "bold"),
            anchor="w",
        ).pack(fill="x", padx=18, pady=(18, 8))

        self.placeholder = ctk.CTkLabel(
            self,
            text="Select a task from the list to see its full details.",
            font=("Segoe UI", 13),
            text_color="#94A3B8",
            justify="left",
        )
        self.details_text = ctk.CTkTextbox(self, font=("Segoe UI", 13))
        make_textbox_readonly(self.details_text)
        self.show_details("")

    def show_details(self, text: str):
        set_textbox_text(self.details_text, text)
        if text:
            self.placeholder.pack_forget()
            if not self.details_text.winfo_manager():
                self.details_text.pack(fill="both", expand=True, padx=18, pady=(0, 18))
        else:
            self.details_text.pack_forget()
            if not self.placeholder.winfo_manager():
                self.placeholder.pack(expand=True, padx=18, pady=18)


class AddTaskDialog(ctk.CTkToplevel):
    """Modal dialog that creates one task under an id reserved by the caller."""

    def __init__(self, master, board: TaskBoard, task_id: int):
        super().__init__(master)
        self.board = board
        self.task_id = task_id
        self.result: Task | None = None

        self.title("Add Task")
        self.geometry("440x480")
        self.resizable(False, False)
        self.transient(master)
        self.grab_set()

        container = ctk.CTkFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=20, pady=16)
        container.columnconfigure(0, weight=1)
        container.rowconfigure(3, weight=1)

        ctk.CTkLabel(container, text="Title:").grid(row=0, column=0, sticky="w")
        self.title_var = tk.StringVar()
        self.title_entry = ctk.CTkEntry(container, textvariable=self.title_var)
        self.title_entry.grid(row=1, column=0, sticky="ew", pady=(0, 8))
        self.title_entry.focus_set()

        ctk.CTkLabel(container, text="Description:").grid(row=2, column=0, sticky="w")
        self.description_box = ctk.CTkTextbox(container, height=100)
        self.description_box.grid(row=3, column=0, sticky="nsew", pady=(0, 8))

        ctk.CTkLabel(container, text="Type:").grid(row=4, column=0, sticky="w")
        self.type_menu = ctk.CTkOptionMenu(
            container,
            values=list(TASK_KINDS),
            command=self._on_type_change,
        )
        self.type_menu.set(TASK_KINDS[0])
        self.type_menu.grid(row=5, column=0, sticky="w", pady=(0, 8))

        self.extra_label = ctk.CTkLabel(container, text="Extra:")
        self.extra_label.grid(row=6, column=0, sticky="w")

        self.extra_var = tk.StringVar()
        self.extra_entry = ctk.CTkEntry(container, textvariable=self.extra_var)
        self.extra_entry.grid(row=7, column=0, sticky="ew", pady=(0, 8))

        now = datetime.now()
        self.meeting_frame = ctk.CTkFrame(container, fg_color="transparent")
        self.meeting_date = create_dark_date_entry(self.meeting_frame)
        self.meeting_date.set_date(date.today())
        self.meeting_date.pack(side="left", padx=(0, 8))
        self.meeting_hour = ctk.CTkOptionMenu(self.meeting_frame, values=HOURS, width=70)
        self.meeting_hour.set(f"{now.hour:02d}")
        self.meeting_hour.pack(side="left", padx=(0, 4))
        ctk.CTkLabel(self.meeting_frame, text=":").pack(side="left")
        self.meeting_minute = ctk.CTkOptionMenu(self.meeting_frame, values=MINUTES, width=70)
        self.meeting_minute.set(f"{now.minute - now.minute % 5:02d}")
        self.meeting_minute.pack(side="left", padx=(4, 0))

        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.pack(pady=(0, 16))
        ctk.CTkButton(btns, text="Cancel", width=90, command=self._cancel).pack(side="right", padx=6)
        ctk.CTkButton(btns, text="OK", width=90, command=self._submit).pack(side="right", padx=6)

        self.bind("<Escape>", self._cancel_event)
        self.protocol("WM_DELETE_WINDOW", self._cancel)

    def _on_type_change(self, kind: str):
        if kind == "Meeting":
            self.extra_label.configure(text="Meeting Time:")
            self.extra_entry.grid_remove()
            self.meeting_frame.grid(row=7, column=0, sticky="w", pady=(0, 8))
        elif kind == "BugFix":
            self.extra_label.configure(text="Bug ID:")
            self.meeting_frame.grid_remove()
            self.extra_entry.grid()
        else:
            self.extra_label.configure(text="Extra:")
            self.meeting_frame.grid_remove()
            self.extra_entry.grid()

    def _meeting_time(self) -> datetime:
        day = self.meeting_date.get_date()
        return datetime(
            day.year,
            day.month,
            day.day,
            int(self.meeting_hour.get()),
            int(self.meeting_minute.get()),
        )

    def get_payload(self) -> dict:
        kind = self.type_menu.get()
        if kind == "Meeting":
            extra = self._meeting_time()
        elif kind == "BugFix":
            extra = self.extra_var.get().strip()
        else:
            extra = None
        return {
            "title": self.title_var.get(),
            "description": self.description_box.get("1.0", tk.END),
            "kind": kind,
            "extra": extra,
        }

    def _submit(self):
        try:
            self.result = self.board.create_task(task_id=self.task_id, **self.get_payload())
        except ValidationError as exc:
            messagebox.showwarning("Validation", str(exc), parent=self)
            self.title_entry.focus_set()
            return
        self.destroy()

    def _cancel_event(self, _event=None):
        self._cancel()

    def _cancel(self):
        self.result = None
        self.destroy()

    def show(self) -> Task | None:
        self.wait_window()
        return self.result


class TaskManagerApp(ctk.CTk):
    """Main application window."""

    def __init__(self, board: TaskBoard):
        super().__init__()
        self.board = board
        self.title(APP_TITLE)
        self.geometry("900x600")
        self.minsize(720, 480)
        self.selected_task_id: int | None = None

        # App header
        header = ctk.CTkFrame(self)
        header.pack(fill="x", padx=16, pady=(16, 8))
        ctk.CTkLabel(
            header,
            text=f"🟣 {self.board.project.name}",
            font=("Segoe UI", 20, "bold"),
        ).pack(side="left", padx=8)
        self.status_label = ctk.CTkLabel(header, text="")
        self.status_label.pack(side="right", padx=8)

        # Actions
        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.pack(fill="x", padx=16)
        ctk.CTkButton(bar, text="Add Task", width=100, command=self._add_task).pack(side="left", padx=(0, 6))
        ctk.CTkButton(bar, text="Mark Completed", width=130, command=self._mark_completed).pack(side="left", padx=6)
        ctk.CTkButton(bar, text="Mark Later", width=100, command=self._mark_later).pack(side="left", padx=6)

        # Content split: list + details
        content = ctk.CTkFrame(self, fg_color="transparent")
        content.pack(fill="both", expand=True, padx=16, pady=(8, 16))
        content.grid_columnconfigure(0, weight=2)
        content.grid_columnconfigure(1, weight=1)
        content.grid_rowconfigure(1, weight=1)

        columns = ctk.CTkFrame(content, fg_color="transparent")
        columns.grid(row=0, column=0, sticky="ew", padx=(0, 8))
        for column, (heading, width) in enumerate(zip(("ID", "Status", "Title", "Type"), COLUMN_WIDTHS)):
            ctk.CTkLabel(
                columns,
                text=heading,
                width=width,
                anchor="w",
                text_color="#9CA3AF",
                font=("Segoe UI", 12, "bold"),
            ).grid(row=0, column=column, sticky="ew", padx=(22 if column == 0 else 14, 4))
        columns.grid_columnconfigure(2, weight=1)

        self.task_list = ctk.CTkScrollableFrame(content)
        self.task_list.grid(row=1, column=0, sticky="nsew", padx=(0, 8), pady=(4, 0))

        self.detail_pane = TaskDetailPane(content)
        self.detail_pane.grid(row=0, column=1, rowspan=2, sticky="nsew", padx=(8, 0))

        self.refresh_all()

    # ----------------------- Refresh -----------------------
    def refresh_all(self):
        self._refresh_task_list()
        counts = self.board.status_counts()
        summary = " · ".join(f"{status}: {count}" for status, count in counts.items())
        self.status_label.configure(text=f"Tasks: {len(self.board)}  ({summary})")
        self._show_details(self.selected_task_id)

    def _refresh_task_list(self):
        for child in self.task_list.winfo_children():
            child.destroy()
        rows = self.board.rows()
        for row in rows:
            widget = TaskRowWidget(
                self.task_list,
                row,
                on_select=self._on_row_selected,
                selected=row.id == self.selected_task_id,
            )
            widget.pack(fill="x", padx=6, pady=4)
        if not rows:
            ctk.CTkLabel(self.task_list, text="No tasks to show.").pack(pady=12)

    def _sync_row_selection(self):
        for child in self.task_list.winfo_children():
            if isinstance(child, TaskRowWidget):
                child.set_selected(child.row.id == self.selected_task_id)

    def _on_row_selected(self, widget: TaskRowWidget):
        self.selected_task_id = widget.row.id
        self._sync_row_selection()
        self._show_details(self.selected_task_id)

    def _show_details(self, task_id: int | None):
        text = self.board.details_for(task_id)
        if text is None:
            return
        self.detail_pane.show_details(text)

    # ----------------------- Actions -----------------------
    def _add_task(self):
        task_id = self.board.reserve_id()
        task = None
        try:
            task = AddTaskDialog(self, self.board, task_id).show()
        finally:
            if task is None:
                self.board.release_id(task_id)
        if task is not None:
            self.refresh_all()

    def _mark_completed(self):
        self._change_status(self.board.mark_completed)

    def _mark_later(self):
        self._change_status(self.board.mark_later)

    def _change_status(self, action):
        try:
            task = action(self.selected_task_id)
        except NoSelectionError as exc:
            messagebox.showinfo(APP_TITLE, str(exc), parent=self)
            return
        if task is None:
            return
        self.refresh_all()


# -------------------------------
# MAIN
# -------------------------------
def main():
    setup_logging()
    ensure_dirs()
    write_purple_theme_if_missing()

    # Apply dark mode and theme
    ctk.set_appearance_mode("dark")
    try:
        ctk.set_default_color_theme(THEME_FILE)
    except Exception:
        logger.warning("Could not load %s, using built-in theme", THEME_FILE)
        ctk.set_default_color_theme("dark-blue")

    board = TaskBoard()
    if SEED_DEMO_DATA:
        seed_demo_tasks(board)
    app = TaskManagerApp(board)
    app.mainloop()


if __name__ == "__main__":
    main()
