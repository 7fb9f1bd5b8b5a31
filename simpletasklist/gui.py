"""Desktop front end: main window with the filtered task table and the
new/edit task dialog. All task logic lives in the core modules; the widgets
here only forward user actions to them and redraw on change notifications.
"""

from __future__ import annotations

import logging
from datetime import date
from tkinter import filedialog, messagebox, ttk

import tkinter as tk

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

from .catalog import TagCatalog
from .config import DATE_PATTERN, DIALOG_GEOMETRY, TASK_FILE_PATTERNS, WINDOW_GEOMETRY
from .dialog import DialogSession, EditingSession, TagKind, begin_create, begin_edit
from .filters import TaskFilter
from .models import PRIORITY_CHOICES, Task
from .sorting import SortedView
from .store import TaskStore, open_task_list
from .todotxt import format_date
from .translations import Translations

logger = logging.getLogger(__name__)

FAR_FUTURE = date(9999, 12, 31)

COLUMNS = ("status", "priority", "due", "description", "context", "project")

# Missing priorities and due dates go to the end.
COLUMN_KEYS = {
    "status": lambda t: t.done,
    "priority": lambda t: t.priority_index or len(PRIORITY_CHOICES),
    "due": lambda t: t.due or FAR_FUTURE,
    "description": lambda t: t.description.lower(),
    "context": lambda t: [tag.lower() for tag in t.context],
    "project": lambda t: [tag.lower() for tag in t.project],
}


def create_dark_date_entry(master) -> DateEntry:
    """Return a DateEntry that matches the dark UI theme."""
    entry = DateEntry(
        master,
        date_pattern=DATE_PATTERN,
        background="#1E293B",
        foreground="#E5E7EB",
        borderwidth=0,
        width=14,
        selectbackground="#2563EB",
        selectforeground="#F9FAFB",
        normalbackground="#1E293B",
        normalforeground="#F9FAFB",
        headersbackground="#334155",
        headersforeground="#E5E7EB",
    )
    try:
        cal = entry._top_cal  # type: ignore[attr-defined]
        cal.configure(
            weekendbackground="#1E293B",
            weekendforeground="#F3F4F6",
            othermonthbackground="#0F172A",
            othermonthforeground="#6B7280",
        )
    except (tk.TclError, AttributeError):
        # tkcalendar internals differ between releases; keep the defaults.
        pass
    return entry


def priority_labels(tr: Translations) -> list[str]:
    return [tr["choice.priority.no"], tr["choice.priority.done"], *PRIORITY_CHOICES[2:]]


# -------------------------------
# Dialog components
# -------------------------------
class OptionalDateField(ctk.CTkFrame):
    """Date picker with a "no date" switch, since DateEntry cannot be empty."""

    def __init__(self, master, *, no_date_text: str):
        super().__init__(master, fg_color="transparent")
        self.entry = create_dark_date_entry(self)
        self.entry.pack(side="left")
        self.empty_var = tk.BooleanVar(value=False)
        ctk.CTkCheckBox(
            self,
            text=no_date_text,
            variable=self.empty_var,
            command=self._update_state,
        ).pack(side="left", padx=(12, 0))

    def _update_state(self):
        self.entry.configure(state="disabled" if self.empty_var.get() else "normal")

    def set(self, value: date | None):
        self.empty_var.set(value is None)
        self.entry.configure(state="normal")
        self.entry.set_date(value or date.today())
        self._update_state()

    def get(self) -> date | None:
        if self.empty_var.get():
            return None
        return self.entry.get_date()


class TagListFrame(ctk.CTkFrame):
    def __init__(self, master, *, title: str, tr: Translations, on_select, on_add, on_remove):
        super().__init__(master, fg_color="#111827", corner_radius=12)
        ctk.CTkLabel(self, text=title, font=("Segoe UI", 13, "bold")).pack(anchor="w", padx=10, pady=(8, 4))
        self.listbox = tk.Listbox(
            self,
            height=5,
            activestyle="none",
            exportselection=False,
            background="#0F172A",
            foreground="#F9FAFB",
            selectbackground="#2563EB",
            highlightthickness=0,
            borderwidth=0,
        )
        self.listbox.pack(fill="both", expand=True, padx=10)
        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.pack(fill="x", padx=10, pady=8)
        ctk.CTkButton(btns, text=tr["button.tag.select"], width=80, command=on_select).pack(side="left", padx=(0, 6))
        ctk.CTkButton(btns, text=tr["button.tag.add"], width=80, command=on_add).pack(side="left", padx=6)
        ctk.CTkButton(
            btns,
            text=tr["button.tag.remove"],
            width=80,
            command=lambda: on_remove(self.selected_index()),
        ).pack(side="left", padx=6)

    def selected_index(self) -> int | None:
        selection = self.listbox.curselection()
        if not selection:
            return None
        return int(selection[0])

    def set_items(self, items: list[str]):
        self.listbox.delete(0, tk.END)
        for item in items:
            self.listbox.insert(tk.END, item)


class ChoicePromptDialog(ctk.CTkToplevel):
    """Single-choice prompt; ``show()`` returns the chosen value or None."""

    def __init__(self, master, *, title: str, prompt: str, options: list[str], tr: Translations):
        super().__init__(master)
        self.title(title)
        self.geometry("360x180")
        self.resizable(False, False)
        self.transient(master)
        self.grab_set()
        self.result: str | None = None

        ctk.CTkLabel(self, text=prompt, anchor="w").pack(fill="x", padx=20, pady=(20, 6))
        self.menu = ctk.CTkOptionMenu(self, values=options)
        self.menu.pack(fill="x", padx=20)
        self.menu.set(options[0])

        btns = ctk.CTkFrame(self, fg_color="transparent")
        btns.pack(pady=(20, 16))
        ctk.CTkButton(btns, text=tr["button.cancel"], command=self._cancel).pack(side="right", padx=6)
        ctk.CTkButton(btns, text=tr["button.ok"], command=self._confirm).pack(side="right", padx=6)

        self.bind("<Return>", lambda _e: self._confirm())
        self.bind("<Escape>", lambda _e: self._cancel())
        self.protocol("WM_DELETE_WINDOW", self._cancel)

    def _confirm(self):
        self.result = self.menu.get()
        self.destroy()

    def _cancel(self):
        self.result = None
        self.destroy()

    def show(self) -> str | None:
        self.wait_window()
        return self.result


class WindowTagPrompts:
    """Tag prompts of the dialog session, shown as modal windows over ``master``."""

    def __init__(self, master, tr: Translations):
        self.master = master
        self.tr = tr

    def choose_tag(self, kind: TagKind, options: list[str]) -> str | None:
        return ChoicePromptDialog(
            self.master,
            title=self.tr[f"dialog.{kind.value}.select.title"],
            prompt=self.tr[f"dialog.{kind.value}.select.content"],
            options=options,
            tr=self.tr,
        ).show()

    def enter_tag(self, kind: TagKind) -> str | None:
        dialog = ctk.CTkInputDialog(
            title=self.tr[f"dialog.{kind.value}.new.title"],
            text=self.tr[f"dialog.{kind.value}.new.content"],
        )
        return dialog.get_input()


class TaskDialog(ctk.CTkToplevel):
    """Window around a dialog session; buttons depend on the session kind."""

    def __init__(self, master, session: DialogSession, tr: Translations, prompts: WindowTagPrompts | None = None):
        super().__init__(master)
        self.session = session
        self.tr = tr
        editing = isinstance(session, EditingSession)
        self.title(tr["dialog.title.edit" if editing else "dialog.title.new"])
        self.geometry(DIALOG_GEOMETRY)
        self.minsize(480, 520)
        self.transient(master)
        self.grab_set()
        # Tag prompts open on top of this window, not the main window.
        if prompts is not None:
            prompts.master = self

        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=18, pady=18)
        container.columnconfigure(0, weight=1)
        container.columnconfigure(1, weight=1)
        container.rowconfigure(5, weight=1)

        ctk.CTkLabel(container, text=tr["dialog.label.priority"]).grid(row=0, column=0, sticky="w")
        self.priority_values = priority_labels(tr)
        self.priority_menu = ctk.CTkOptionMenu(container, values=self.priority_values)
        self.priority_menu.grid(row=1, column=0, sticky="ew", pady=(0, 8))

        ctk.CTkLabel(container, text=tr["dialog.label.creation"]).grid(row=2, column=0, sticky="w")
        self.creation_field = OptionalDateField(container, no_date_text=tr["dialog.label.nodate"])
        self.creation_field.grid(row=3, column=0, sticky="w", pady=(0, 8))

        ctk.CTkLabel(container, text=tr["dialog.label.due"]).grid(row=2, column=1, sticky="w")
        self.due_field = OptionalDateField(container, no_date_text=tr["dialog.label.nodate"])
        self.due_field.grid(row=3, column=1, sticky="w", pady=(0, 8))

        ctk.CTkLabel(container, text=tr["dialog.label.description"]).grid(row=4, column=0, columnspan=2, sticky="w")
        self.description_box = ctk.CTkTextbox(container, height=120)
        self.description_box.grid(row=5, column=0, columnspan=2, sticky="nsew", pady=(0, 8))

        self.context_frame = TagListFrame(
            container,
            title=tr["dialog.label.context"],
            tr=tr,
            on_select=lambda: self._add_tag(TagKind.CONTEXT, by_selection=True),
            on_add=lambda: self._add_tag(TagKind.CONTEXT, by_selection=False),
            on_remove=lambda index: self._remove_tag(TagKind.CONTEXT, index),
        )
        self.context_frame.grid(row=6, column=0, sticky="nsew", padx=(0, 6), pady=(0, 8))
        self.project_frame = TagListFrame(
            container,
            title=tr["dialog.label.project"],
            tr=tr,
            on_select=lambda: self._add_tag(TagKind.PROJECT, by_selection=True),
            on_add=lambda: self._add_tag(TagKind.PROJECT, by_selection=False),
            on_remove=lambda index: self._remove_tag(TagKind.PROJECT, index),
        )
        self.project_frame.grid(row=6, column=1, sticky="nsew", padx=(6, 0), pady=(0, 8))

        btns = ctk.CTkFrame(container, fg_color="transparent")
        btns.grid(row=7, column=0, columnspan=2, sticky="ew", pady=(8, 0))
        ctk.CTkButton(btns, text=tr["button.cancel"], command=self._cancel).pack(side="right", padx=6)
        if editing:
            ctk.CTkButton(btns, text=tr["button.apply"], command=self._save).pack(side="right", padx=6)
        else:
            ctk.CTkButton(btns, text=tr["button.continue"], command=self._continue).pack(side="right", padx=6)
            ctk.CTkButton(btns, text=tr["button.finish"], command=self._done).pack(side="right", padx=6)

        self.bind("<Escape>", lambda _e: self._cancel())
        self.protocol("WM_DELETE_WINDOW", self._cancel)
        self._load_fields()

    # --- staged fields <-> widgets ---
    def _load_fields(self):
        staged = self.session.staged
        self.priority_menu.set(self.priority_values[staged.priority_index])
        self.creation_field.set(staged.creation)
        self.due_field.set(staged.due)
        self.description_box.delete("1.0", tk.END)
        self.description_box.insert("1.0", staged.description)
        self._refresh_tags()

    def _store_fields(self):
        self.session.set_priority_index(self.priority_values.index(self.priority_menu.get()))
        self.session.set_creation(self.creation_field.get())
        self.session.set_due(self.due_field.get())
        # Text widgets always append a trailing newline.
        self.session.set_description(self.description_box.get("1.0", "end-1c"))

    def _refresh_tags(self):
        self.context_frame.set_items(self.session.staged.context)
        self.project_frame.set_items(self.session.staged.project)

    # --- tag actions ---
    def _add_tag(self, kind: TagKind, *, by_selection: bool):
        if by_selection:
            self.session.add_tag_by_selection(kind)
        else:
            self.session.add_tag_by_input(kind)
        self._refresh_tags()

    def _remove_tag(self, kind: TagKind, index: int | None):
        if self.session.remove_tag(kind, index):
            self._refresh_tags()

    # --- commit actions ---
    def _continue(self):
        self._store_fields()
        self.session.continue_()
        self._load_fields()

    def _done(self):
        self._store_fields()
        self.session.done()
        self.destroy()

    def _save(self):
        self._store_fields()
        self.session.save()
        self.destroy()

    def _cancel(self):
        if self.session.is_open:
            self.session.cancel()
        self.destroy()

    def show(self) -> DialogSession:
        self.wait_window()
        if self.session.is_open:
            # Window destroyed without a button press.
            self.session.cancel()
        return self.session


# -------------------------------
# Main window
# -------------------------------
class MainWindow(ctk.CTk):
    def __init__(self, store: TaskStore, tr: Translations):
        super().__init__()
        self.store = store
        self.tr = tr
        self.title(tr["app.title"])
        self.geometry(WINDOW_GEOMETRY)
        self.minsize(720, 420)
        self._row_tasks: dict[str, Task] = {}
        self._sort_column: str | None = None
        self._sort_reverse = False

        self.task_filter = TaskFilter.for_store(store)
        self.sorted_view = SortedView(self.task_filter)

        self._build_toolbar()
        self._build_filter_bar()
        self._build_table()

        self.status_label = ctk.CTkLabel(self, text="", anchor="w")
        self.status_label.pack(fill="x", padx=16, pady=(0, 10))

        store.subscribe(self._refresh_filter_options)
        self.sorted_view.subscribe(self._refresh_table)
        self._refresh_filter_options()
        self._refresh_table()

    # ----------------------- UI Builders -----------------------
    def _build_toolbar(self):
        bar = ctk.CTkFrame(self)
        bar.pack(fill="x", padx=16, pady=(16, 8))
        actions = [
            ("button.open", self._open_file),
            ("button.save", self._save_file),
            ("button.new", self._new_tasks),
            ("button.edit", self._edit_task),
            ("button.done", self._mark_done),
            ("button.delete", self._delete_task),
        ]
        for key, command in actions:
            ctk.CTkButton(bar, text=self.tr[key], width=90, command=command).pack(side="left", padx=4, pady=6)

    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self)
        bar.pack(fill="x", padx=16, pady=(0, 8))
        self.done_var = tk.BooleanVar(value=self.task_filter.show_done)
        ctk.CTkCheckBox(
            bar,
            text=self.tr["filter.done"],
            variable=self.done_var,
            command=self._on_done_toggled,
        ).pack(side="left", padx=8, pady=6)
        self.context_filter = ctk.CTkOptionMenu(
            bar,
            values=self.store.contexts.items(),
            command=lambda _=None: self._on_tag_filter_changed(),
        )
        self.context_filter.pack(side="right", padx=8)
        self.project_filter = ctk.CTkOptionMenu(
            bar,
            values=self.store.projects.items(),
            command=lambda _=None: self._on_tag_filter_changed(),
        )
        self.project_filter.pack(side="right", padx=8)

    def _build_table(self):
        frame = ctk.CTkFrame(self)
        frame.pack(fill="both", expand=True, padx=16, pady=(0, 8))
        style = ttk.Style(self)
        style.theme_use("clam")
        style.configure(
            "Tasks.Treeview",
            background="#0F172A",
            fieldbackground="#0F172A",
            foreground="#F9FAFB",
            rowheight=26,
            borderwidth=0,
        )
        style.configure("Tasks.Treeview.Heading", background="#1E293B", foreground="#E5E7EB")
        style.map("Tasks.Treeview", background=[("selected", "#2563EB")])

        self.table = ttk.Treeview(frame, columns=COLUMNS, show="headings", selectmode="browse", style="Tasks.Treeview")
        widths = {"status": 60, "priority": 70, "due": 100, "description": 380, "context": 140, "project": 140}
        for column in COLUMNS:
            self.table.heading(column, text=self.tr[f"column.{column}"], command=lambda c=column: self._sort_by(c))
            self.table.column(column, width=widths[column], stretch=(column == "description"))
        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.table.yview)
        self.table.configure(yscrollcommand=scroll.set)
        self.table.pack(side="left", fill="both", expand=True)
        scroll.pack(side="right", fill="y")
        self.table.bind("<Double-1>", lambda _e: self._edit_task())

    # ----------------------- Refresh -----------------------
    def _refresh_option(self, menu: ctk.CTkOptionMenu, catalog: TagCatalog):
        values = catalog.items()
        current = menu.get()
        menu.configure(values=values)
        if current not in values:
            menu.set(catalog.all_label)

    def _refresh_filter_options(self):
        self._refresh_option(self.context_filter, self.store.contexts)
        self._refresh_option(self.project_filter, self.store.projects)
        self._on_tag_filter_changed()

    def _refresh_table(self):
        self.table.delete(*self.table.get_children())
        self._row_tasks = {}
        for i, task in enumerate(self.sorted_view):
            iid = str(i)
            self._row_tasks[iid] = task
            self.table.insert("", tk.END, iid=iid, values=self._row_values(task))
        self.status_label.configure(
            text=self.tr.format("status.count", visible=len(self.sorted_view), total=len(self.store.tasks))
        )

    def _row_values(self, task: Task) -> tuple[str, ...]:
        priority = task.priority if task.priority and not task.done else ""
        return (
            "✓" if task.done else "",
            priority,
            format_date(task.due) if task.due else "",
            task.description,
            ", ".join(task.context),
            ", ".join(task.project),
        )

    # ----------------------- Filter / sort events -----------------------
    def _on_done_toggled(self):
        self.task_filter.show_done = bool(self.done_var.get())

    def _on_tag_filter_changed(self):
        context = self.store.contexts.selection_for(self.context_filter.get())
        project = self.store.projects.selection_for(self.project_filter.get())
        if context != self.task_filter.context:
            self.task_filter.context = context
        if project != self.task_filter.project:
            self.task_filter.project = project

    def _sort_by(self, column: str):
        if self._sort_column == column:
            self._sort_reverse = not self._sort_reverse
        else:
            self._sort_column = column
            self._sort_reverse = False
        self.sorted_view.set_ordering(COLUMN_KEYS[column], reverse=self._sort_reverse)

    # ----------------------- Actions -----------------------
    def _selected_task(self) -> Task | None:
        selection = self.table.selection()
        if not selection:
            return None
        return self._row_tasks.get(selection[0])

    def show_load_error(self, path: str):
        messagebox.showerror(self.tr["error.title"], self.tr.format("error.load", path=path), parent=self)

    def _file_types(self) -> list[tuple[str, str]]:
        return [
            (self.tr["dialog.filetype.text"], " ".join(TASK_FILE_PATTERNS)),
            (self.tr["dialog.filetype.all"], "*.*"),
        ]

    def _open_file(self):
        path = filedialog.askopenfilename(parent=self, title=self.tr["dialog.title.open"], filetypes=self._file_types())
        open_task_list(self.store, path, report_error=self.show_load_error)

    def _save_file(self):
        path = self.store.path
        if path is None:
            chosen = filedialog.asksaveasfilename(
                parent=self,
                title=self.tr["dialog.title.save"],
                filetypes=self._file_types(),
                defaultextension=".txt",
            )
            if not chosen:
                return
            path = chosen
        if not self.store.save(path):
            messagebox.showerror(self.tr["error.title"], self.tr["error.save"], parent=self)

    def _new_tasks(self):
        prompts = WindowTagPrompts(self, self.tr)
        session = begin_create(self.store.contexts, self.store.projects, prompts)
        TaskDialog(self, session, self.tr, prompts).show()
        if session.is_committed:
            tasks = session.result_tasks()
            self.store.add_tasks(tasks)
            logger.info("Added %d task(s)", len(tasks))

    def _edit_task(self):
        task = self._selected_task()
        if task is None:
            return
        prompts = WindowTagPrompts(self, self.tr)
        session = begin_edit(task, self.store.contexts, self.store.projects, prompts)
        TaskDialog(self, session, self.tr, prompts).show()
        edited = session.result_task()
        if edited is not None:
            self.store.replace_task(task, edited)

    def _mark_done(self):
        task = self._selected_task()
        if task is not None:
            self.store.mark_done(task)

    def _delete_task(self):
        task = self._selected_task()
        if task is None:
            return
        if messagebox.askyesno(self.tr["dialog.title.delete"], self.tr["confirm.delete"], parent=self):
            self.store.remove_task(task)
