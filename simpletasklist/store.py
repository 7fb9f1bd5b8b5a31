"""Task collection and tag catalogs, loaded from and saved to todo.txt files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable

from . import todotxt
from .catalog import TagCatalog
from .exceptions import TaskFileError
from .models import DONE_MARKER, Task
from .observable import Observable

logger = logging.getLogger(__name__)


class TaskStore(Observable):
    """Owns the task list and the context/project catalogs derived from it.

    The catalogs are recomputed from the whole collection after every
    mutation; subscribers are notified afterwards.
    """

    def __init__(
        self,
        *,
        all_contexts: str,
        no_context: str,
        all_projects: str,
        no_project: str,
        tasks: Iterable[Task] | None = None,
    ):
        super().__init__()
        self.path: Path | None = None
        self.tasks: list[Task] = list(tasks or [])
        self.contexts = TagCatalog(all_contexts, no_context)
        self.projects = TagCatalog(all_projects, no_project)
        self._rebuild_catalogs()

    # --- Loading / saving ---
    def load(self, path: str | Path) -> bool:
        """Replace the collection with the tasks read from ``path``.

        Returns False on failure; the current tasks and catalogs stay as they
        were.
        """
        try:
            tasks = todotxt.read_tasks(path)
        except TaskFileError as exc:
            logger.error("Loading task list failed: %s", exc)
            return False
        self.path = Path(path)
        self.tasks = tasks
        self._changed()
        logger.info("Loaded %d tasks from %s", len(tasks), path)
        return True

    def save(self, path: str | Path | None = None) -> bool:
        target = Path(path) if path is not None else self.path
        if target is None:
            logger.error("Saving task list failed: no file chosen")
            return False
        try:
            todotxt.write_tasks(target, self.tasks)
        except TaskFileError as exc:
            logger.error("Saving task list failed: %s", exc)
            return False
        self.path = target
        logger.info("Saved %d tasks to %s", len(self.tasks), target)
        return True

    # --- Task operations ---
    def add_tasks(self, tasks: Iterable[Task]) -> None:
        added = [task.copy() for task in tasks]
        if not added:
            return
        self.tasks.extend(added)
        self._changed()

    def replace_task(self, old: Task, new: Task) -> bool:
        index = self._index_of(old)
        if index is None:
            return False
        self.tasks[index] = new.copy()
        self._changed()
        return True

    def remove_task(self, task: Task) -> bool:
        index = self._index_of(task)
        if index is None:
            return False
        del self.tasks[index]
        self._changed()
        return True

    def mark_done(self, task: Task) -> bool:
        index = self._index_of(task)
        if index is None:
            return False
        done = self.tasks[index].copy()
        done.priority = DONE_MARKER
        done.done = True
        self.tasks[index] = done
        self._changed()
        return True

    def _index_of(self, task: Task) -> int | None:
        # Identity first: equal tasks may appear more than once.
        for i, candidate in enumerate(self.tasks):
            if candidate is task:
                return i
        for i, candidate in enumerate(self.tasks):
            if candidate == task:
                return i
        return None

    # --- Catalogs ---
    def _rebuild_catalogs(self) -> None:
        self.contexts.set_tags(tag for task in self.tasks for tag in task.context)
        self.projects.set_tags(tag for task in self.tasks for tag in task.project)

    def _changed(self) -> None:
        self._rebuild_catalogs()
        self._notify()


def open_task_list(
    store: TaskStore,
    path: str | Path | None,
    report_error: Callable[[str], None] | None = None,
) -> bool | None:
    """Load ``path`` into ``store`` if it names an existing file.

    Returns None when nothing was attempted (no path or missing file),
    otherwise the result of :meth:`TaskStore.load`. A failed load is passed
    to ``report_error`` (with the path) so the user gets to see it.
    """
    if not path or not os.path.exists(path):
        if path:
            logger.debug("Skipping missing task list %s", path)
        return None
    loaded = store.load(path)
    if not loaded and report_error is not None:
        report_error(str(path))
    return loaded
