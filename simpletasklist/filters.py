"""Done/context/project filtering of the task collection."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .catalog import MATCH_ALL, MATCH_NONE, TagSelection
from .models import Task
from .observable import Observable

logger = logging.getLogger(__name__)


def tag_matches(tags: Sequence[str], selection: TagSelection) -> bool:
    if selection is MATCH_ALL:
        return True
    if selection is MATCH_NONE:
        return not tags
    return selection in tags


def visible(
    task: Task,
    show_done: bool,
    selected_context: TagSelection,
    selected_project: TagSelection,
) -> bool:
    """Return True if ``task`` passes all three filters."""
    if not show_done and task.done:
        return False
    return tag_matches(task.context, selected_context) and tag_matches(task.project, selected_project)


class TaskFilter(Observable):
    """Visible subset of a task source under the current filter settings.

    Every change of ``show_done``, ``context`` or ``project`` (and every
    :meth:`refresh` triggered by the source) re-evaluates the whole source.
    """

    def __init__(
        self,
        source: Callable[[], Sequence[Task]],
        *,
        show_done: bool = False,
        context: TagSelection = MATCH_ALL,
        project: TagSelection = MATCH_ALL,
    ):
        super().__init__()
        self._source = source
        self._show_done = show_done
        self._context = context
        self._project = project
        self._visible: list[Task] = []
        self.refresh()

    @classmethod
    def for_store(cls, store, **kwargs) -> "TaskFilter":
        """Filter over ``store.tasks`` that follows the store's change notifications."""
        task_filter = cls(lambda: store.tasks, **kwargs)
        store.subscribe(task_filter.refresh)
        return task_filter

    @property
    def show_done(self) -> bool:
        return self._show_done

    @show_done.setter
    def show_done(self, value: bool) -> None:
        self._show_done = bool(value)
        self.refresh()

    @property
    def context(self) -> TagSelection:
        return self._context

    @context.setter
    def context(self, value: TagSelection) -> None:
        self._context = value
        self.refresh()

    @property
    def project(self) -> TagSelection:
        return self._project

    @project.setter
    def project(self, value: TagSelection) -> None:
        self._project = value
        self.refresh()

    @property
    def tasks(self) -> list[Task]:
        return list(self._visible)

    def refresh(self) -> None:
        self._visible = [
            task for task in self._source()
            if visible(task, self._show_done, self._context, self._project)
        ]
        logger.debug(
            "Filter (done=%s, context=%s, project=%s): %d visible",
            self._show_done, self._context, self._project, len(self._visible),
        )
        self._notify()

    def __len__(self) -> int:
        return len(self._visible)
