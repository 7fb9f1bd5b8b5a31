"""New-task and edit-task dialog sessions.

A session stages the field values shown in the dialog and turns them into
:class:`~simpletasklist.models.Task` values when the user commits. Creating
sessions may produce several tasks (``continue_`` keeps the session open),
editing sessions produce exactly one. Catalogs are only read when a session
begins; writing the results back into the store is up to the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Protocol

from .catalog import strip_sentinels, tag_from_text
from .exceptions import SessionClosedError, SessionOpenError
from .models import (
    DONE_INDEX,
    NO_PRIORITY_INDEX,
    PRIORITY_CHOICES,
    Task,
    index_to_priority,
    priority_to_index,
)

logger = logging.getLogger(__name__)


class TagKind(str, enum.Enum):
    CONTEXT = "context"
    PROJECT = "project"


class SessionStatus(str, enum.Enum):
    OPEN = "open"
    COMMITTED = "committed"
    DISCARDED = "discarded"


class TagPrompts(Protocol):
    """Modal prompts supplied by the host UI. ``None`` means dismissed."""

    def choose_tag(self, kind: TagKind, options: list[str]) -> str | None: ...

    def enter_tag(self, kind: TagKind) -> str | None: ...


@dataclass
class StagedTask:
    """Working copy of the dialog fields."""

    priority_index: int = NO_PRIORITY_INDEX
    creation: date | None = None
    due: date | None = None
    description: str = ""
    context: list[str] = field(default_factory=list)
    project: list[str] = field(default_factory=list)


def stage_task(task: Task) -> StagedTask:
    return StagedTask(
        priority_index=priority_to_index(task.priority),
        creation=task.creation,
        due=task.due,
        description=task.description,
        context=list(task.context),
        project=list(task.project),
    )


def build_task(staged: StagedTask) -> Task:
    """Convert staged fields into a new task; tag lists are copied."""
    task = Task()
    if staged.priority_index == DONE_INDEX:
        task.priority = index_to_priority(DONE_INDEX)
        task.done = True
    elif staged.priority_index > DONE_INDEX:
        task.priority = index_to_priority(staged.priority_index)
    if staged.creation is not None:
        task.creation = staged.creation
    if staged.due is not None:
        task.due = staged.due
    task.context = list(staged.context)
    task.project = list(staged.project)
    task.description = staged.description
    return task


class TagListEditor:
    """Displayed tag list of one kind plus the catalog tags it can choose from."""

    def __init__(self, kind: TagKind, choices: Iterable[str], items: list[str], prompts: TagPrompts):
        self.kind = kind
        self.choices: list[str] = list(choices)
        self.items = items
        self._prompts = prompts

    def add_by_selection(self) -> str | None:
        if not self.choices:
            return None
        value = self._prompts.choose_tag(self.kind, list(self.choices))
        if value is None:
            return None
        self.items.append(value)
        return value

    def add_by_input(self) -> str | None:
        value = tag_from_text(self._prompts.enter_tag(self.kind))
        if not value:
            return None
        self.items.append(value)
        return value

    def remove(self, index: int | None) -> bool:
        """Remove the tag at ``index``; no selection (None, -1) does nothing."""
        if index is None or not 0 <= index < len(self.items):
            return False
        del self.items[index]
        return True


class DialogSession:
    """State shared by both session kinds. Use the subclasses."""

    def __init__(self, contexts: Iterable[str], projects: Iterable[str], prompts: TagPrompts):
        self._prompts = prompts
        self._context_choices = strip_sentinels(contexts)
        self._project_choices = strip_sentinels(projects)
        self.status = SessionStatus.OPEN
        self.staged = StagedTask()
        self._bind_editors()

    def _bind_editors(self) -> None:
        self.contexts = TagListEditor(TagKind.CONTEXT, self._context_choices, self.staged.context, self._prompts)
        self.projects = TagListEditor(TagKind.PROJECT, self._project_choices, self.staged.project, self._prompts)

    def _restage(self, staged: StagedTask) -> None:
        self.staged = staged
        self._bind_editors()

    # ----------------------- state -----------------------
    @property
    def is_open(self) -> bool:
        return self.status is SessionStatus.OPEN

    @property
    def is_committed(self) -> bool:
        return self.status is SessionStatus.COMMITTED

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise SessionClosedError(f"Dialog session already {self.status.value}")

    def _ensure_closed(self) -> None:
        if self.is_open:
            raise SessionOpenError("Dialog session is still open")

    def _close(self, status: SessionStatus) -> None:
        self.status = status
        logger.debug("%s %s", type(self).__name__, status.value)

    # ----------------------- fields -----------------------
    def set_priority_index(self, index: int) -> None:
        self._ensure_open()
        if not 0 <= index < len(PRIORITY_CHOICES):
            raise ValueError(f"Priority index out of range: {index}")
        self.staged.priority_index = index

    def set_creation(self, value: date | None) -> None:
        self._ensure_open()
        self.staged.creation = value

    def set_due(self, value: date | None) -> None:
        self._ensure_open()
        self.staged.due = value

    def set_description(self, text: str) -> None:
        self._ensure_open()
        self.staged.description = text

    # ----------------------- tags -----------------------
    def _editor(self, kind: TagKind) -> TagListEditor:
        return self.contexts if kind is TagKind.CONTEXT else self.projects

    def add_tag_by_selection(self, kind: TagKind) -> str | None:
        self._ensure_open()
        return self._editor(kind).add_by_selection()

    def add_tag_by_input(self, kind: TagKind) -> str | None:
        self._ensure_open()
        return self._editor(kind).add_by_input()

    def remove_tag(self, kind: TagKind, index: int | None) -> bool:
        self._ensure_open()
        return self._editor(kind).remove(index)

    def cancel(self) -> None:
        self._ensure_open()
        self._close(SessionStatus.DISCARDED)


class CreatingSession(DialogSession):
    def __init__(
        self,
        contexts: Iterable[str],
        projects: Iterable[str],
        prompts: TagPrompts,
        *,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(contexts, projects, prompts)
        self._today = today
        self.pending: list[Task] = []
        self._reset_fields()

    def _reset_fields(self) -> None:
        self._restage(StagedTask(creation=self._today()))

    def continue_(self) -> Task:
        """Keep the current task and clear the fields for the next one."""
        self._ensure_open()
        task = build_task(self.staged)
        self.pending.append(task)
        self._reset_fields()
        return task

    def done(self) -> Task:
        self._ensure_open()
        task = build_task(self.staged)
        self.pending.append(task)
        self._close(SessionStatus.COMMITTED)
        return task

    def result_tasks(self) -> list[Task]:
        self._ensure_closed()
        if not self.is_committed:
            return []
        return list(self.pending)


class EditingSession(DialogSession):
    def __init__(self, task: Task, contexts: Iterable[str], projects: Iterable[str], prompts: TagPrompts):
        super().__init__(contexts, projects, prompts)
        self.original = task
        self._restage(stage_task(task))
        self._result: Task | None = None

    def save(self) -> Task:
        self._ensure_open()
        self._result = build_task(self.staged)
        self._close(SessionStatus.COMMITTED)
        return self._result

    def result_task(self) -> Task | None:
        self._ensure_closed()
        return self._result if self.is_committed else None


def begin_create(
    contexts: Iterable[str],
    projects: Iterable[str],
    prompts: TagPrompts,
    *,
    today: Callable[[], date] = date.today,
) -> CreatingSession:
    return CreatingSession(contexts, projects, prompts, today=today)


def begin_edit(task: Task, contexts: Iterable[str], projects: Iterable[str], prompts: TagPrompts) -> EditingSession:
    return EditingSession(task, contexts, projects, prompts)
