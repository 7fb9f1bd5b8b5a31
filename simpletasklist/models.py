"""Task value and the priority table."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from datetime import date

DONE_MARKER = "x"

# Index 0: no priority, 1: done marker, 2..27: A..Z
PRIORITY_CHOICES: tuple[str | None, ...] = (None, DONE_MARKER, *string.ascii_uppercase)
NO_PRIORITY_INDEX = 0
DONE_INDEX = 1


def priority_to_index(priority: str | None) -> int:
    """Return the table index of ``priority``; unknown values count as no priority."""
    if not priority:
        return NO_PRIORITY_INDEX
    try:
        return PRIORITY_CHOICES.index(priority)
    except ValueError:
        return NO_PRIORITY_INDEX


def index_to_priority(index: int) -> str | None:
    if not 0 <= index < len(PRIORITY_CHOICES):
        raise ValueError(f"Priority index out of range: {index}")
    return PRIORITY_CHOICES[index]


@dataclass
class Task:
    """A single entry of the task list.

    Fields:
        priority: None, the done marker ``"x"`` or a letter A-Z.
        done: True for completed tasks. Always True with the done marker.
        creation: Creation date, None when unset.
        due: Due date, None when unset.
        description: Free text, may be empty.
        context: Context tags in insertion order (duplicates allowed).
        project: Project tags in insertion order (duplicates allowed).
    """

    priority: str | None = None
    done: bool = False
    creation: date | None = None
    due: date | None = None
    description: str = ""
    context: list[str] = field(default_factory=list)
    project: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.priority == DONE_MARKER:
            self.done = True

    @property
    def priority_index(self) -> int:
        return priority_to_index(self.priority)

    def copy(self) -> "Task":
        return Task(
            priority=self.priority,
            done=self.done,
            creation=self.creation,
            due=self.due,
            description=self.description,
            context=list(self.context),
            project=list(self.project),
        )
