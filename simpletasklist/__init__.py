"""Simple Task List: a todo.txt task manager with filtering and task dialogs."""

from .catalog import MATCH_ALL, MATCH_NONE, TagCatalog
from .dialog import CreatingSession, EditingSession, TagKind, begin_create, begin_edit
from .filters import TaskFilter, visible
from .models import DONE_MARKER, Task
from .sorting import SortedView
from .store import TaskStore, open_task_list

__version__ = "1.0.0"

__all__ = [
    "DONE_MARKER",
    "MATCH_ALL",
    "MATCH_NONE",
    "CreatingSession",
    "EditingSession",
    "SortedView",
    "TagCatalog",
    "TagKind",
    "Task",
    "TaskFilter",
    "TaskStore",
    "begin_create",
    "begin_edit",
    "open_task_list",
    "visible",
]
