"""Custom exceptions for the task list application."""


class TaskListError(Exception):
    """Base exception for task list errors."""


class TranslationUnavailableError(TaskListError):
    """Raised when a translation bundle or one of its keys is missing."""


class TaskFileError(TaskListError):
    """Raised when a task list file cannot be read or written."""


class DialogSessionError(TaskListError):
    """Base exception for misuse of a dialog session."""


class SessionClosedError(DialogSessionError):
    """Raised when an action is applied to a session that was already closed."""


class SessionOpenError(DialogSessionError):
    """Raised when a result is requested from a session that is still open."""
