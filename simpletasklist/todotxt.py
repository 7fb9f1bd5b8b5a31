"""Reading and writing task lists in the todo.txt line format.

Only the parts of the format the task model covers are handled:

    (A) 2024-05-01 Call mom @home +family due:2024-05-10
    x 2024-05-09 2024-05-01 Buy seeds +garden

A leading ``x`` marks a done task, ``(A)``..``(Z)`` the priority, the first
date after them the creation date (for done tasks with two dates the first
one is the completion date and is skipped). ``@`` and ``+`` words are
context and project tags, ``due:`` with a valid date holds the due date.
Everything else is description text.

A line starting with a blank has no done marker, priority or creation date,
so a description such as ``x marks the spot`` survives a save and reload.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from .catalog import tag_from_text
from .exceptions import TaskFileError
from .models import DONE_MARKER, Task

DATE_FORMAT = "%Y-%m-%d"
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PRIORITY_RE = re.compile(r"^\(([A-Z])\)$")
DUE_PREFIX = "due:"


def parse_date(s: str) -> date | None:
    if not s or not DATE_RE.match(s):
        return None
    try:
        return datetime.strptime(s, DATE_FORMAT).date()
    except ValueError:
        return None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def _reads_as_header(word: str) -> bool:
    return word == DONE_MARKER or bool(PRIORITY_RE.match(word)) or parse_date(word) is not None


def _parse_header(words: list[str], task: Task) -> int:
    """Fill done/priority/creation from the leading words; return the next position."""
    pos = 0
    if pos < len(words) and words[pos] == DONE_MARKER:
        task.priority = DONE_MARKER
        task.done = True
        pos += 1
    elif pos < len(words):
        m = PRIORITY_RE.match(words[pos])
        if m:
            task.priority = m.group(1)
            pos += 1

    # Done tasks may carry "completion creation"; open tasks only "creation".
    leading_dates: list[date] = []
    while pos < len(words) and len(leading_dates) < 2:
        d = parse_date(words[pos])
        if d is None:
            break
        leading_dates.append(d)
        pos += 1
    if leading_dates:
        if task.done and len(leading_dates) == 2:
            task.creation = leading_dates[1]
        else:
            task.creation = leading_dates[0]
            # A second date on an open task is ordinary text.
            if len(leading_dates) == 2:
                pos -= 1
    return pos


def parse_line(line: str) -> Task:
    words = line.split()
    task = Task()
    pos = 0 if line[:1].isspace() else _parse_header(words, task)

    description: list[str] = []
    for word in words[pos:]:
        if len(word) > 1 and word.startswith("@"):
            task.context.append(word[1:])
        elif len(word) > 1 and word.startswith("+"):
            task.project.append(word[1:])
        elif word.startswith(DUE_PREFIX) and parse_date(word[len(DUE_PREFIX):]) is not None:
            task.due = parse_date(word[len(DUE_PREFIX):])
        else:
            description.append(word)
    task.description = " ".join(description)
    return task


def format_line(task: Task) -> str:
    """Return the line for ``task``; whitespace runs in text become single blanks."""
    words = task.description.split()
    parts: list[str] = []
    if task.done:
        parts.append(DONE_MARKER)
    elif task.priority:
        parts.append(f"({task.priority})")
    if task.creation is not None:
        parts.append(format_date(task.creation))
        # Repeat the date so a leading date in the text is not taken as creation.
        if task.done and words and parse_date(words[0]) is not None:
            parts.append(format_date(task.creation))
    parts.extend(words)
    parts.extend(f"@{tag_from_text(tag)}" for tag in task.context if tag_from_text(tag))
    parts.extend(f"+{tag_from_text(tag)}" for tag in task.project if tag_from_text(tag))
    if task.due is not None:
        parts.append(f"{DUE_PREFIX}{format_date(task.due)}")
    line = " ".join(parts)
    headless = not task.done and not task.priority and task.creation is None
    if headless and words and _reads_as_header(words[0]):
        return " " + line
    return line


def parse_lines(lines: Iterable[str]) -> list[Task]:
    return [parse_line(line) for line in lines if line.strip()]


def read_tasks(path: str | Path) -> list[Task]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_lines(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise TaskFileError(f"Unable to read {path}: {exc}") from exc


def write_tasks(path: str | Path, tasks: Iterable[Task]) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            for task in tasks:
                f.write(format_line(task) + "\n")
    except OSError as exc:
        raise TaskFileError(f"Unable to write {path}: {exc}") from exc
