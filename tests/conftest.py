# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest

from simpletasklist.catalog import TagCatalog
from simpletasklist.models import Task
from simpletasklist.store import TaskStore

from .fakes import ALL_CONTEXTS, ALL_PROJECTS, NO_CONTEXT, NO_PROJECT, FakePrompts


@pytest.fixture()
def prompts() -> FakePrompts:
    return FakePrompts()


@pytest.fixture()
def contexts() -> list[str]:
    return [ALL_CONTEXTS, NO_CONTEXT, "home", "work"]


@pytest.fixture()
def projects() -> list[str]:
    return [ALL_PROJECTS, NO_PROJECT, "garden"]


@pytest.fixture()
def context_catalog() -> TagCatalog:
    return TagCatalog(ALL_CONTEXTS, NO_CONTEXT, ["work", "home"])


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(priority="A", description="Call mom", context=["home", "phone"]),
        Task(description="Write report", context=["work"], project=["q2"], due=date(2024, 5, 10)),
        Task(priority="x", description="Buy seeds", project=["garden"]),
        Task(description="Read a book"),
    ]


@pytest.fixture()
def store(sample_tasks: list[Task]) -> TaskStore:
    """
    Store pre-filled with the sample tasks.

    The sentinel labels are plain strings so tests do not depend on the
    translation bundles.
    """
    return TaskStore(
        all_contexts=ALL_CONTEXTS,
        no_context=NO_CONTEXT,
        all_projects=ALL_PROJECTS,
        no_project=NO_PROJECT,
        tasks=sample_tasks,
    )
