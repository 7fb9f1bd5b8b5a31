"""Ordering applied on top of the filtered tasks."""

from __future__ import annotations

from typing import Any, Callable

from .filters import TaskFilter
from .models import Task
from .observable import Observable

SortKey = Callable[[Task], Any]


class SortedView(Observable):
    """The filtered tasks in the order given by the caller's key.

    The view has no ordering of its own: without a key the filtered order is
    kept. It re-sorts when the key changes or the filter reports a change.
    """

    def __init__(self, source: TaskFilter, key: SortKey | None = None, reverse: bool = False):
        super().__init__()
        self._source = source
        self._key = key
        self._reverse = reverse
        self._items: list[Task] = []
        self._unsubscribe = source.subscribe(self.refresh)
        self.refresh()

    @property
    def key(self) -> SortKey | None:
        return self._key

    @property
    def reverse(self) -> bool:
        return self._reverse

    def set_ordering(self, key: SortKey | None, reverse: bool = False) -> None:
        self._key = key
        self._reverse = reverse
        self.refresh()

    def refresh(self) -> None:
        items = self._source.tasks
        if self._key is not None:
            # sorted() is stable, equal keys keep the filtered order.
            items = sorted(items, key=self._key, reverse=self._reverse)
        self._items = items
        self._notify()

    def close(self) -> None:
        self._unsubscribe()

    @property
    def tasks(self) -> list[Task]:
        return list(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Task:
        return self._items[index]
