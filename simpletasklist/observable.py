"""Minimal change-notification helper shared by the store and the views."""

from __future__ import annotations

from typing import Callable

Listener = Callable[[], None]


class Observable:
    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener()
