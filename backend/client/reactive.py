"""Minimal subscribe/notify base for client state."""
from collections.abc import Callable
from typing import Any

Listener = Callable[[Any], None]


class Observable:
    """Listeners receive the observable itself whenever its state changes."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
