"""
Explicit change notification for workshop state objects.
"""

from typing import Callable


class Observable:
    """Keeps a subscriber list and calls each subscriber after a change."""

    def __init__(self):
        self._subscribers: list[Callable[["Observable"], None]] = []

    def subscribe(self, callback: Callable[["Observable"], None]) -> Callable[[], None]:
        """
        Register ``callback(state)``; it is called after every change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)
