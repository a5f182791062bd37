"""
Change notification for calendars.

Views register callbacks here to learn that a calendar changed so they can
refresh. Callbacks receive (calendar, event) where event is the added or
modified event, or None after a removal.
"""

from typing import Any, Callable, Optional


ChangeCallback = Callable[[Any, Optional[Any]], None]


class ChangeNotifier:
    """Ordered list of change callbacks."""

    def __init__(self):
        self._callbacks: list[ChangeCallback] = []

    def add_listener(self, callback: ChangeCallback) -> None:
        """Register a callback; registering the same callback twice is a no-op."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def remove_listener(self, callback: ChangeCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def notify(self, source: Any, payload: Optional[Any] = None) -> None:
        # Copy so a callback may unregister itself while being called
        for callback in list(self._callbacks):
            callback(source, payload)

    def __len__(self):
        return len(self._callbacks)
