"""Mount signal raised by the presentation layer."""

from __future__ import annotations

from collections.abc import Callable


class ViewReadiness:
    """One-shot signal raised by the presentation layer once it is mounted.

    Listeners registered before the signal run when it fires; listeners
    registered afterwards run immediately. Firing twice has no effect.
    """

    def __init__(self):
        self._mounted = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def on_mounted(self, listener: Callable[[], None]) -> None:
        if self._mounted:
            listener()
            return
        self._listeners.append(listener)

    def mark_mounted(self) -> bool:
        """Fire the signal. Returns False if it had already fired."""
        if self._mounted:
            return False
        self._mounted = True
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener()
        return True
