"""Multicast event: the signal type behind change notifications.

Handlers are called as ``handler(sender, args)`` in subscription order.
Emission iterates a snapshot, so handlers may subscribe or unsubscribe
while an event is being emitted.
"""

from __future__ import annotations

from typing import Any, Callable

Handler = Callable[[Any, Any], None]
Disposer = Callable[[], None]


def _noop() -> None:
    pass


class Event:
    """A multicast signal with first/last subscriber hooks."""

    __slots__ = ("_handlers", "_on_first", "_on_last", "_enabled")

    def __init__(
        self,
        *,
        on_first: Callable[[], None] | None = None,
        on_last: Callable[[], None] | None = None,
        enabled: bool = True,
    ) -> None:
        self._handlers: list[Handler] = []
        self._on_first = on_first
        self._on_last = on_last
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def subscribe(self, handler: Handler) -> Disposer:
        """Register a handler. Returns a function that removes it."""
        if not self._enabled:
            return _noop
        if not self._handlers and self._on_first is not None:
            self._on_first()
        self._handlers.append(handler)
        return lambda: self.unsubscribe(handler)

    def unsubscribe(self, handler: Handler) -> None:
        """Remove the most recent registration of handler, if any."""
        if not self._enabled:
            return
        for i in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[i] == handler:
                del self._handlers[i]
                break
        else:
            return  # not subscribed
        if not self._handlers and self._on_last is not None:
            self._on_last()

    def emit(self, sender: Any, args: Any = None) -> None:
        """Call every handler with (sender, args)."""
        for handler in list(self._handlers):
            handler(sender, args)

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return bool(self._handlers)

    def __repr__(self) -> str:
        state = "enabled" if self._enabled else "disabled"
        return f"Event({len(self._handlers)} handlers, {state})"
