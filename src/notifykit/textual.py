"""Textual integration for notifykit. Opt-in: requires textual.

Bridges a Registry to a Textual app in both directions:
- change_sink(): registry changes -> widget updates, guarded and thread-safe.
- RequeryBroadcaster: app timer -> command reevaluation, the Textual
  counterpart of a GUI toolkit's "requery suggested" broadcast.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded updates during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def change_sink(app, fn):
    """Wrap fn(cell) as a Registry change sink that safely touches Textual widgets.

    Skips changes while the app is paused or not running, ignores NoMatches
    from widget queries, and marshals cross-thread calls via call_from_thread.

    Usage:
        registry = Registry(change_sink(app, lambda cell: app.query_one(f"#{cell.name}").update(str(cell))))
    """
    _main = threading.get_ident()

    def _guarded(cell):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, cell)
        else:
            _safe(cell)

    def _safe(cell):
        try:
            fn(cell)
        except NoMatches:
            pass

    return _guarded


class RequeryBroadcaster:
    """Periodically asks attached commands to reevaluate.

    Pass ``broadcaster.hook`` as a Registry's requery_hook. Commands attach
    their handler when they gain their first can_execute_changed listener
    and detach it when they lose the last one. The interval timer only runs
    while at least one handler is attached.
    """

    def __init__(self, app, interval: float = 0.5) -> None:
        self._app = app
        self._interval = interval
        self._handlers: list = []
        self._timer = None

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def hook(self, attach: bool, handler) -> None:
        if attach:
            self._handlers.append(handler)
            if self._timer is None:
                self._timer = self._app.set_interval(self._interval, self.requery)
            return
        try:
            self._handlers.remove(handler)
        except ValueError:
            return  # never attached
        if not self._handlers and self._timer is not None:
            self._timer.stop()
            self._timer = None

    def requery(self) -> None:
        """Call every attached handler now, if the app is safe to touch."""
        if not is_safe(self._app):
            return
        for handler in list(self._handlers):
            handler(self._app, None)
