"""Reactive commands: gated actions with an observable executability.

A command pairs an execute delegate with an optional can_execute predicate.
When a dependency changes the registry calls reevaluate(), which refreshes
executability and emits can_execute_changed(command, None) to listeners.

ReactiveCommand caches executability and only emits on an actual
transition. ParameterizedCommand cannot cache (the answer depends on the
argument), so it emits on every reevaluate() when it has a predicate.

A command without a predicate is always executable and its
can_execute_changed event ignores subscriptions entirely.

Requery hook: an optional ``hook(attach, handler)`` callback. It is called
with attach=True when the first listener subscribes to can_execute_changed
and attach=False when the last one leaves. ``handler(source, args)`` calls
reevaluate(), letting an outside broadcaster refresh commands on demand.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from notifykit._event import Event, Handler
from notifykit.errors import MissingRequiredArgument

T = TypeVar("T")

RequeryHook = Callable[[bool, Handler], None]


class _CommandBase:
    """Shared plumbing: execute delegate, predicate, can_execute_changed and requery wiring.

    Subclasses provide reevaluate(); the requery handler calls it.
    """

    __slots__ = ("_execute_action", "_can_execute_action", "_requery_hook", "_requery_handler", "can_execute_changed")

    def __init__(
        self,
        execute_action: Callable[..., None],
        can_execute_action: Callable[..., bool] | None,
        requery_hook: RequeryHook | None,
    ) -> None:
        if execute_action is None:
            raise MissingRequiredArgument("execute_action is required")
        self._execute_action = execute_action
        self._can_execute_action = can_execute_action
        self._requery_hook = requery_hook
        self._requery_handler = self._on_requery_suggested
        self.can_execute_changed = Event(
            on_first=lambda: self._call_requery_hook(True),
            on_last=lambda: self._call_requery_hook(False),
            enabled=can_execute_action is not None,
        )

    def _call_requery_hook(self, attach: bool) -> None:
        if self._requery_hook is not None:
            self._requery_hook(attach, self._requery_handler)

    def _on_requery_suggested(self, sender: Any, args: Any) -> None:
        self.reevaluate()


class ReactiveCommand(_CommandBase):
    """A parameterless command with cached executability."""

    __slots__ = ("_can_execute",)

    def __init__(
        self,
        execute_action: Callable[[], None],
        can_execute_action: Callable[[], bool] | None = None,
        requery_hook: RequeryHook | None = None,
    ) -> None:
        super().__init__(execute_action, can_execute_action, requery_hook)
        self._can_execute = self._evaluate()

    def _evaluate(self) -> bool:
        return True if self._can_execute_action is None else bool(self._can_execute_action())

    def can_execute(self) -> bool:
        """The executability computed by the last reevaluate()."""
        return self._can_execute

    def execute(self) -> None:
        """Run the action if executable; otherwise do nothing."""
        if self._can_execute:
            self._execute_action()

    def reevaluate(self) -> None:
        new_can_execute = self._evaluate()
        if new_can_execute == self._can_execute:
            return
        self._can_execute = new_can_execute
        self.can_execute_changed.emit(self)

    def __repr__(self) -> str:
        return f"ReactiveCommand(can_execute={self._can_execute})"


class ParameterizedCommand(_CommandBase, Generic[T]):
    """A command taking one argument; executability is evaluated per call."""

    __slots__ = ()

    def __init__(
        self,
        execute_action: Callable[[T], None],
        can_execute_action: Callable[[T], bool] | None = None,
        requery_hook: RequeryHook | None = None,
    ) -> None:
        super().__init__(execute_action, can_execute_action, requery_hook)

    def can_execute(self, parameter: T) -> bool:
        return True if self._can_execute_action is None else bool(self._can_execute_action(parameter))

    def execute(self, parameter: T) -> None:
        """Run the action with parameter if executable for it; otherwise do nothing."""
        if self.can_execute(parameter):
            self._execute_action(parameter)

    def reevaluate(self) -> None:
        # No cache to compare against: every reevaluation is reported.
        self.can_execute_changed.emit(self)

    def __repr__(self) -> str:
        return "ParameterizedCommand()"
