"""Reactive actions: side effects driven by cell changes.

A ReactiveAction wraps a zero-argument effect. The registry calls
reevaluate() whenever a cell the action depends on changes; the effect
runs every time, with no caching and no gating.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from notifykit.errors import MissingRequiredArgument


@runtime_checkable
class ReactiveItem(Protocol):
    """Anything the registry can ask to reevaluate."""

    def reevaluate(self) -> None: ...


class ReactiveAction:
    """A side effect that re-runs whenever one of its dependencies changes."""

    __slots__ = ("_effect",)

    def __init__(self, effect: Callable[[], None]) -> None:
        if effect is None:
            raise MissingRequiredArgument("effect is required")
        self._effect = effect

    def reevaluate(self) -> None:
        """Run the effect."""
        self._effect()

    def __repr__(self) -> str:
        return f"ReactiveAction({getattr(self._effect, '__name__', self._effect)!r})"
