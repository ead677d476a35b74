"""Cells: named, cached values that report when they change.

A cell holds its last value and an equality policy. An update is a no-op when
the new value equals the cached one; otherwise the value is stored and the
cell's changed_action is called with the cell itself. Inside a Registry that
action is always the registry's dispatch entry point.

If the held value is a PropertyChangedSource or CollectionChangedSource, the
cell subscribes to it, so mutating the value in place reports a change on the
cell exactly as reassignment would.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar

from notifykit.errors import InvalidName, MissingRequiredArgument
from notifykit.observable import CollectionChangedSource, ObservableList, PropertyChangedSource

T = TypeVar("T")

ChangedAction = Callable[["Cell"], None]
Equality = Callable[[Any, Any], bool]


def default_equals(old: Any, new: Any) -> bool:
    return old is new or old == new


class Cell(Generic[T]):
    """Base class for all cells. Not instantiated directly."""

    __slots__ = ("_name", "_private", "_value", "_equals", "_changed_action", "_value_handler")

    def __init__(
        self,
        name: str,
        changed_action: ChangedAction | None = None,
        *,
        private: bool = False,
        equals: Equality | None = None,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidName("Name cannot be None, empty or all whitespace")
        self._name = name
        self._private = private
        self._value: T | None = None
        self._equals = equals or default_equals
        self._changed_action = changed_action
        # One bound method for the lifetime of the cell, so unsubscribe matches subscribe.
        self._value_handler = self._on_value_changed

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_private(self) -> bool:
        """Private cells cascade internally but are never reported to the change sink."""
        return self._private

    @property
    def value(self) -> T:
        return self._value

    def get(self) -> T:
        """Read the cached value."""
        return self._value

    def _seed(self, value: T) -> None:
        """Set the first value: no equality check, no notification."""
        self._value = value
        self._attach(value)

    def _update(self, new_value: T) -> None:
        """Store new_value and notify, unless it equals the cached value."""
        old_value = self._value
        if self._equals(old_value, new_value):
            return
        self._detach(old_value)
        self._value = new_value
        self._attach(new_value)
        self._notify_changed()

    def _attach(self, value: Any) -> None:
        # A container reports its own membership; it does not also need per-property events.
        if isinstance(value, CollectionChangedSource):
            value.collection_changed.subscribe(self._value_handler)
        elif isinstance(value, PropertyChangedSource):
            value.property_changed.subscribe(self._value_handler)

    def _detach(self, value: Any) -> None:
        if isinstance(value, CollectionChangedSource):
            value.collection_changed.unsubscribe(self._value_handler)
        elif isinstance(value, PropertyChangedSource):
            value.property_changed.unsubscribe(self._value_handler)

    def _on_value_changed(self, sender: Any, args: Any) -> None:
        self._notify_changed()

    def _notify_changed(self) -> None:
        if self._changed_action is not None:
            self._changed_action(self)

    def __str__(self) -> str:
        return "" if self._value is None else str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self._value!r})"


class WritableCell(Cell[T]):
    """A cell whose value is set directly by callers."""

    __slots__ = ()

    def __init__(
        self,
        name: str,
        initial_value: T | None = None,
        changed_action: ChangedAction | None = None,
        *,
        private: bool = False,
        equals: Equality | None = None,
    ) -> None:
        super().__init__(name, changed_action, private=private, equals=equals)
        self._seed(initial_value)

    @Cell.value.setter
    def value(self, new_value: T) -> None:
        self._update(new_value)

    def set(self, new_value: T) -> None:
        """Write a new value. Notifies only if it differs from the cached one."""
        self._update(new_value)


class ComputedCell(Cell[T]):
    """A cell whose value comes from a provider, recomputed on reevaluate().

    The provider runs once at construction to seed the value (no
    notification), then once per reevaluate() call.
    """

    __slots__ = ("_provider",)

    def __init__(
        self,
        name: str,
        provider: Callable[[], T],
        changed_action: ChangedAction | None = None,
        *,
        private: bool = False,
        equals: Equality | None = None,
    ) -> None:
        if provider is None:
            raise MissingRequiredArgument("provider is required")
        super().__init__(name, changed_action, private=private, equals=equals)
        self._provider = provider
        self._seed(provider())

    def reevaluate(self) -> None:
        self._update(self._provider())


class CollectionCell(Cell[ObservableList[T]]):
    """A cell holding an ObservableList.

    The list itself is the mutation surface: appending to or removing from
    cell.value reports a change on the cell, though the list's identity
    never changes.
    """

    __slots__ = ()

    def __init__(
        self,
        name: str,
        initial_values: Iterable[T] | None = None,
        changed_action: ChangedAction | None = None,
        *,
        private: bool = False,
    ) -> None:
        super().__init__(name, changed_action, private=private)
        self._seed(ObservableList(initial_values))
