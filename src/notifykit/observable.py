"""Self-reporting values: objects and containers that announce their own changes.

A value placed in a cell may derive from one of the capability bases below.
The cell detects the capability with isinstance() and subscribes to it, so
in-place mutations of the held value flow through the cell's change path
without the cell ever being reassigned.

- PropertyChangedSource: object-level, "one of my attributes changed".
- CollectionChangedSource: container-level, "my membership changed".
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, NamedTuple, TypeVar

from notifykit._event import Event

T = TypeVar("T")
KT = TypeVar("KT")
VT = TypeVar("VT")


class CollectionChange(NamedTuple):
    """Describes a single container mutation."""

    action: str  # "add" | "remove" | "replace" | "reset"
    index: Any = None
    items: tuple = ()


class PropertyChangedSource:
    """Capability base: emits property_changed(source, name) on attribute changes."""

    def __init__(self) -> None:
        self.property_changed = Event()

    def _notify_property_changed(self, name: str) -> None:
        self.property_changed.emit(self, name)


class CollectionChangedSource:
    """Capability base: emits collection_changed(source, CollectionChange) on mutation."""

    def __init__(self) -> None:
        self.collection_changed = Event()

    def _notify_collection_changed(self, action: str, index: Any = None, items: Iterable = ()) -> None:
        self.collection_changed.emit(self, CollectionChange(action, index, tuple(items)))


class ObservableList(CollectionChangedSource, Generic[T]):
    """An ordered container that reports membership changes.

    Read operations behave like a plain list. Every mutation emits
    collection_changed after the underlying list has been updated.
    """

    def __init__(self, items: Iterable[T] | None = None) -> None:
        super().__init__()
        self._items: list[T] = list(items) if items is not None else []

    # --- Read operations ---

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __bool__(self) -> bool:
        return bool(self._items)

    def index(self, item: T, *args) -> int:
        return self._items.index(item, *args)

    def count(self, item: T) -> int:
        return self._items.count(item)

    def copy(self) -> list[T]:
        return list(self._items)

    # --- Write operations (notify) ---

    def append(self, item: T) -> None:
        self._items.append(item)
        self._notify_collection_changed("add", len(self._items) - 1, (item,))

    def extend(self, items: Iterable[T]) -> None:
        items = list(items)
        if not items:
            return
        start = len(self._items)
        self._items.extend(items)
        self._notify_collection_changed("add", start, items)

    def __iadd__(self, items: Iterable[T]) -> ObservableList[T]:
        self.extend(items)
        return self

    def insert(self, index: int, item: T) -> None:
        self._items.insert(index, item)
        self._notify_collection_changed("add", index, (item,))

    def pop(self, index: int = -1) -> T:
        result = self._items.pop(index)
        if index < 0:
            index += len(self._items) + 1
        self._notify_collection_changed("remove", index, (result,))
        return result

    def remove(self, item: T) -> None:
        index = self._items.index(item)
        del self._items[index]
        self._notify_collection_changed("remove", index, (item,))

    def clear(self) -> None:
        self._items.clear()
        self._notify_collection_changed("reset")

    def sort(self, *, key=None, reverse: bool = False) -> None:
        self._items.sort(key=key, reverse=reverse)
        self._notify_collection_changed("reset")

    def reverse(self) -> None:
        self._items.reverse()
        self._notify_collection_changed("reset")

    def __setitem__(self, index, value) -> None:
        self._items[index] = value
        self._notify_collection_changed("replace", index, (value,))

    def __delitem__(self, index) -> None:
        removed = self._items[index]
        del self._items[index]
        self._notify_collection_changed("remove", index, removed if isinstance(index, slice) else (removed,))

    def __repr__(self) -> str:
        return f"ObservableList({self._items!r})"


class ObservableDict(CollectionChangedSource, Generic[KT, VT]):
    """A mapping that reports membership changes."""

    def __init__(self, data: dict[KT, VT] | None = None) -> None:
        super().__init__()
        self._data: dict[KT, VT] = dict(data) if data else {}

    # --- Read operations ---

    def __getitem__(self, key: KT) -> VT:
        return self._data[key]

    def get(self, key: KT, default: VT | None = None) -> VT | None:
        return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[KT]:
        return iter(self._data)

    def keys(self):
        return self._data.keys()

    def values(self):
        return self._data.values()

    def items(self):
        return self._data.items()

    def __bool__(self) -> bool:
        return bool(self._data)

    # --- Write operations (notify) ---

    def __setitem__(self, key: KT, value: VT) -> None:
        action = "replace" if key in self._data else "add"
        self._data[key] = value
        self._notify_collection_changed(action, key, (value,))

    def __delitem__(self, key: KT) -> None:
        removed = self._data.pop(key)
        self._notify_collection_changed("remove", key, (removed,))

    def pop(self, key: KT, *args) -> VT:
        present = key in self._data
        result = self._data.pop(key, *args)
        if present:
            self._notify_collection_changed("remove", key, (result,))
        return result

    def update(self, other=None, **kwargs) -> None:
        if not other and not kwargs:
            return
        if other:
            self._data.update(other)
        if kwargs:
            self._data.update(kwargs)
        self._notify_collection_changed("reset")

    def clear(self) -> None:
        self._data.clear()
        self._notify_collection_changed("reset")

    def setdefault(self, key: KT, default: VT | None = None) -> VT:
        if key not in self._data:
            self._data[key] = default
            self._notify_collection_changed("add", key, (default,))
        return self._data[key]

    def __repr__(self) -> str:
        return f"ObservableDict({self._data!r})"
