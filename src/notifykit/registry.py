"""Registry: owns cells, wires dependencies, dispatches changes.

Every cell created through a registry reports its changes to
Registry._on_cell_changed. Outside a batch that does two things, in order:
forward the cell to the external change sink (unless the cell is private),
then reevaluate every reactive item registered as a dependent of that cell,
in registration order. A computed cell whose value changes on reevaluation
re-enters the same path, so cascades proceed one hop at a time.

Batching: inside batch_update() / `with registry.batch()`, writable-cell
changes are only recorded. When the batch ends the recorded cells are
reported to the sink in first-changed order, and the union of their
dependents is reevaluated exactly once each. Batches do not nest.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, ParamSpec, TypeVar

from notifykit.cell import Cell, CollectionCell, ComputedCell, Equality, WritableCell
from notifykit.command import ParameterizedCommand, ReactiveCommand, RequeryHook
from notifykit.errors import (
    ForeignDependency,
    InvalidDependency,
    InvalidName,
    InvalidState,
    MissingRequiredArgument,
    NameConflict,
)
from notifykit.reaction import ReactiveAction, ReactiveItem

logger = logging.getLogger("notifykit.registry")

T = TypeVar("T")
P = ParamSpec("P")
R = TypeVar("R")

ChangeSink = Callable[[Cell], None]


class Registry:
    """Owns a set of uniquely named cells and the reactive items that depend on them."""

    def __init__(
        self,
        on_changed: ChangeSink | None = None,
        requery_hook: RequeryHook | None = None,
    ) -> None:
        self._on_changed = on_changed
        self._requery_hook = requery_hook
        self._cells: dict[str, Cell] = {}
        # cell -> ordered set of dependents (dict keys keep registration order)
        self._dependents: dict[Cell, dict[ReactiveItem, None]] = {}
        self._items: dict[ReactiveItem, None] = {}
        self._in_batch = False
        self._batch_dirty: dict[WritableCell, None] = {}

    # --- Factories ---

    def create_writable(
        self,
        name: str,
        initial_value: T | None = None,
        *,
        private: bool = False,
        equals: Equality | None = None,
    ) -> WritableCell[T]:
        self._check_name(name)
        cell = WritableCell(name, initial_value, self._on_cell_changed, private=private, equals=equals)
        self._register(cell)
        return cell

    def create_readonly(
        self,
        name: str,
        provider: Callable[[], T],
        dependencies: Iterable[Cell] | None = None,
        *,
        private: bool = False,
        equals: Equality | None = None,
    ) -> ComputedCell[T]:
        dependencies = self._check_dependencies(dependencies)
        self._check_name(name)
        cell = ComputedCell(name, provider, self._on_cell_changed, private=private, equals=equals)
        self._register(cell, dependencies)
        return cell

    def create_collection(
        self,
        name: str,
        initial_values: Iterable[T] | None = None,
        *,
        private: bool = False,
    ) -> CollectionCell[T]:
        self._check_name(name)
        cell = CollectionCell(name, initial_values, self._on_cell_changed, private=private)
        self._register(cell)
        return cell

    def create_action(
        self,
        effect: Callable[[], None],
        dependencies: Iterable[Cell] | None = None,
    ) -> ReactiveAction:
        dependencies = self._check_dependencies(dependencies)
        action = ReactiveAction(effect)
        self._register_item(action, dependencies)
        return action

    def create_command(
        self,
        execute_action: Callable[[], None],
        can_execute_action: Callable[[], bool] | None = None,
        dependencies: Iterable[Cell] | None = None,
    ) -> ReactiveCommand:
        dependencies = self._check_dependencies(dependencies)
        command = ReactiveCommand(execute_action, can_execute_action, self._requery_hook)
        self._register_item(command, dependencies)
        return command

    def create_parameterized_command(
        self,
        execute_action: Callable[[T], None],
        can_execute_action: Callable[[T], bool] | None = None,
        dependencies: Iterable[Cell] | None = None,
    ) -> ParameterizedCommand[T]:
        dependencies = self._check_dependencies(dependencies)
        command = ParameterizedCommand(execute_action, can_execute_action, self._requery_hook)
        self._register_item(command, dependencies)
        return command

    def readonly(
        self,
        name: str,
        dependencies: Iterable[Cell] | None = None,
        *,
        private: bool = False,
        equals: Equality | None = None,
    ) -> Callable[[Callable[[], T]], ComputedCell[T]]:
        """Decorator form of create_readonly.

        Usage:
            first = registry.create_writable("First", "Ada")
            last = registry.create_writable("Last", "Lovelace")

            @registry.readonly("FullName", dependencies=[first, last])
            def full_name():
                return f"{first.value} {last.value}"

            full_name.value  # "Ada Lovelace"
        """

        def decorator(provider: Callable[[], T]) -> ComputedCell[T]:
            return self.create_readonly(name, provider, dependencies, private=private, equals=equals)

        return decorator

    # --- Lookup ---

    @property
    def cells(self) -> list[str]:
        """Registered cell names, in registration order."""
        return list(self._cells)

    @property
    def in_batch(self) -> bool:
        return self._in_batch

    def __getitem__(self, name: str) -> Cell:
        return self._cells[name]

    def __contains__(self, name: object) -> bool:
        return name in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    # --- Evaluation ---

    def reevaluate_all(self) -> None:
        """Reevaluate every reactive item, in registration order, ignoring the graph."""
        for item in list(self._items):
            item.reevaluate()

    def batch_update(self, update_action: Callable[[], Any]) -> None:
        """Run update_action with change dispatch deferred until it returns.

        Usage:
            def move():
                x.value += 1
                y.value += 1

            registry.batch_update(move)
            # sink saw x, y once each; dependents of x and y ran once each
        """
        if update_action is None:
            raise MissingRequiredArgument("update_action is required")
        with self.batch():
            update_action()

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Context manager form of batch_update.

        The deferred dispatch runs even if the body raises; the exception
        then propagates.
        """
        if self._in_batch:
            raise InvalidState("There is already a batch update in progress.")
        self._in_batch = True
        self._batch_dirty.clear()
        try:
            yield
        finally:
            self._in_batch = False
            self._commit_batch()

    def batched(self, fn: Callable[P, R]) -> Callable[P, R]:
        """Decorator: run every call of fn inside a batch."""

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with self.batch():
                return fn(*args, **kwargs)

        return wrapper

    def _commit_batch(self) -> None:
        dirty = list(self._batch_dirty)
        self._batch_dirty.clear()
        combined: dict[ReactiveItem, None] = {}
        for cell in dirty:
            combined.update(self._dependents[cell])
            self._notify_sink(cell)
        logger.debug("Batch committed: %d changed cells, %d dependents", len(dirty), len(combined))
        for item in combined:
            item.reevaluate()

    # --- Dispatch ---

    def _on_cell_changed(self, cell: Cell) -> None:
        if self._in_batch:
            if isinstance(cell, WritableCell):
                self._batch_dirty[cell] = None
            return
        self._notify_sink(cell)
        for item in list(self._dependents[cell]):
            item.reevaluate()

    def _notify_sink(self, cell: Cell) -> None:
        if not cell.is_private and self._on_changed is not None:
            self._on_changed(cell)

    # --- Registration ---

    def _check_name(self, name: str) -> None:
        if not isinstance(name, str):
            raise InvalidName("Name must be a non-empty string")
        if name in self._cells:
            raise NameConflict(f"There is already a registered cell with the name {name!r}")

    def _check_dependencies(self, dependencies: Iterable[Cell] | None) -> list[Cell]:
        if dependencies is None:
            return []
        dependencies = list(dependencies)
        for dependency in dependencies:
            if dependency is None:
                raise InvalidDependency("One of the dependencies is None")
            if not isinstance(dependency, Cell) or self._cells.get(dependency.name) is not dependency:
                raise ForeignDependency(
                    f"Dependency {dependency!r} is not a cell registered in this registry"
                )
        return dependencies

    def _register(self, cell: Cell, dependencies: list[Cell] | None = None) -> None:
        self._check_name(cell.name)
        self._cells[cell.name] = cell
        self._dependents[cell] = {}
        logger.debug("Registered %r", cell)
        if isinstance(cell, ComputedCell):
            self._register_item(cell, dependencies or [])

    def _register_item(self, item: ReactiveItem, dependencies: list[Cell]) -> None:
        self._items[item] = None
        for dependency in dependencies:
            self._dependents[dependency][item] = None
