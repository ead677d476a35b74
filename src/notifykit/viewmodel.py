"""ViewModel: a framework-agnostic base for view-model classes.

A ViewModel owns a Registry and re-emits every non-private cell change as
property_changed(view_model, cell_name). A presentation layer binds to that
one event. A ViewModel is itself a PropertyChangedSource, so holding one
view-model inside another's cell makes the outer cell react to changes
inside it.
"""

from __future__ import annotations

from notifykit.cell import Cell
from notifykit.command import RequeryHook
from notifykit.observable import PropertyChangedSource
from notifykit.registry import Registry


class ViewModel(PropertyChangedSource):
    """Base class: subclasses create their cells and commands on self.context.

    Usage:
        class Person(ViewModel):
            def __init__(self):
                super().__init__()
                self.first = self.context.create_writable("First", "")
                self.last = self.context.create_writable("Last", "")
                self.full = self.context.create_readonly(
                    "Full",
                    lambda: f"{self.first.value} {self.last.value}".strip(),
                    dependencies=[self.first, self.last],
                )

        person = Person()
        person.property_changed.subscribe(lambda vm, name: print(name))
        person.first.value = "Ada"  # prints First, then Full
    """

    def __init__(self, *, requery_hook: RequeryHook | None = None) -> None:
        super().__init__()
        self.context = Registry(self._on_cell_changed, requery_hook)

    def _on_cell_changed(self, cell: Cell) -> None:
        self._notify_property_changed(cell.name)
