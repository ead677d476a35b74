"""notifykit: named reactive cells, commands and batched change notification."""

from importlib.metadata import version as _version

__version__ = _version("notifykit")

from notifykit.errors import (
    NotifyKitError,
    MissingRequiredArgument,
    InvalidName,
    NameConflict,
    InvalidDependency,
    ForeignDependency,
    InvalidState,
)
from notifykit._event import Event
from notifykit.observable import (
    CollectionChange,
    CollectionChangedSource,
    ObservableDict,
    ObservableList,
    PropertyChangedSource,
)
from notifykit.cell import Cell, WritableCell, ComputedCell, CollectionCell
from notifykit.reaction import ReactiveAction, ReactiveItem
from notifykit.command import ReactiveCommand, ParameterizedCommand
from notifykit.registry import Registry
from notifykit.viewmodel import ViewModel
# textual NOT auto-imported: opt-in only

__all__ = [
    "NotifyKitError",
    "MissingRequiredArgument",
    "InvalidName",
    "NameConflict",
    "InvalidDependency",
    "ForeignDependency",
    "InvalidState",
    "Event",
    "CollectionChange",
    "CollectionChangedSource",
    "ObservableDict",
    "ObservableList",
    "PropertyChangedSource",
    "Cell",
    "WritableCell",
    "ComputedCell",
    "CollectionCell",
    "ReactiveAction",
    "ReactiveItem",
    "ReactiveCommand",
    "ParameterizedCommand",
    "Registry",
    "ViewModel",
]
