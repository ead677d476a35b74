"""notifykit error hierarchy.

All notifykit errors inherit from NotifyKitError for easy catching. Each also
inherits the builtin a caller would naturally expect, so ``except ValueError``
around a factory call keeps working.
"""


class NotifyKitError(Exception):
    """Base error for all notifykit operations."""


class MissingRequiredArgument(NotifyKitError, TypeError):
    """A required delegate (provider, effect, batch body) was not supplied."""


class InvalidName(NotifyKitError, ValueError):
    """Cell name is None, empty or all whitespace."""


class NameConflict(NotifyKitError, ValueError):
    """A cell with the same name is already registered."""


class InvalidDependency(NotifyKitError, ValueError):
    """A dependency list contains None."""


class ForeignDependency(NotifyKitError, ValueError):
    """A dependency is not a cell registered in the same registry."""


class InvalidState(NotifyKitError, RuntimeError):
    """Operation not allowed in the current state (e.g. nested batch)."""
