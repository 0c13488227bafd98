"""Exception hierarchy.

Only construction errors are raised out of the engine. Errors raised by user
hooks and handlers are isolated and reported through diagnostics instead.
"""


class TreewireError(Exception):
    """Base class for all treewire errors."""

    pass


class OptionsError(TreewireError):
    """Raised when a component configuration is malformed."""

    pass


class InstantiationError(TreewireError):
    """Raised when an instance cannot be constructed.

    The original cause is always chained. No partial instance is left behind.
    """

    pass
