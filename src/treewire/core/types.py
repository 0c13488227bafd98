"""Core type definitions for treewire."""

from collections.abc import Callable
from typing import Any, TypeAlias

Handler: TypeAlias = Callable[..., Any]
"""Any user-supplied callable: lifecycle hook, listener, default factory."""

Options: TypeAlias = dict[str, Any]
"""A configuration mapping, keyed by option name."""
