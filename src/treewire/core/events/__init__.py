"""Event listener reconciliation: modifier parsing, invokers, and diffing."""

from treewire.core.events.core import create_invoker, normalize_event, update_listeners
from treewire.core.events.models import (
    CAPTURE_MARKER,
    ONCE_MARKER,
    PASSIVE_MARKER,
    Invoker,
    NormalizedEvent,
    OnceHandler,
)

__all__ = [
    # Models
    "NormalizedEvent",
    "Invoker",
    "OnceHandler",
    "PASSIVE_MARKER",
    "ONCE_MARKER",
    "CAPTURE_MARKER",
    # Core
    "normalize_event",
    "create_invoker",
    "update_listeners",
]
