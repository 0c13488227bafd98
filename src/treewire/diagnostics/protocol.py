"""Protocol for diagnostics sinks.

Sinks receive every reported Diagnostic. Filtering (debug/silent) happens
before the sink is called, so a sink never needs to inspect build flags.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from treewire.diagnostics.models import Diagnostic


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Pluggable destination for diagnostics.

    Example implementations:
        - LoggingSink: stdlib logging (development default)
        - WarningsSink: warnings.warn with RuntimeWarning
        - MemorySink: in-memory list (tests, tooling)
        - NullSink: drop everything (optimized builds)
    """

    def emit(self, diagnostic: Diagnostic) -> None:
        """Deliver one diagnostic."""
        ...
