"""Diagnostics: structured reports, pluggable sinks, and error isolation.

Usage:
    from treewire.diagnostics import Diagnostics, MemorySink

    sink = MemorySink()
    diagnostics = Diagnostics(sink, debug=True)
    diagnostics.warn("something looks off")
    assert sink.messages == ["something looks off"]
"""

from treewire.diagnostics.handling import (
    Diagnostics,
    diagnostics_for,
    format_component_name,
    get_default_diagnostics,
)
from treewire.diagnostics.models import Diagnostic, DiagnosticLevel, InvocationResult
from treewire.diagnostics.protocol import DiagnosticsSink
from treewire.diagnostics.sinks import (
    LoggingSink,
    MemorySink,
    NullSink,
    WarningsSink,
    build_sink,
)

__all__ = [
    # Models
    "Diagnostic",
    "DiagnosticLevel",
    "InvocationResult",
    # Protocol
    "DiagnosticsSink",
    # Sinks
    "LoggingSink",
    "WarningsSink",
    "MemorySink",
    "NullSink",
    "build_sink",
    # Handling
    "Diagnostics",
    "diagnostics_for",
    "format_component_name",
    "get_default_diagnostics",
]
