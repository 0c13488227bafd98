"""Diagnostic records and invocation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class DiagnosticLevel(Enum):
    """Severity of a diagnostic."""

    WARNING = auto()  # Non-fatal, dropped in optimized builds
    ERROR = auto()  # Isolated user-code error, always surfaced


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One structured report sent to a DiagnosticsSink.

    Attributes:
        level: Severity.
        message: Human-readable description.
        instance_uid: uid of the originating instance, if any.
        component_name: Formatted component name (e.g. ``<TodoItem>``).
        info: Context label such as ``"created hook"``.
        error: The exception for ERROR diagnostics.
    """

    level: DiagnosticLevel
    message: str
    instance_uid: int | None = None
    component_name: str | None = None
    info: str | None = None
    error: BaseException | None = None

    def format(self) -> str:
        """Render as a single log line."""
        text = f"[treewire] {self.message}"
        if self.component_name is not None:
            text += f"\n\nfound in {self.component_name}"
        return text


@dataclass(slots=True)
class InvocationResult:
    """Outcome of invoking one user callback.

    Exactly one of value/error is meaningful: ``ok`` tells which.
    """

    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
