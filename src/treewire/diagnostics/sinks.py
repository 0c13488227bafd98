"""Diagnostics sink implementations."""

from __future__ import annotations

import logging
import warnings

from treewire.diagnostics.models import Diagnostic, DiagnosticLevel
from treewire.diagnostics.protocol import DiagnosticsSink


class LoggingSink:
    """Send diagnostics to a stdlib logger (``treewire`` by default)."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("treewire")

    def emit(self, diagnostic: Diagnostic) -> None:
        if diagnostic.level is DiagnosticLevel.ERROR:
            self._logger.error(
                diagnostic.format(),
                exc_info=(
                    (type(diagnostic.error), diagnostic.error, diagnostic.error.__traceback__)
                    if diagnostic.error is not None
                    else None
                ),
            )
        else:
            self._logger.warning(diagnostic.format())


class WarningsSink:
    """Surface diagnostics as RuntimeWarning via the warnings module."""

    def __init__(self, stacklevel: int = 4) -> None:
        self._stacklevel = stacklevel

    def emit(self, diagnostic: Diagnostic) -> None:
        warnings.warn(diagnostic.format(), RuntimeWarning, stacklevel=self._stacklevel)


class MemorySink:
    """Collect diagnostics in memory."""

    def __init__(self) -> None:
        self.records: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.records.append(diagnostic)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.records if d.level is DiagnosticLevel.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.records if d.level is DiagnosticLevel.ERROR]

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.records]

    def clear(self) -> None:
        self.records.clear()


class NullSink:
    """Drop every diagnostic."""

    def emit(self, diagnostic: Diagnostic) -> None:
        return None


def build_sink(kind: str, log_level: str = "WARNING") -> DiagnosticsSink:
    """Build a sink from its configured name.

    Args:
        kind: One of ``logging``, ``warnings``, ``null``.
        log_level: Level applied to the ``treewire`` logger for ``logging``.

    Returns:
        The sink.

    Raises:
        ValueError: If kind is not recognized.
    """
    if kind == "logging":
        logger = logging.getLogger("treewire")
        logger.setLevel(log_level.upper())
        return LoggingSink(logger)
    if kind == "warnings":
        return WarningsSink()
    if kind == "null":
        return NullSink()
    raise ValueError(f"Unknown diagnostics sink: {kind!r}")
