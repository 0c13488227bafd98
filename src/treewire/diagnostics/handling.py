"""Error isolation and reporting.

Every user callback (lifecycle hook, listener, data factory) is invoked through
Diagnostics.invoke(), which catches the error, routes it through the ancestors'
``error_captured`` hooks and then to the global handler or sink, and returns an
InvocationResult instead of letting the error propagate.

Usage:
    diagnostics = Diagnostics(MemorySink(), debug=True)
    result = diagnostics.invoke(hook, (instance,), instance, "created hook")
    if not result.ok:
        ...
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from treewire.diagnostics.models import Diagnostic, DiagnosticLevel, InvocationResult
from treewire.diagnostics.protocol import DiagnosticsSink
from treewire.diagnostics.sinks import LoggingSink

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance

ErrorHandler = Callable[[Exception, "ComponentInstance | None", str], Any]

_CLASSIFY_RE = re.compile(r"(?:^|[-_])(\w)")


def classify(name: str) -> str:
    """Turn ``todo-item`` or ``todo_item`` into ``TodoItem``."""
    return _CLASSIFY_RE.sub(lambda m: m.group(1).upper(), name)


def format_component_name(instance: ComponentInstance | None) -> str | None:
    """Format an instance's name for diagnostics.

    Returns:
        ``<Root>`` for a root instance, ``<Name>`` for a named component,
        ``<Anonymous>`` otherwise, or None without an instance.
    """
    if instance is None:
        return None
    if instance.root_handle == instance.handle and instance.parent_handle is None:
        return "<Root>"
    name = instance.options.get("name") or instance.options.get("component_tag")
    return f"<{classify(name)}>" if name else "<Anonymous>"


class Diagnostics:
    """Reporter shared by every instance of one runtime.

    Args:
        sink: Destination for diagnostics.
        debug: Development build. Warnings are only emitted when True.
        silent: Suppress warnings regardless of debug.
        error_handler: Optional global handler called as
            ``error_handler(error, instance, info)`` instead of the sink.
    """

    def __init__(
        self,
        sink: DiagnosticsSink | None = None,
        debug: bool = True,
        silent: bool = False,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self.sink: DiagnosticsSink = sink or LoggingSink()
        self.debug = debug
        self.silent = silent
        self.error_handler = error_handler

    def warn(self, message: str, instance: ComponentInstance | None = None) -> None:
        """Report a non-fatal diagnostic. No-op in optimized builds."""
        if not self.debug or self.silent:
            return
        self.sink.emit(
            Diagnostic(
                level=DiagnosticLevel.WARNING,
                message=message,
                instance_uid=instance.uid if instance is not None else None,
                component_name=format_component_name(instance),
            )
        )

    def handle_error(
        self, error: Exception, instance: ComponentInstance | None, info: str
    ) -> None:
        """Route an isolated error through ``error_captured`` hooks, then globally.

        Ancestors are visited from the nearest parent upward. A capture hook
        returning False stops propagation. An error raised by a capture hook is
        sent to the global handler on its own.
        """
        if instance is not None:
            current = instance.parent
            while current is not None:
                for hook in current.options.get("error_captured") or ():
                    try:
                        captured = hook(current, error, instance, info)
                    except Exception as hook_error:
                        self._global_handle_error(hook_error, current, "error_captured hook")
                    else:
                        if captured is False:
                            return
                current = current.parent
        self._global_handle_error(error, instance, info)

    def invoke(
        self,
        handler: Callable[..., Any],
        args: Sequence[Any],
        instance: ComponentInstance | None,
        info: str,
    ) -> InvocationResult:
        """Invoke one callback with error isolation.

        Args:
            handler: The user callback.
            args: Positional arguments for the callback.
            instance: Originating instance, used for reporting.
            info: Context label, e.g. ``"mounted hook"``.

        Returns:
            InvocationResult carrying either the return value or the error.
        """
        try:
            value = handler(*args)
        except Exception as exc:
            self.handle_error(exc, instance, info)
            return InvocationResult(error=exc)
        return InvocationResult(value=value)

    def _global_handle_error(
        self, error: Exception, instance: ComponentInstance | None, info: str
    ) -> None:
        if self.error_handler is not None:
            try:
                self.error_handler(error, instance, info)
                return
            except Exception as handler_error:
                # A handler re-raising the same error falls through to the sink once
                if handler_error is not error:
                    self._log_error(handler_error, None, "error_handler")
        self._log_error(error, instance, info)

    def _log_error(self, error: Exception, instance: ComponentInstance | None, info: str) -> None:
        self.sink.emit(
            Diagnostic(
                level=DiagnosticLevel.ERROR,
                message=f"Error in {info}: {error!r}",
                instance_uid=instance.uid if instance is not None else None,
                component_name=format_component_name(instance),
                info=info,
                error=error,
            )
        )


# Module-level reporter for callbacks wired without an owning instance
_default_diagnostics = Diagnostics()


def get_default_diagnostics() -> Diagnostics:
    """Access the process-wide fallback reporter.

    Returns:
        The Diagnostics used when no instance is available.
    """
    return _default_diagnostics


def diagnostics_for(instance: ComponentInstance | None) -> Diagnostics:
    """Return the reporter owning an instance, or the process-wide fallback."""
    if instance is None:
        return _default_diagnostics
    return instance.diagnostics
