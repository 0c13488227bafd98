"""Listener models: parsed event names, invokers, and once wrappers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from treewire.diagnostics import InvocationResult, diagnostics_for

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance

PASSIVE_MARKER = "&"
ONCE_MARKER = "~"
CAPTURE_MARKER = "!"


@dataclass(frozen=True, slots=True)
class NormalizedEvent:
    """Event name with its modifier markers stripped into flags."""

    name: str
    once: bool = False
    capture: bool = False
    passive: bool = False
    params: tuple[Any, ...] | None = None


class Invoker:
    """Stable wrapper registered once per listener name.

    Updating a listener replaces ``payload`` in place, so the object the event
    bus holds never changes.

    Attributes:
        payload: One callable, or a list of callables invoked in order.
        instance: Owning instance, used for error reporting.
    """

    __slots__ = ("payload", "instance")

    def __init__(
        self,
        payload: Callable[..., Any] | list[Callable[..., Any]],
        instance: ComponentInstance | None = None,
    ) -> None:
        self.payload = payload
        self.instance = instance

    def call(self, *args: Any) -> InvocationResult:
        """Dispatch to the payload, reporting failures instead of raising.

        A list payload is snapshotted and each entry is isolated; the outcome
        is always ok with no value. A single callable's outcome carries its
        return value, or the error it raised.
        """
        payload = self.payload
        diagnostics = diagnostics_for(self.instance)
        if isinstance(payload, list):
            for handler in list(payload):
                diagnostics.invoke(handler, args, self.instance, "event handler")
            return InvocationResult()
        return diagnostics.invoke(payload, args, self.instance, "event handler")

    def __call__(self, *args: Any) -> Any:
        """Dispatch to the payload; a single callable's result is returned."""
        return self.call(*args).value

    def __repr__(self) -> str:
        return f"Invoker({self.payload!r})"


class OnceHandler:
    """One-shot wrapper: unregisters itself after its first successful call.

    ``payload`` reads and writes through to the wrapped invoker, so in-place
    listener updates reach the real handler.

    Args:
        event: Clean event name.
        invoker: The wrapped invoker.
        capture: Capture flag, passed back to ``unregister``.
        unregister: ``unregister(event, handler, capture)`` removing this wrapper.
    """

    __slots__ = ("event", "invoker", "capture", "_unregister")

    def __init__(
        self,
        event: str,
        invoker: Invoker,
        capture: bool,
        unregister: Callable[[str, Any, bool], Any],
    ) -> None:
        self.event = event
        self.invoker = invoker
        self.capture = capture
        self._unregister = unregister

    @property
    def payload(self) -> Any:
        return self.invoker.payload

    @payload.setter
    def payload(self, value: Any) -> None:
        self.invoker.payload = value

    def __call__(self, *args: Any) -> Any:
        outcome = self.invoker.call(*args)
        if outcome.ok:
            self._unregister(self.event, self, self.capture)
        return outcome.value

    def __repr__(self) -> str:
        return f"OnceHandler({self.event!r}, {self.invoker!r})"
