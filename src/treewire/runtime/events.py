"""Instance event bus and parent-declared listener wiring.

Usage:
    vm.on("save", handler)
    vm.once(["open", "close"], handler)
    vm.emit("save", payload)
    vm.off("save", handler)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Self

from treewire.core.events import Invoker, OnceHandler, update_listeners
from treewire.core.types import Handler

if TYPE_CHECKING:
    from treewire.diagnostics import Diagnostics
    from treewire.runtime.instance import ComponentInstance

HOOK_EVENT_PREFIX = "hook:"


class EventsMixin:
    """``on``/``once``/``off``/``emit`` over a per-instance event table."""

    events: dict[str, list[Handler]]
    has_hook_event: bool
    diagnostics: Diagnostics

    def on(self, event: str | list[str], fn: Handler) -> Self:
        """Subscribe ``fn`` to one or more events."""
        if isinstance(event, list):
            for name in event:
                self.on(name, fn)
            return self
        self.events.setdefault(event, []).append(fn)
        if event.startswith(HOOK_EVENT_PREFIX):
            self.has_hook_event = True
        return self

    def once(self, event: str | list[str], fn: Handler) -> Self:
        """Subscribe ``fn`` for a single emission."""

        def on_once(*args: Any) -> Any:
            self.off(event, on_once)
            return fn(*args)

        on_once.fn = fn  # type: ignore[attr-defined]
        return self.on(event, on_once)

    def off(
        self, event: str | list[str] | None = None, fn: Handler | None = None
    ) -> Self:
        """Unsubscribe.

        No arguments removes everything; an event alone removes all of its
        subscribers; event and fn removes that subscriber (also matching
        ``once`` wrappers of fn).
        """
        if event is None:
            self.events.clear()
            return self
        if isinstance(event, list):
            for name in event:
                self.off(name, fn)
            return self
        handlers = self.events.get(event)
        if not handlers:
            return self
        if fn is None:
            del self.events[event]
            return self
        for index in range(len(handlers) - 1, -1, -1):
            handler = handlers[index]
            if handler == fn or getattr(handler, "fn", None) == fn:
                del handlers[index]
                break
        return self

    def emit(self, event: str, *args: Any) -> Self:
        """Invoke a snapshot of the event's subscribers, each isolated."""
        handlers = self.events.get(event)
        if handlers:
            info = f'event handler for "{event}"'
            for handler in list(handlers):
                self.diagnostics.invoke(handler, args, self, info)  # type: ignore[arg-type]
        return self


def _bus_for(instance: ComponentInstance) -> tuple[Any, Any, Any]:
    def add(event: str, fn: Any, capture: bool, passive: bool, params: Any) -> None:
        instance.on(event, fn)

    def remove(event: str, fn: Any, capture: bool) -> None:
        instance.off(event, fn)

    def create_once_handler(event: str, invoker: Invoker, capture: bool) -> OnceHandler:
        return OnceHandler(event, invoker, capture, remove)

    return add, remove, create_once_handler


def update_component_listeners(
    instance: ComponentInstance,
    listeners: Mapping[str, Any],
    old_listeners: Mapping[str, Any] | None = None,
) -> None:
    """Reconcile parent-declared listeners onto the instance's own bus.

    The caller's mapping is copied; the reconciled copy (holding the registered
    invokers) becomes ``instance.listeners``.
    """
    add, remove, create_once_handler = _bus_for(instance)
    instance.listeners = dict(
        update_listeners(
            dict(listeners),
            old_listeners or {},
            add,
            remove,
            create_once_handler,
            instance,
        )
    )


def init_events(instance: ComponentInstance) -> None:
    """Create the event table and register the parent's declared listeners."""
    instance.events = {}
    instance.has_hook_event = False
    instance.listeners = {}
    listeners = instance.options.get("parent_listeners")
    if listeners:
        update_component_listeners(instance, listeners)
