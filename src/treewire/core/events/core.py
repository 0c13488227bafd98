"""Listener reconciliation.

Diffs two name -> listener mappings and drives an event bus through the
supplied ``add``/``remove`` primitives, keeping registered invokers stable.

Usage:
    on = {"click": handle_click, "~!submit": handle_submit}
    update_listeners(on, {}, bus.add, bus.remove, make_once, instance)
    # on now maps names to the registered invokers; keep it as old_on for
    # the next call.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import replace
from functools import cache
from typing import TYPE_CHECKING, Any

from treewire.core.events.models import (
    CAPTURE_MARKER,
    ONCE_MARKER,
    PASSIVE_MARKER,
    Invoker,
    NormalizedEvent,
)
from treewire.diagnostics import diagnostics_for

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance

AddListener = Callable[[str, Any, bool, bool, tuple[Any, ...] | None], Any]
RemoveListener = Callable[[str, Any, bool], Any]
CreateOnceHandler = Callable[[str, Invoker, bool], Any]


@cache
def normalize_event(name: str) -> NormalizedEvent:
    """Parse modifier markers off a listener name.

    Markers are checked in fixed order: passive (``&``), then once (``~``),
    then capture (``!``). Each is stripped before the next check.

    Args:
        name: Listener name, e.g. ``"~!click"``.

    Returns:
        NormalizedEvent with the clean name and modifier flags.
    """
    passive = name.startswith(PASSIVE_MARKER)
    name = name[1:] if passive else name
    once = name.startswith(ONCE_MARKER)
    name = name[1:] if once else name
    capture = name.startswith(CAPTURE_MARKER)
    name = name[1:] if capture else name
    return NormalizedEvent(name=name, once=once, capture=capture, passive=passive)


def create_invoker(
    payload: Callable[..., Any] | list[Callable[..., Any]],
    instance: ComponentInstance | None = None,
) -> Invoker:
    """Wrap a handler (or list of handlers) in a stable invoker."""
    return Invoker(payload, instance)


def update_listeners(
    on: MutableMapping[str, Any],
    old_on: Mapping[str, Any],
    add: AddListener,
    remove: RemoveListener,
    create_once_handler: CreateOnceHandler,
    instance: ComponentInstance | None = None,
) -> MutableMapping[str, Any]:
    """Reconcile a new listener mapping against the previous one.

    ``on`` is updated in place so every name maps to the object actually
    registered on the bus; pass it back as ``old_on`` next time.

    For each name in ``on``:
        - None value: reported as an invalid handler and skipped.
        - Name new: wrapped in an Invoker (unless already one), wrapped again
          by ``create_once_handler`` when the once modifier is set, then
          ``add(name, invoker, capture, passive, params)``.
        - Value changed: the previously registered object's ``payload`` is
          replaced in place. No add/remove.
        - Value identical: nothing.
    Then ``remove(name, old, capture)`` for every name no longer present.

    A mapping value with a ``handler`` key supplies the handler, and its
    optional ``params`` are passed to ``add``.

    Args:
        on: New mapping (mutated).
        old_on: Mapping from the previous call.
        add: Bus registration primitive.
        remove: Bus unregistration primitive.
        create_once_handler: ``factory(name, invoker, capture)`` for one-shot wrappers.
        instance: Owning instance, for diagnostics.

    Returns:
        ``on``.
    """
    diagnostics = diagnostics_for(instance)
    for name, value in list(on.items()):
        event = normalize_event(name)
        current = value
        if isinstance(current, Mapping):
            params = current.get("params")
            event = replace(event, params=tuple(params) if params is not None else None)
            current = current.get("handler")
        old = old_on.get(name)

        if current is None:
            diagnostics.warn(f'Invalid handler for event "{event.name}": got None', instance)
        elif old is None:
            if not isinstance(current, Invoker):
                current = create_invoker(current, instance)
            if event.once:
                current = create_once_handler(event.name, current, event.capture)
            on[name] = current
            add(event.name, current, event.capture, event.passive, event.params)
        elif current is not old:
            old.payload = current
            on[name] = old

    for name, old in old_on.items():
        if on.get(name) is None:
            event = normalize_event(name)
            remove(event.name, old, event.capture)
    return on
