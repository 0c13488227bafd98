"""Lifecycle: tree attachment, hook chains, listener updates, and teardown.

Usage:
    call_hook(vm, "created")  # every merged hook, ancestor-first, isolated
    update_child_listeners(vm, {"click": on_click})  # parent re-rendered
    destroy(vm)
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any

from treewire.runtime.events import HOOK_EVENT_PREFIX, update_component_listeners

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance


def init_lifecycle(instance: ComponentInstance) -> None:
    """Attach to the first non-abstract parent and reset lifecycle flags."""
    options = instance.options
    parent: ComponentInstance | None = options.get("parent")
    if parent is not None and not options.get("abstract"):
        while parent.options.get("abstract") and parent.parent is not None:
            parent = parent.parent
        parent.children.append(instance.handle)

    instance.parent_handle = parent.handle if parent is not None else None
    instance.root_handle = parent.root_handle if parent is not None else instance.handle
    instance.children = []
    instance.refs = {}

    instance.watcher = None
    instance.inactive = None
    instance.direct_inactive = False
    instance.is_mounted = False
    instance.is_destroyed = False
    instance.is_being_destroyed = False


def call_hook(instance: ComponentInstance, hook: str) -> None:
    """Invoke every handler of a lifecycle hook, in order, each isolated.

    Then emits ``hook:<name>`` if anything subscribed to hook events.
    """
    handlers = instance.options.get(hook)
    if handlers:
        info = f"{hook} hook"
        for handler in handlers:
            instance.diagnostics.invoke(handler, (instance,), instance, info)
    if instance.has_hook_event:
        instance.emit(HOOK_EVENT_PREFIX + hook)


def update_child_listeners(
    instance: ComponentInstance, listeners: Mapping[str, Any] | None
) -> None:
    """Apply a parent's re-rendered listener set to a child instance."""
    update_component_listeners(instance, listeners or {}, instance.listeners)
    if isinstance(instance.options, MutableMapping):
        instance.options["parent_listeners"] = instance.listeners


class LifecycleMounter:
    """Default mount collaborator: runs the mount hooks and marks mounted."""

    def mount(self, instance: ComponentInstance, target: Any) -> ComponentInstance:
        instance.el = target
        call_hook(instance, "before_mount")
        instance.is_mounted = True
        call_hook(instance, "mounted")
        return instance


def destroy(instance: ComponentInstance) -> None:
    """Tear an instance down. Idempotent; the instance is inert afterwards.

    Order: ``before_destroy`` hook, detach from parent, destroy children,
    unregister every parent-declared listener through the reconciler,
    ``destroyed`` hook, drop remaining subscriptions, release the handle.
    """
    if instance.is_being_destroyed:
        return
    call_hook(instance, "before_destroy")
    instance.is_being_destroyed = True

    parent = instance.parent
    if (
        parent is not None
        and not parent.is_being_destroyed
        and not instance.options.get("abstract")
        and instance.handle in parent.children
    ):
        parent.children.remove(instance.handle)

    for child in instance.child_instances:
        destroy(child)
    instance.children.clear()

    update_component_listeners(instance, {}, instance.listeners)
    instance.is_destroyed = True
    call_hook(instance, "destroyed")
    instance.off()
    instance.tree.release(instance.handle)
