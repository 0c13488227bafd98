"""Protocols for the external collaborators the initializer drives.

Each has a minimal default implementation in this package (BindingLayer,
DefaultStateInitializer, DefaultRenderScaffold, LifecycleMounter) so the engine
runs stand-alone; hosts swap in their own through Runtime.

Usage:
    runtime = Runtime(state=MyStateInitializer(), mounter=DomMounter())
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance


@runtime_checkable
class ReactiveLayer(Protocol):
    """Reactive-property instrumentation."""

    def define_reactive(
        self,
        target: ComponentInstance,
        key: str,
        value: Any,
        on_illegal_write: Callable[[], None] | None = None,
    ) -> None:
        """Register ``key`` on ``target`` as a reactive binding.

        Args:
            target: Instance receiving the binding.
            key: Binding name.
            value: Initial value.
            on_illegal_write: Called (not blocking) before each external write.
        """
        ...

    def toggle_observing(self, enabled: bool) -> None:
        """Enable or disable dependency tracking for values bound from now on."""
        ...


@runtime_checkable
class StateInitializer(Protocol):
    """Populates props, methods, data, computed and watch bindings."""

    def init_state(self, instance: ComponentInstance, options: Mapping[str, Any]) -> None:
        """Initialize instance-local state. May raise user-code errors."""
        ...


@runtime_checkable
class RenderScaffold(Protocol):
    """Exposes the context a render function reads."""

    def init_render(self, instance: ComponentInstance) -> None: ...


@runtime_checkable
class Mounter(Protocol):
    """Mounts an instance onto a target surface."""

    def mount(self, instance: ComponentInstance, target: Any) -> Any: ...
