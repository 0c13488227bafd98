"""Default reactive layer: plain bindings with write guards.

Real change tracking belongs to the host's reactive layer; this one records
bindings on the instance and whether tracking was on when each was defined.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance


@dataclass(slots=True)
class Binding:
    """One named value on an instance.

    Attributes:
        value: Current value (ignored when ``getter`` is set).
        on_illegal_write: Called before each external write; the write proceeds.
        getter: Makes the binding computed and read-only.
        observed: Whether dependency tracking was on when it was defined.
    """

    value: Any = None
    on_illegal_write: Callable[[], None] | None = None
    getter: Callable[[], Any] | None = None
    observed: bool = True

    def get(self) -> Any:
        if self.getter is not None:
            return self.getter()
        return self.value

    def set(self, value: Any) -> None:
        if self.getter is not None:
            raise AttributeError("Computed binding has no setter")
        if self.on_illegal_write is not None:
            self.on_illegal_write()
        self.value = value


class BindingLayer:
    """ReactiveLayer storing Binding objects in ``instance.bindings``."""

    def __init__(self) -> None:
        self.observing = True

    def define_reactive(
        self,
        target: ComponentInstance,
        key: str,
        value: Any,
        on_illegal_write: Callable[[], None] | None = None,
    ) -> None:
        target.bindings[key] = Binding(
            value=value, on_illegal_write=on_illegal_write, observed=self.observing
        )

    def define_computed(
        self, target: ComponentInstance, key: str, getter: Callable[[], Any]
    ) -> None:
        target.bindings[key] = Binding(getter=getter, observed=self.observing)

    def toggle_observing(self, enabled: bool) -> None:
        self.observing = enabled
