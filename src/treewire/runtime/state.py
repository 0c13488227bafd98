"""Default state initializer: props, methods, data, computed, watch.

Dependency tracking and re-render scheduling belong to the host's reactive
layer; this initializer only creates the bindings.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from types import MethodType
from typing import TYPE_CHECKING, Any

from treewire.core.options import OBSERVER_MARKER
from treewire.runtime.reactive import Binding, BindingLayer

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance


class DefaultStateInitializer:
    """StateInitializer writing into ``instance.bindings`` via a BindingLayer.

    Args:
        reactive: Layer used to define bindings.
    """

    def __init__(self, reactive: BindingLayer):
        self._reactive = reactive

    def init_state(self, instance: ComponentInstance, options: Mapping[str, Any]) -> None:
        instance.watchers = []
        if options.get("props"):
            self._init_props(instance, options["props"], options.get("props_data") or {})
        if options.get("methods"):
            self._init_methods(instance, options["methods"])
        if options.get("data") is not None:
            self._init_data(instance, options["data"])
        if options.get("computed"):
            self._init_computed(instance, options["computed"])
        if options.get("watch"):
            for key, handlers in options["watch"].items():
                for handler in handlers if isinstance(handlers, list) else [handlers]:
                    instance.watchers.append((key, handler))

    def _init_props(
        self,
        instance: ComponentInstance,
        props: Mapping[str, Mapping[str, Any]],
        props_data: Mapping[str, Any],
    ) -> None:
        is_root = instance.parent_handle is None
        # Props passed down from a parent are already observed by the parent
        if not is_root:
            self._reactive.toggle_observing(False)
        try:
            for key, declaration in props.items():
                if key in props_data:
                    value = props_data[key]
                else:
                    default = declaration.get("default")
                    value = default(instance) if callable(default) else default
                self._reactive.define_reactive(instance, key, value)
        finally:
            self._reactive.toggle_observing(True)

    def _init_methods(
        self, instance: ComponentInstance, methods: Mapping[str, Callable[..., Any]]
    ) -> None:
        props = instance.options.get("props") or {}
        for key, method in methods.items():
            if not callable(method):
                instance.diagnostics.warn(
                    f'Method "{key}" has type "{type(method).__name__}" in the component '
                    "definition. Did you reference the function correctly?",
                    instance,
                )
                continue
            if key in props:
                instance.diagnostics.warn(
                    f'Method "{key}" has already been defined as a prop.', instance
                )
            instance.bindings[key] = Binding(value=MethodType(method, instance), observed=False)

    def _init_data(self, instance: ComponentInstance, data: Any) -> None:
        if callable(data):
            outcome = instance.diagnostics.invoke(data, (instance,), instance, "data()")
            data = outcome.value if outcome.ok else {}
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            instance.diagnostics.warn("data functions should return a mapping", instance)
            data = {}
        props = instance.options.get("props") or {}
        methods = instance.options.get("methods") or {}
        instance.data = dict(data)
        for key, value in data.items():
            if key == OBSERVER_MARKER:
                continue
            if key in methods:
                instance.diagnostics.warn(
                    f'Method "{key}" has already been defined as a data property.', instance
                )
            if key in props:
                instance.diagnostics.warn(
                    f'The data property "{key}" is already declared as a prop. '
                    "Use prop default value instead.",
                    instance,
                )
                continue
            self._reactive.define_reactive(instance, key, value)

    def _init_computed(self, instance: ComponentInstance, computed: Mapping[str, Any]) -> None:
        for key, definition in computed.items():
            getter = definition.get("get") if isinstance(definition, Mapping) else definition
            if not callable(getter):
                instance.diagnostics.warn(
                    f'Getter is missing for computed property "{key}".', instance
                )
                continue
            if key in instance.bindings:
                instance.diagnostics.warn(
                    f'The computed property "{key}" is already defined on the instance.',
                    instance,
                )
                continue
            self._reactive.define_computed(instance, key, partial(getter, instance))
