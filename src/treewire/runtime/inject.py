"""Provide/inject: named values threaded from ancestors to descendants.

Usage:
    Root = base.extend({"provide": lambda vm: {"theme": "dark"}})
    Leaf = base.extend({"inject": {"theme": {"default": "light"}}})
    # A Leaf anywhere under a Root instance resolves vm["theme"] == "dark"
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from treewire.core.options import OBSERVER_MARKER

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance
    from treewire.runtime.protocol import ReactiveLayer


def resolve_inject(
    inject: Mapping[str, Mapping[str, Any]] | None, instance: ComponentInstance
) -> dict[str, Any] | None:
    """Resolve declared injections by walking up the parent handles.

    For each key, in declaration order, the lookup name is ``from`` (the key
    itself by default). The walk starts at the instance itself; the first node
    whose provided values hold the lookup name wins. With no provider, a
    ``default`` is used (called with the instance when callable, a failing
    call is reported and leaves the key out); without one the key is left out
    and reported.

    Args:
        inject: Normalized inject declarations (``{key: {"from": ..., ...}}``).
        instance: Instance being initialized.

    Returns:
        Resolved values by key, or None if nothing is declared.
    """
    if not inject:
        return None
    result: dict[str, Any] = {}
    for key, declaration in inject.items():
        if key == OBSERVER_MARKER:
            continue
        provide_key = declaration.get("from", key)
        for source in instance.ancestors():
            provided = source.provided
            if provided is not None and provide_key in provided:
                result[key] = provided[provide_key]
                break
        else:
            if "default" in declaration:
                default = declaration["default"]
                if not callable(default):
                    result[key] = default
                    continue
                outcome = instance.diagnostics.invoke(
                    default, (instance,), instance, f'default value for injection "{key}"'
                )
                if outcome.ok:
                    result[key] = outcome.value
            else:
                instance.diagnostics.warn(f'Injection "{key}" not found', instance)
    return result


def _mutation_guard(instance: ComponentInstance, key: str) -> Any:
    def on_illegal_write() -> None:
        instance.diagnostics.warn(
            "Avoid mutating an injected value directly since the changes will be "
            "overwritten whenever the provided component re-renders. "
            f'injection being mutated: "{key}"',
            instance,
        )

    return on_illegal_write


def register_resolved(
    instance: ComponentInstance, resolved: Mapping[str, Any], reactive: ReactiveLayer
) -> None:
    """Bind resolved injections on the instance with tracking disabled.

    Development builds attach a guard reporting direct writes.
    """
    guarded = instance.diagnostics.debug
    reactive.toggle_observing(False)
    try:
        for key, value in resolved.items():
            reactive.define_reactive(
                instance, key, value, _mutation_guard(instance, key) if guarded else None
            )
    finally:
        reactive.toggle_observing(True)
    instance.injected = MappingProxyType(dict(resolved))


def init_injections(instance: ComponentInstance, reactive: ReactiveLayer) -> None:
    """Resolve and register the instance's injections (before its state)."""
    resolved = resolve_inject(instance.options.get("inject"), instance)
    if resolved:
        register_resolved(instance, resolved, reactive)


def init_provide(instance: ComponentInstance) -> None:
    """Capture provided values after state initialization.

    A callable ``provide`` is invoked with the instance; errors are reported
    and leave the instance providing nothing.
    """
    provide = instance.options.get("provide")
    if not provide:
        return
    if callable(provide):
        outcome = instance.diagnostics.invoke(provide, (instance,), instance, "provide()")
        if outcome.ok and outcome.value is not None:
            instance.provided = outcome.value
    else:
        instance.provided = provide
