"""Pure functions for per-key merge strategies.

Each strategy combines an ancestor (parent) value with a descendant (child)
value for one configuration key. None means "not declared on that side".
Strategies never mutate either input.
"""

from __future__ import annotations

import warnings
from collections import ChainMap
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from treewire.core.options.models import OBSERVER_MARKER
from treewire.errors import OptionsError

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list | tuple):
        return list(value)
    return [value]


# Hooks


def dedupe_hooks(hooks: list[Callable[..., Any]]) -> list[Callable[..., Any]]:
    """Drop repeated hooks (by identity), keeping first occurrences in order.

    Args:
        hooks: Concatenated hook list.

    Returns:
        New list without duplicates.
    """
    seen: set[int] = set()
    result = []
    for hook in hooks:
        if id(hook) not in seen:
            seen.add(id(hook))
            result.append(hook)
    return result


def merge_hooks(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> list[Callable[..., Any]] | None:
    """Concatenate ancestor hooks followed by own hooks.

    Args:
        parent: Ancestor hook list (already merged), or None.
        child: Own hook: a callable or a list of callables, or None.
        instance: Unused.
        key: Hook name, for error messages.

    Returns:
        Ordered, de-duplicated hook list, or None if neither side declares it.

    Raises:
        OptionsError: If the own value is not a callable or list of callables.
    """
    if child is None:
        return dedupe_hooks(list(parent)) if parent is not None else None
    own = _as_list(child)
    for hook in own:
        if not callable(hook):
            raise OptionsError(
                f'Invalid value for hook "{key}": expected a callable, got {type(hook).__name__}'
            )
    return dedupe_hooks([*(parent or ()), *own])


# Declarations


def merge_extend(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> Any:
    """Own entries override same-named ancestor entries; the rest are kept.

    Used for props, methods, inject and computed.

    Raises:
        OptionsError: If the own value is not a mapping.
    """
    if child is not None and not isinstance(child, Mapping):
        raise OptionsError(
            f'Invalid value for option "{key}": expected a mapping, got {type(child).__name__}'
        )
    if parent is None:
        return child
    merged = dict(parent)
    if child:
        merged.update(child)
    return merged


def merge_data(to: Mapping[str, Any], frm: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two data mappings, ``to`` winning on conflicts.

    Nested mappings present on both sides are merged recursively. Neither input
    is mutated.

    Args:
        to: Own (winning) data.
        frm: Ancestor data.

    Returns:
        New merged mapping.
    """
    merged = dict(to)
    for key, value in frm.items():
        if key == OBSERVER_MARKER:
            continue
        if key not in merged:
            merged[key] = value
        elif (
            merged[key] is not value
            and isinstance(merged[key], Mapping)
            and isinstance(value, Mapping)
        ):
            merged[key] = merge_data(merged[key], value)
    return merged


def _evaluate(value: Any, instance: ComponentInstance | None) -> Mapping[str, Any]:
    result = value(instance) if callable(value) else value
    return result if result is not None else {}


def merge_data_or_fn(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> Any:
    """Merge data/provide declarations.

    Plain mappings on both sides merge eagerly. If either side is a factory,
    the result is a factory ``merged(instance)`` evaluating both lazily.

    In definition merges (no instance) a non-callable ``data`` is reported and
    the ancestor value is kept.
    """
    if instance is None and key == "data" and child is not None and not callable(child):
        warnings.warn(
            'The "data" option should be a function that returns a per-instance value '
            "in component definitions.",
            stacklevel=4,
        )
        return parent
    if child is None:
        return parent
    if parent is None:
        return child
    if not callable(child) and not callable(parent):
        return merge_data(child, parent)

    def merged_data(vm: ComponentInstance | None = None) -> dict[str, Any]:
        return merge_data(_evaluate(child, vm), _evaluate(parent, vm))

    return merged_data


def merge_watch(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> Any:
    """Per watched key, ancestor watchers then own watchers."""
    if child is None:
        return parent
    if parent is None:
        return {name: _as_list(handler) for name, handler in child.items()}
    merged = {name: _as_list(handler) for name, handler in parent.items()}
    for name, handler in child.items():
        merged[name] = [*merged.get(name, ()), *_as_list(handler)]
    return merged


# Registries


def _leaf_maps(mapping: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    if isinstance(mapping, ChainMap):
        for layer in mapping.maps:
            yield from _leaf_maps(layer)
    else:
        yield mapping


def _own_entries(child: ChainMap[str, Any], parent: Any) -> dict[str, Any]:
    inherited = {id(layer) for layer in _leaf_maps(parent)} if parent is not None else set()
    own: dict[str, Any] = {}
    for layer in reversed(list(_leaf_maps(child))):
        if id(layer) not in inherited:
            own.update(layer)
    return own


def merge_assets(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> ChainMap[str, Any]:
    """Build a registry chained onto the ancestor registry.

    Own entries shadow ancestor entries of the same name; the ancestor's
    registry is never written to. A chained own value contributes only the
    layers it does not share with ``parent``, so inherited entries keep
    resolving through the live ancestor registry.

    Raises:
        OptionsError: If the own value is not a mapping.
    """
    if child is not None and not isinstance(child, Mapping):
        raise OptionsError(
            f'Invalid value for option "{key}": expected a mapping, got {type(child).__name__}'
        )
    registry: ChainMap[str, Any] = ChainMap({}, parent) if parent is not None else ChainMap({})
    if isinstance(child, ChainMap):
        child = _own_entries(child, parent)
    if child:
        registry.maps[0].update(child)
    return registry


# Scalars


def merge_default(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> Any:
    """Own value if present, else ancestor value."""
    return parent if child is None else child


def merge_creation_only(
    parent: Any, child: Any, instance: ComponentInstance | None = None, key: str = ""
) -> Any:
    """Default merge, reporting use outside instance creation."""
    if instance is None and child is not None:
        warnings.warn(
            f'option "{key}" can only be used during instance creation',
            stacklevel=4,
        )
    return merge_default(parent, child, instance, key)
