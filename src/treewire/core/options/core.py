"""Options resolution: merging and cached chain resolution.

Usage:
    base = ComponentDefinition.root()
    Card = base.extend({"name": "card", "created": on_created})
    options = resolve_options(Card)
    assert resolve_options(Card) is options  # cached until an ancestor changes
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from treewire.core.options.models import MergeStrategy, merge_kind
from treewire.core.types import Options
from treewire.core.options.normalize import (
    camelize,
    normalize_directives,
    normalize_inject,
    normalize_props,
    validate_component_name,
)
from treewire.errors import OptionsError

if TYPE_CHECKING:
    from treewire.core.options.definition import ComponentDefinition
    from treewire.runtime.instance import ComponentInstance


def _options_of(value: Any) -> Mapping[str, Any]:
    """Accept either an options mapping or a definition (use its options)."""
    if isinstance(value, Mapping):
        return value
    options = getattr(value, "options", None)
    if isinstance(options, Mapping):
        return options
    raise OptionsError(f"Expected an options mapping or a definition, got {type(value).__name__}")


def merge_options(
    parent: Mapping[str, Any],
    child: Any,
    instance: ComponentInstance | None = None,
    strategies: Mapping[str, MergeStrategy] | None = None,
) -> Options:
    """Merge descendant options onto ancestor options, key by key.

    The child's ``extends`` and then each of its ``mixins`` are folded into the
    parent first, unless the child is a root definition's options.

    Args:
        parent: Ancestor (already resolved) options.
        child: Descendant options mapping, or a definition.
        instance: Instance being created, or None for definition merges.
        strategies: Per-key overrides of the built-in strategy table.

    Returns:
        New merged options.

    Raises:
        OptionsError: If the configuration is malformed.
    """
    child = dict(_options_of(child))

    for name in child.get("components") or {}:
        validate_component_name(name)

    normalize_props(child)
    normalize_inject(child)
    normalize_directives(child)

    if "_base" not in child:
        extends = child.get("extends")
        if extends is not None:
            parent = merge_options(parent, extends, instance, strategies)
        mixins = child.get("mixins")
        if mixins is not None:
            if not isinstance(mixins, list | tuple):
                raise OptionsError(
                    f'Invalid value for option "mixins": expected a list, '
                    f"got {type(mixins).__name__}"
                )
            for mixin in mixins:
                parent = merge_options(parent, mixin, instance, strategies)

    def merge_field(key: str) -> Any:
        strategy = (strategies or {}).get(key) or merge_kind(key).get_strategy()
        return strategy(parent.get(key), child.get(key), instance, key)

    options: dict[str, Any] = {}
    for key in parent:
        options[key] = merge_field(key)
    for key in child:
        if key not in parent:
            options[key] = merge_field(key)
    return options


def resolve_modified_options(definition: ComponentDefinition) -> dict[str, Any] | None:
    """Find keys changed on a definition since its last sealed snapshot.

    Args:
        definition: Definition to inspect.

    Returns:
        Mapping of late-modified keys to their current values, or None.
    """
    modified: dict[str, Any] | None = None
    latest = definition.options
    sealed = definition.sealed_options
    for key in latest:
        if key not in sealed or latest[key] is not sealed[key]:
            if modified is None:
                modified = {}
            modified[key] = latest[key]
    return modified


def register_self(options: dict[str, Any], definition: ComponentDefinition) -> None:
    """Register a named definition in its own components registry."""
    name = options.get("name")
    registry = options.get("components")
    if name and registry is not None:
        registry[name] = definition


def resolve_options(definition: ComponentDefinition) -> Options:
    """Resolve a definition's options, recomputing only on change.

    The ancestor chain is resolved first, root-most ancestor first. The options
    are recomputed when the ancestor's resolution is a different object than
    the one cached at this definition's last resolution, or when keys were
    written onto this definition since its last sealed snapshot. Late
    modifications are folded into the extension options before re-merging, and
    the result is re-sealed. Either way the recomputed options are a new
    object, so descendants notice the change by identity. Otherwise the cached
    object is returned by reference.

    Args:
        definition: Definition to resolve.

    Returns:
        The definition's resolved options.
    """
    options = definition.options
    modified = resolve_modified_options(definition)
    if definition.super_definition is None:
        if modified:
            options = dict(options)
            definition.options = options
            definition.sealed_options = dict(options)
        return options

    super_options = resolve_options(definition.super_definition)
    if super_options is not definition.super_options or modified:
        definition.super_options = super_options
        if modified:
            definition.extend_options.update(modified)
        options = merge_options(
            super_options, definition.extend_options, None, definition.strategies
        )
        register_self(options, definition)
        definition.options = options
        definition.sealed_options = dict(options)
    return options


def resolve_asset(options: Mapping[str, Any], asset_type: str, asset_id: str) -> Any:
    """Look up a registered component, directive or filter.

    Tries the id as given, camelized, then capitalized, along the whole
    registry chain.

    Args:
        options: Resolved options holding the registries.
        asset_type: ``component``, ``directive`` or ``filter``.
        asset_id: Registered name.

    Returns:
        The asset, or None if not registered.
    """
    registry = options.get(f"{asset_type}s")
    if not registry:
        return None
    camelized = camelize(asset_id)
    for candidate in (asset_id, camelized, camelized[:1].upper() + camelized[1:]):
        if candidate in registry:
            return registry[candidate]
    return None
