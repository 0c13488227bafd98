"""Component definitions: static blueprints forming a single-inheritance chain.

Usage:
    base = ComponentDefinition.root()
    Button = base.extend({"name": "button", "props": ["label"]})
    PrimaryButton = Button.extend({"created": lambda vm: ...})

    # Global mixin: replaces base.options, descendants re-resolve lazily
    base.mixin({"created": track})
"""

from __future__ import annotations

import itertools
from collections import ChainMap
from collections.abc import Mapping
from typing import Any

from treewire.core.options.core import merge_options, register_self, resolve_options
from treewire.core.options.models import ASSET_TYPES, MergeStrategy
from treewire.core.options.normalize import validate_component_name

_cid = itertools.count()


class ComponentDefinition:
    """A published component blueprint.

    Immutable once published except for the bookkeeping snapshots:
    ``options`` (latest resolution) and ``sealed_options`` (snapshot used to
    detect late modification), plus the cached ``super_options``.

    Args:
        options: Resolved options for this definition.
        super_definition: Parent definition in the extends chain, None for a root.
        extend_options: Own extension options this definition was created from.
        strategies: Per-key merge strategy overrides, inherited by descendants.
    """

    def __init__(
        self,
        options: dict[str, Any],
        super_definition: ComponentDefinition | None = None,
        extend_options: dict[str, Any] | None = None,
        strategies: Mapping[str, MergeStrategy] | None = None,
    ):
        self.cid = next(_cid)
        self.options = options
        self.super_definition = super_definition
        self.super_options = super_definition.options if super_definition is not None else None
        self.extend_options: dict[str, Any] = extend_options if extend_options is not None else {}
        self.sealed_options: dict[str, Any] = dict(options)
        self.strategies = strategies

    @classmethod
    def root(cls, strategies: Mapping[str, MergeStrategy] | None = None) -> ComponentDefinition:
        """Create a root definition with empty global registries.

        Args:
            strategies: Per-key merge strategy overrides for the whole chain.

        Returns:
            Root definition (no super definition).
        """
        options: dict[str, Any] = {f"{asset}s": ChainMap({}) for asset in ASSET_TYPES}
        definition = cls(options, strategies=strategies)
        options["_base"] = definition
        definition.sealed_options = dict(options)
        return definition

    @property
    def name(self) -> str | None:
        return self.options.get("name")

    @property
    def base(self) -> ComponentDefinition:
        """The root definition of this chain."""
        return self.options.get("_base") or self

    def extend(self, extend_options: Mapping[str, Any] | None = None) -> ComponentDefinition:
        """Publish a sub-definition inheriting from this one.

        Args:
            extend_options: Own options of the new definition.

        Returns:
            The new definition, registered under its name in its own registry.
        """
        own = dict(extend_options or {})
        name = own.get("name") or self.options.get("name")
        if name:
            validate_component_name(name)
        options = merge_options(self.options, own, None, self.strategies)
        sub = ComponentDefinition(options, self, own, self.strategies)
        register_self(options, sub)
        sub.sealed_options = dict(options)
        return sub

    def mixin(self, mixin: Mapping[str, Any]) -> ComponentDefinition:
        """Merge a mixin into this definition's options.

        Replaces ``options`` with a new object, so descendants detect the change
        by identity on their next resolution.
        """
        self.options = merge_options(self.options, mixin, None, self.strategies)
        return self

    def register(self, asset_type: str, name: str, value: Any) -> Any:
        """Register a component, directive or filter on this definition.

        Plain-mapping components are extended from the root definition first;
        function directives expand to ``{"bind": fn, "update": fn}``.

        Args:
            asset_type: ``component``, ``directive`` or ``filter``.
            name: Registration name.
            value: The asset.

        Returns:
            The registered value.

        Raises:
            ValueError: If asset_type is unknown.
        """
        if asset_type not in ASSET_TYPES:
            raise ValueError(f"Unknown asset type: {asset_type!r}")
        if asset_type == "component":
            validate_component_name(name)
            if isinstance(value, Mapping):
                value = self.base.extend({"name": name, **value})
        elif asset_type == "directive" and callable(value):
            value = {"bind": value, "update": value}
        self.options[f"{asset_type}s"][name] = value
        return value

    def resolve(self) -> dict[str, Any]:
        """Shorthand for resolve_options(self)."""
        return resolve_options(self)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<ComponentDefinition cid={self.cid}{label}>"
