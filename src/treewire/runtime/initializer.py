"""Instance initialization: the fixed eleven-phase construction sequence.

Usage:
    initializer = InstanceInitializer(tree, diagnostics, state, render, reactive, mounter)
    vm = initializer.init(Card, {"props_data": {"title": "hi"}})

    # Renderer-created child (fast path)
    child = initializer.init(Child, InternalComponentOptions(parent=vm, parent_vnode=vnode))
"""

from __future__ import annotations

import itertools
from collections import ChainMap
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from treewire.core.options import merge_options, resolve_options
from treewire.errors import InstantiationError, OptionsError
from treewire.runtime.events import init_events
from treewire.runtime.inject import init_injections, init_provide
from treewire.runtime.instance import ComponentInstance
from treewire.runtime.lifecycle import call_hook, init_lifecycle
from treewire.runtime.models import InternalComponentOptions

if TYPE_CHECKING:
    from treewire.core.options import ComponentDefinition
    from treewire.diagnostics import Diagnostics
    from treewire.runtime.protocol import Mounter, ReactiveLayer, RenderScaffold, StateInitializer
    from treewire.runtime.tree import ComponentTree

_uid = itertools.count()


def init_internal_component(
    options: InternalComponentOptions, resolved: Mapping[str, Any]
) -> ChainMap[str, Any]:
    """Build the options of a renderer-created child without a full merge.

    Only the per-instance fields are stored; everything else is read through
    to the definition's resolved options.

    Args:
        options: Internal creation options.
        resolved: The definition's resolved options.

    Returns:
        ChainMap of the per-instance fields over ``resolved``.

    Raises:
        OptionsError: If the placeholder node carries no component options.
    """
    parent_vnode = options.parent_vnode
    component_options = parent_vnode.component_options
    if component_options is None:
        raise OptionsError("Internal component creation requires a component placeholder node")
    own: dict[str, Any] = {
        "parent": options.parent,
        "parent_vnode": parent_vnode,
        "props_data": component_options.props_data,
        "parent_listeners": component_options.listeners,
        "render_children": component_options.children,
        "component_tag": component_options.tag,
    }
    if options.render is not None:
        own["render"] = options.render
        own["static_render_fns"] = options.static_render_fns
    return ChainMap(own, resolved)


class InstanceInitializer:
    """Drives instance construction through the collaborators.

    Args:
        tree: Arena the instances live in.
        diagnostics: Reporter for isolated errors and warnings.
        state: Populates props, methods, data, computed and watch.
        render: Exposes the render context.
        reactive: Defines reactive bindings for injections.
        mounter: Mounts instances created with ``el``.
    """

    def __init__(
        self,
        tree: ComponentTree,
        diagnostics: Diagnostics,
        state: StateInitializer,
        render: RenderScaffold,
        reactive: ReactiveLayer,
        mounter: Mounter,
    ):
        self.tree = tree
        self.diagnostics = diagnostics
        self.state = state
        self.render = render
        self.reactive = reactive
        self.mounter = mounter

    def init(
        self,
        definition: ComponentDefinition,
        options: Mapping[str, Any] | InternalComponentOptions | None = None,
    ) -> ComponentInstance:
        """Create, wire and (optionally) mount one instance.

        Phases run in a fixed order: identity, options, lifecycle, events,
        render, ``before_create``, injections, state, provide, ``created``,
        mount. Hooks and user callbacks are isolated; only options resolution
        is fatal.

        Args:
            definition: Definition to instantiate.
            options: Creation options, or InternalComponentOptions for a
                renderer-created child.

        Returns:
            The initialized instance, stored in the tree.

        Raises:
            InstantiationError: If options resolution fails. The handle is
                released and nothing is attached.
        """
        handle = self.tree.allocate()
        instance = ComponentInstance(next(_uid), handle, definition, self.tree, self.diagnostics)

        try:
            resolved = resolve_options(definition)
            if isinstance(options, InternalComponentOptions):
                instance.options = init_internal_component(options, resolved)
            else:
                instance.options = merge_options(
                    resolved, options or {}, instance, definition.strategies
                )
        except Exception as exc:
            self.tree.release(handle)
            raise InstantiationError(
                f"Failed to resolve options for {definition!r}: {exc}"
            ) from exc

        self.tree.insert(handle, instance)
        init_lifecycle(instance)
        init_events(instance)
        self.render.init_render(instance)
        call_hook(instance, "before_create")
        init_injections(instance, self.reactive)
        try:
            self.state.init_state(instance, instance.options)
        except Exception as exc:
            self.diagnostics.handle_error(exc, instance, "init_state")
        init_provide(instance)
        call_hook(instance, "created")

        el = instance.options.get("el")
        if el is not None:
            self.mounter.mount(instance, el)
        return instance
