"""Runtime: owns the root definition, instance tree, diagnostics and collaborators.

Usage:
    runtime = Runtime()

    # Global registration
    runtime.mixin({"created": lambda vm: print("created", vm)})
    Card = runtime.component("card", {"props": ["title"]})

    # Instances
    app = runtime.create({"provide": {"theme": "dark"}, "el": "#app"})
    card = runtime.create({"parent": app, "props_data": {"title": "Hi"}}, definition=Card)
    runtime.destroy(app)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from treewire.config import RuntimeSettings
from treewire.core.options import ComponentDefinition, resolve_asset
from treewire.diagnostics import Diagnostics, build_sink
from treewire.runtime.initializer import InstanceInitializer
from treewire.runtime.lifecycle import LifecycleMounter, destroy, update_child_listeners
from treewire.runtime.models import InternalComponentOptions
from treewire.runtime.reactive import BindingLayer
from treewire.runtime.render import DefaultRenderScaffold
from treewire.runtime.state import DefaultStateInitializer
from treewire.runtime.tree import ComponentTree

if TYPE_CHECKING:
    from treewire.core.options import MergeStrategy
    from treewire.diagnostics import DiagnosticsSink
    from treewire.diagnostics.handling import ErrorHandler
    from treewire.runtime.instance import ComponentInstance
    from treewire.runtime.models import VNode
    from treewire.runtime.protocol import Mounter, ReactiveLayer, RenderScaffold, StateInitializer


class Runtime:
    """Component runtime facade.

    Collaborators default to the minimal implementations in this package.
    When ``state`` is omitted, the default state initializer shares the
    ``reactive`` layer.

    Args:
        settings: Runtime configuration; loaded from the environment if omitted.
        sink: Diagnostics destination; built from ``settings.sink`` if omitted.
        error_handler: Global handler for isolated errors.
        state: State initializer.
        render: Render scaffold.
        reactive: Reactive layer.
        mounter: Mount collaborator.
        strategies: Per-key merge strategy overrides.
    """

    def __init__(
        self,
        settings: RuntimeSettings | None = None,
        sink: DiagnosticsSink | None = None,
        error_handler: ErrorHandler | None = None,
        state: StateInitializer | None = None,
        render: RenderScaffold | None = None,
        reactive: ReactiveLayer | None = None,
        mounter: Mounter | None = None,
        strategies: Mapping[str, MergeStrategy] | None = None,
    ):
        self.settings = settings or RuntimeSettings()
        self.diagnostics = Diagnostics(
            sink or build_sink(self.settings.sink, self.settings.log_level),
            debug=self.settings.debug,
            silent=self.settings.silent,
            error_handler=error_handler,
        )
        self.reactive: ReactiveLayer = reactive or BindingLayer()
        if state is None:
            if not isinstance(self.reactive, BindingLayer):
                raise TypeError("A custom reactive layer requires a matching state initializer")
            state = DefaultStateInitializer(self.reactive)
        self.tree = ComponentTree()
        self.base = ComponentDefinition.root(strategies)
        self._initializer = InstanceInitializer(
            self.tree,
            self.diagnostics,
            state,
            render or DefaultRenderScaffold(),
            self.reactive,
            mounter or LifecycleMounter(),
        )

    # Definitions

    def extend(self, options: Mapping[str, Any] | None = None) -> ComponentDefinition:
        """Publish a definition extending the root definition."""
        return self.base.extend(options)

    def mixin(self, mixin: Mapping[str, Any]) -> ComponentDefinition:
        """Apply a global mixin to the root definition."""
        return self.base.mixin(mixin)

    def component(self, name: str, definition: Any = None) -> Any:
        """Register a global component, or look one up when no value is given."""
        return self._asset("component", name, definition)

    def directive(self, name: str, definition: Any = None) -> Any:
        """Register a global directive, or look one up when no value is given."""
        return self._asset("directive", name, definition)

    def filter(self, name: str, definition: Any = None) -> Any:
        """Register a global filter, or look one up when no value is given."""
        return self._asset("filter", name, definition)

    def _asset(self, asset_type: str, name: str, value: Any) -> Any:
        if value is None:
            return resolve_asset(self.base.options, asset_type, name)
        return self.base.register(asset_type, name, value)

    # Instances

    def create(
        self,
        options: Mapping[str, Any] | None = None,
        definition: ComponentDefinition | None = None,
    ) -> ComponentInstance:
        """Instantiate a definition (the root definition by default).

        Args:
            options: Creation options merged over the definition's options.
            definition: Definition to instantiate.

        Returns:
            The initialized instance.

        Raises:
            InstantiationError: If the options cannot be resolved.
        """
        return self._initializer.init(definition or self.base, options)

    def create_child(
        self,
        parent_vnode: VNode,
        parent: ComponentInstance,
        render: Any = None,
        static_render_fns: list[Any] | None = None,
    ) -> ComponentInstance:
        """Instantiate the component behind a placeholder node (renderer path).

        Raises:
            InstantiationError: If the node carries no component options.
        """
        component_options = parent_vnode.component_options
        definition = component_options.definition if component_options is not None else self.base
        options = InternalComponentOptions(
            parent=parent,
            parent_vnode=parent_vnode,
            render=render,
            static_render_fns=static_render_fns or [],
        )
        return self._initializer.init(definition, options)

    def update_listeners(
        self, instance: ComponentInstance, listeners: Mapping[str, Any] | None
    ) -> None:
        """Apply a parent's re-rendered listener set to a child."""
        update_child_listeners(instance, listeners)

    def destroy(self, instance: ComponentInstance) -> None:
        """Tear an instance and its subtree down."""
        destroy(instance)
