"""Runtime: stateful instance tree, initialization, and lifecycle.

Usage:
    from treewire.runtime import Runtime

    runtime = Runtime()
    vm = runtime.create({"data": lambda vm: {"count": 0}})
"""

from treewire.runtime.allocator import InstanceAllocator
from treewire.runtime.events import HOOK_EVENT_PREFIX, EventsMixin, update_component_listeners
from treewire.runtime.initializer import InstanceInitializer, init_internal_component
from treewire.runtime.inject import init_injections, init_provide, resolve_inject
from treewire.runtime.instance import ComponentInstance
from treewire.runtime.lifecycle import (
    LifecycleMounter,
    call_hook,
    destroy,
    init_lifecycle,
    update_child_listeners,
)
from treewire.runtime.models import InternalComponentOptions, VNode, VNodeComponentOptions
from treewire.runtime.protocol import Mounter, ReactiveLayer, RenderScaffold, StateInitializer
from treewire.runtime.reactive import Binding, BindingLayer
from treewire.runtime.render import DefaultRenderScaffold, resolve_slots
from treewire.runtime.runtime import Runtime
from treewire.runtime.state import DefaultStateInitializer
from treewire.runtime.tree import ComponentTree

__all__ = [
    # Facade
    "Runtime",
    # Tree
    "ComponentInstance",
    "ComponentTree",
    "InstanceAllocator",
    # Initialization
    "InstanceInitializer",
    "init_internal_component",
    "InternalComponentOptions",
    "VNode",
    "VNodeComponentOptions",
    # Lifecycle
    "call_hook",
    "destroy",
    "init_lifecycle",
    "update_child_listeners",
    "LifecycleMounter",
    # Injection
    "init_injections",
    "init_provide",
    "resolve_inject",
    # Events
    "HOOK_EVENT_PREFIX",
    "EventsMixin",
    "update_component_listeners",
    # Collaborators
    "Mounter",
    "ReactiveLayer",
    "RenderScaffold",
    "StateInitializer",
    "Binding",
    "BindingLayer",
    "DefaultRenderScaffold",
    "DefaultStateInitializer",
    "resolve_slots",
]
