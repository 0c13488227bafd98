"""Component instances: runtime nodes of the component tree.

Usage:
    vm = runtime.create({"data": lambda vm: {"count": 0}})
    vm["count"] += 1
    if "count" in vm:
        ...
    parent = vm.parent
    children = vm.child_instances
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from treewire.runtime.events import EventsMixin
from treewire.runtime.reactive import Binding

if TYPE_CHECKING:
    from treewire.core.identity import InstanceId
    from treewire.core.options import ComponentDefinition
    from treewire.diagnostics import Diagnostics
    from treewire.runtime.models import VNode
    from treewire.runtime.tree import ComponentTree


class ComponentInstance(EventsMixin):
    """One runtime node created from a definition plus creation options.

    The parent link is a handle set once during initialization and never
    reassigned. Bindings (props, data, injections, ...) are read and written
    with ``instance[key]``.

    Args:
        uid: Process-unique identifier.
        handle: Arena handle in ``tree``.
        definition: Definition the instance was created from.
        tree: Arena holding this instance and its relatives.
        diagnostics: Reporter shared by the runtime.
    """

    def __init__(
        self,
        uid: int,
        handle: InstanceId,
        definition: ComponentDefinition,
        tree: ComponentTree,
        diagnostics: Diagnostics,
    ):
        self.uid = uid
        self.handle = handle
        self.definition = definition
        self.tree = tree
        self.diagnostics = diagnostics
        self.options: Mapping[str, Any] = {}

        # Tree
        self.parent_handle: InstanceId | None = None
        self.root_handle: InstanceId = handle
        self.children: list[InstanceId] = []
        self.refs: dict[str, Any] = {}

        # Lifecycle flags
        self.watcher: Any = None
        self.inactive: bool | None = None
        self.direct_inactive = False
        self.is_mounted = False
        self.is_destroyed = False
        self.is_being_destroyed = False
        self.el: Any = None

        # Events
        self.events: dict[str, list[Any]] = {}
        self.has_hook_event = False
        self.listeners: dict[str, Any] = {}

        # Render context
        self.vnode: VNode | None = None
        self.parent_vnode: VNode | None = None
        self.render_context: ComponentInstance | None = None
        self.slots: dict[str, list[VNode]] = {}
        self.scoped_slots: dict[str, Any] = {}
        self.attrs: dict[str, Any] = {}
        self.static_trees: list[Any] | None = None

        # State
        self.bindings: dict[str, Binding] = {}
        self.data: dict[str, Any] = {}
        self.watchers: list[tuple[str, Any]] = []
        self.injected: Mapping[str, Any] = MappingProxyType({})
        self.provided: Mapping[str, Any] | None = None

    @property
    def parent(self) -> ComponentInstance | None:
        return self.tree.get(self.parent_handle)

    @property
    def root(self) -> ComponentInstance:
        return self.tree.get(self.root_handle) or self

    @property
    def child_instances(self) -> list[ComponentInstance]:
        return [child for child in map(self.tree.get, self.children) if child is not None]

    @property
    def name(self) -> str | None:
        return self.options.get("name")

    def ancestors(self) -> Iterator[ComponentInstance]:
        """Yield this instance, then each ancestor up to the root."""
        current: ComponentInstance | None = self
        while current is not None:
            yield current
            current = current.parent

    def __getitem__(self, key: str) -> Any:
        return self.bindings[key].get()

    def __setitem__(self, key: str, value: Any) -> None:
        binding = self.bindings.get(key)
        if binding is None:
            self.bindings[key] = Binding(value=value)
        else:
            binding.set(value)

    def __contains__(self, key: object) -> bool:
        return key in self.bindings

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<ComponentInstance uid={self.uid}{label}>"
